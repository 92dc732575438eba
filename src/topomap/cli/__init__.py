"""Command-line interface for topomap.

This module provides the CLI using Typer with rich output for
user-friendly feedback and progress reporting.

Key features:
- Progress bars for terrain processing
- Verbose/quiet output modes
- Dry-run mode that only reports the union of each terrain
- Detailed error reporting
"""

from topomap.cli.app import app, cli, main

__all__ = ["app", "cli", "main"]
