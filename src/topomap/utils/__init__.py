"""Utility functions for topomap.

This module provides:

- Logging setup and configuration
- Processing statistics and progress logging
"""

from topomap.utils.logging import (
    ProcessingLogger,
    ProcessingStats,
    configure_logging,
)

__all__ = [
    "ProcessingLogger",
    "ProcessingStats",
    "configure_logging",
]
