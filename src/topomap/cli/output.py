"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with progress bars, tables, and formatted messages.
"""

from typing import Any

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table
from rich.text import Text

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def create_progress() -> Progress:
    """Create a rich progress bar for terrain processing.

    Returns:
        Configured Progress instance with bar and time elapsed.
    """
    return Progress(
        TextColumn("  "),
        BarColumn(bar_width=40, complete_style="green", finished_style="green"),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        console=console,
        transient=False,
    )


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]Topomap[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator."""
    console.print(f"\n{SYM_STEP} {message}")


def print_layer_plan(amounts: list[float], step: float, max_edge_length: float | None) -> None:
    """Print the layer amounts that will be built.

    Args:
        amounts: Expansion amount per layer
        step: Expansion increment
        max_edge_length: Edge subdivision threshold, or None
    """
    amounts_str = ", ".join(f"{a:g}" for a in amounts)
    console.print(f"  {len(amounts)} layers {SYM_DOT} amounts {amounts_str}")
    edge_str = f"{max_edge_length:g}" if max_edge_length is not None else "off"
    console.print(f"  step {step:g} {SYM_DOT} max edge {edge_str}")


def _format_time(seconds: float) -> str:
    """Format seconds into human-readable time string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        mins = int(seconds // 60)
        secs = seconds % 60
        return f"{mins}m {secs:.1f}s"


def print_processing_info(workers: int, is_auto: bool = False) -> None:
    """Print processing configuration.

    Args:
        workers: Number of parallel workers
        is_auto: Whether the count was auto-detected
    """
    auto_suffix = " (auto)" if is_auto else ""
    console.print(f"  {workers} workers{auto_suffix} {SYM_DOT} Ctrl+C to cancel")


def print_summary_table(summaries: list[dict[str, Any]]) -> None:
    """Print the union summary of each terrain (dry run).

    Args:
        summaries: Dictionaries from TerrainProcessor.summarize()
    """
    table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
    table.add_column("Terrain")
    table.add_column("Format")
    table.add_column("Polygons", justify="right")
    table.add_column("Clockwise", justify="right")
    table.add_column("Components", justify="right")
    table.add_column("Area", justify="right")
    for s in summaries:
        table.add_row(
            Text(s["source"]),
            s["format"],
            str(s["polygons"]),
            str(s["clockwise"]),
            str(s["components"]),
            f"{s['area']:,.1f}",
        )
    console.print(table)


def print_success(
    output_paths: list[str],
    total_time_s: float,
    processed: int,
    layers: int,
    curves: int,
    errors: int,
    avg_time_ms: float | None = None,
    min_time_ms: float | None = None,
    max_time_ms: float | None = None,
) -> None:
    """Print success message with summary.

    Args:
        output_paths: Paths of written layer files
        total_time_s: Total processing time in seconds
        processed: Number of terrains processed
        layers: Total number of layers built
        curves: Total number of curves built
        errors: Number of errors encountered
        avg_time_ms: Average processing time per terrain in milliseconds
        min_time_ms: Minimum processing time per terrain in milliseconds
        max_time_ms: Maximum processing time per terrain in milliseconds
    """
    time_str = _format_time(total_time_s)

    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {time_str}")

    for path in output_paths:
        line = Text("  ")
        line.append(path, style="bold")
        console.print(line)

    error_style = "red" if errors > 0 else "green"
    console.print(
        f"  {processed} terrains {SYM_DOT} {layers} layers {SYM_DOT} {curves} curves {SYM_DOT} "
        f"[{error_style}]{errors} errors[/{error_style}]"
    )

    if avg_time_ms is not None:
        timing_str = f"{avg_time_ms:.1f}ms avg"
        if min_time_ms is not None and max_time_ms is not None:
            timing_str += f" ({min_time_ms:.1f}-{max_time_ms:.1f}ms range)"
        console.print(f"  {timing_str}")


def print_errors(errors: list[tuple[str, str]]) -> None:
    """Print per-terrain errors collected during processing."""
    for source, message in errors:
        line = Text(f"  {SYM_ERR} ", style="red")
        line.append(source, style="bold")
        line.append(f": {message}")
        console.print(line)


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")


def print_cancellation_summary(processed: int, cancelled: int) -> None:
    """Print cancellation summary.

    Args:
        processed: Number of terrains completed before cancellation
        cancelled: Number of pending terrains that were cancelled
    """
    console.print(f"\n{SYM_DOT} [bold]Cancelled[/bold]")
    console.print(f"  {processed} terrains completed {SYM_DOT} {cancelled} tasks cancelled")
