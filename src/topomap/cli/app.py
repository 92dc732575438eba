"""CLI application entry point for topomap.

This module provides the main CLI interface using Typer.
"""

import os
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError

from topomap import __version__
from topomap.cli.output import (
    SYM_OK,
    console,
    create_progress,
    print_cancellation_summary,
    print_error,
    print_errors,
    print_header,
    print_layer_plan,
    print_processing_info,
    print_step,
    print_success,
    print_summary_table,
)
from topomap.config import LayerConfig, LoggingConfig, ProcessingConfig, TopomapSettings
from topomap.core.processor import TerrainProcessor
from topomap.exceptions import ProcessingCancelledError, TerrainError, TopomapError
from topomap.io import LayerWriter

# Create the Typer app
app = typer.Typer(
    name="topomap",
    help="Build topographic contour layers from sketched terrain polygons.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Topomap[/bold blue] v{__version__}")
        raise typer.Exit()


def parse_amounts(value: str) -> list[float]:
    """Parse a comma-separated list of layer amounts.

    Raises:
        ValueError: If an entry is not a number
    """
    parts = [p.strip() for p in value.split(",")]
    if not any(parts):
        raise ValueError("no amounts given")
    return [float(p) for p in parts if p]


@app.command()
def topomap(
    inputs: Annotated[
        list[Path],
        typer.Argument(
            help="Terrain JSON files (plain polygons or saved editor pointsets)",
            show_default=False,
        ),
    ],
    output_dir: Annotated[
        Path | None,
        typer.Option(
            "--output-dir",
            "-o",
            help="Output directory (default: next to each input, as {name}-layers.json)",
        ),
    ] = None,
    amounts: Annotated[
        str | None,
        typer.Option(
            "--amounts",
            "-a",
            help="Comma-separated expansion amount per layer (default: 0,20,40,60,80)",
        ),
    ] = None,
    step: Annotated[
        float,
        typer.Option(
            "--step",
            help="Expansion increment; smaller is smoother and slower",
            min=0.01,
        ),
    ] = 1.0,
    max_edge_length: Annotated[
        float,
        typer.Option(
            "--max-edge-length",
            help="Subdivide longer edges before curve fitting (0 disables)",
            min=0.0,
        ),
    ] = 300.0,
    workers: Annotated[
        int | None,
        typer.Option(
            "--workers",
            "-j",
            help="Number of parallel workers (default: auto)",
            min=1,
        ),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            help="Load and union the terrains without building layers",
        ),
    ] = False,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbose console output",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Build topographic contour layers from terrain polygons.

    The polygons of each terrain are unioned and grown outward in small
    steps. Every amount yields one layer of smooth closed curves.

    Example:
        topomap terrain.json --amounts 0,10,20

    This will create terrain-layers.json with three layers.
    """
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    for path in inputs:
        if not path.exists():
            print_error(
                f"Input file not found: {path}",
                details=f"The file '{path}' does not exist or is not accessible.",
            )
            raise typer.Exit(code=1)
        if not path.is_file():
            print_error(
                f"Input path is not a file: {path}",
                details="Please provide a path to a terrain JSON file.",
            )
            raise typer.Exit(code=1)

    try:
        layer_kwargs: dict = {
            "step": step,
            "max_edge_length": max_edge_length if max_edge_length > 0 else None,
        }
        if amounts is not None:
            layer_kwargs["amounts"] = parse_amounts(amounts)
        layer_config = LayerConfig(**layer_kwargs)
    except ValidationError as e:
        print_error("Invalid layer settings", details=_validation_details(e))
        raise typer.Exit(code=1)
    except ValueError as e:
        print_error("Invalid layer settings", details=str(e))
        raise typer.Exit(code=1)

    if not quiet:
        print_header(__version__)

    settings = TopomapSettings(
        layers=layer_config,
        processing=ProcessingConfig(
            max_workers=workers,
        ),
        logging=LoggingConfig(
            log_file=log_file,
            log_level=log_level if not quiet else "ERROR",
        ),
    )

    try:
        processor = TerrainProcessor(settings)

        if dry_run:
            _handle_dry_run(processor, inputs, quiet)
            raise typer.Exit(code=0)

        if not quiet:
            print_step("Building layers")
            print_layer_plan(layer_config.amounts, layer_config.step, layer_config.max_edge_length)
            actual_workers = min(workers or os.cpu_count() or 1, len(inputs))
            print_processing_info(actual_workers, is_auto=(workers is None))

        succeeded: list[str] = []

        def record(completed: int, total: int, source: str, success: bool) -> None:
            if success:
                succeeded.append(source)

        try:
            if not quiet:
                with create_progress() as progress:
                    task_id = progress.add_task(
                        f"Processing {len(inputs)} terrains",
                        total=len(inputs),
                    )

                    def update_progress(
                        completed: int, total: int, source: str, success: bool
                    ) -> None:
                        record(completed, total, source, success)
                        progress.update(task_id, completed=completed)

                    stats = processor.process(
                        inputs,
                        output_dir=output_dir,
                        max_workers=workers,
                        progress_callback=update_progress,
                    )
            else:
                stats = processor.process(
                    inputs,
                    output_dir=output_dir,
                    max_workers=workers,
                    progress_callback=record,
                )
        except ProcessingCancelledError as e:
            if not quiet:
                print_cancellation_summary(
                    processed=e.processed_count,
                    cancelled=e.pending_count,
                )
            raise typer.Exit(code=130) from None  # Standard Unix SIGINT exit code

        if not quiet:
            output_paths = [
                str(LayerWriter.get_layers_path(Path(source), output_dir)) for source in succeeded
            ]
            print_success(
                output_paths=output_paths,
                total_time_s=stats.duration_seconds,
                processed=stats.processed_count,
                layers=stats.layers_built,
                curves=stats.curves_built,
                errors=stats.error_count,
                avg_time_ms=stats.avg_time_ms if stats.timings_ms else None,
                min_time_ms=stats.min_time_ms if stats.timings_ms else None,
                max_time_ms=stats.max_time_ms if stats.timings_ms else None,
            )
            if verbose and stats.skipped_count:
                console.print(f"  {stats.skipped_count} terrains skipped (no polygons)")

        if stats.errors:
            print_errors(stats.errors)
            raise typer.Exit(code=1)

    except KeyboardInterrupt:
        if not quiet:
            print_cancellation_summary(processed=0, cancelled=len(inputs))
        raise typer.Exit(code=130) from None
    except TopomapError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except typer.Exit:
        # Re-raise typer.Exit to allow clean exits
        raise
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        raise typer.Exit(code=1)


def _validation_details(error: ValidationError) -> str:
    """Condense a pydantic validation error into one line per field."""
    lines = []
    for err in error.errors():
        field = ".".join(str(loc) for loc in err["loc"]) or "settings"
        lines.append(f"{field}: {err['msg']}")
    return "; ".join(lines)


def _handle_dry_run(processor: TerrainProcessor, inputs: list[Path], quiet: bool) -> None:
    """Handle --dry-run mode.

    Args:
        processor: Configured terrain processor
        inputs: Terrain files to summarize
        quiet: Suppress output
    """
    if not quiet:
        print_step("Analyzing (dry run)")

    try:
        summaries = [processor.summarize(path) for path in inputs]
    except (FileNotFoundError, TerrainError) as e:
        print_error(f"Could not load terrain: {e}")
        raise typer.Exit(code=1)

    if not quiet:
        console.print()
        print_summary_table(summaries)
        console.print(f"\n[bold green]{SYM_OK} Dry run complete[/bold green] - no files written")


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
