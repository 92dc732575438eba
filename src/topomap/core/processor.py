"""Batch processing orchestration for the layering pipeline.

This module coordinates loading terrain files, building their layers and
saving the results, with one worker process per terrain file.

Key components:
- process_terrain: Top-level picklable function for parallel execution
- TerrainProcessor: Main orchestrator class for terrain batches
"""

import time
import traceback
from collections.abc import Callable
from concurrent.futures import Future, ProcessPoolExecutor, as_completed
from pathlib import Path
from typing import Any

from topomap.config import LayerConfig, TopomapSettings
from topomap.core.layers import build_layers, prepare_polygons
from topomap.core.polygon import area, winding_direction
from topomap.core.union import union_all
from topomap.domain.curve import Layer
from topomap.domain.geometry import Point, Polygon, WindingDirection
from topomap.exceptions import ProcessingCancelledError, TerrainError
from topomap.io import LayerWriter, TerrainReader
from topomap.io.converter import polygons_to_json
from topomap.utils import ProcessingLogger, ProcessingStats, configure_logging

ProgressCallback = Callable[[int, int, str, bool], None]


def process_terrain(
    polygons_data: list[list[list[float]]],
    layer_config_dict: dict[str, Any],
    source: str,
) -> dict[str, Any]:
    """Build the layers of a single terrain.

    Top-level function designed to be picklable for use with ProcessPoolExecutor.
    Deserializes polygons, runs the layering pipeline, and returns the result.

    Args:
        polygons_data: Polygons as nested ``[x, y]`` lists
        layer_config_dict: Serialized layer configuration
        source: Name of the terrain, echoed back in the result

    Returns:
        Dictionary containing either:
        - Success: {"source": str, "layers": [layer_dict], "curves_built": int,
          "duration_ms": float}
        - Error: {"error": str, "source": str, "traceback": str, "duration_ms": float}
    """
    start_time = time.time()

    try:
        polygons = [[Point(x, y) for x, y in poly] for poly in polygons_data]
        config = LayerConfig(**layer_config_dict)

        layers = build_layers(polygons, config=config)

        duration_ms = (time.time() - start_time) * 1000
        return {
            "source": source,
            "layers": [layer.to_dict() for layer in layers],
            "curves_built": sum(len(layer.curves) for layer in layers),
            "duration_ms": duration_ms,
        }

    except Exception as e:
        duration_ms = (time.time() - start_time) * 1000
        return {
            "error": str(e),
            "source": source,
            "traceback": traceback.format_exc(),
            "duration_ms": duration_ms,
        }


class TerrainProcessor:
    """Orchestrates layer generation for a batch of terrain files.

    Manages the complete workflow:
    1. Load each terrain file
    2. Skip terrains without usable polygons
    3. Build layers, in worker processes when there is more than one file
    4. Save each result next to its input (or into an output directory)
    5. Collect statistics

    Example:
        settings = TopomapSettings()
        processor = TerrainProcessor(settings)
        stats = processor.process([Path("terrain.json")], max_workers=4)
    """

    def __init__(self, config: TopomapSettings) -> None:
        """Initialize terrain processor with configuration.

        Args:
            config: Topomap settings containing layer and processing config
        """
        self.config = config
        self.logger = configure_logging(
            log_file=config.logging.log_file,
            console_level=config.logging.log_level,
            file_level=config.logging.file_log_level,
            quiet=False,
        )

    def summarize(self, terrain_path: Path) -> dict[str, Any]:
        """Load a terrain and report its union without building layers.

        Returns:
            Dictionary with polygon and component counts, the number of
            clockwise input polygons and the union area

        Raises:
            FileNotFoundError: If the terrain file does not exist
            TerrainFormatError: If the terrain file is invalid
        """
        reader = TerrainReader(terrain_path)
        reader.load()
        prepared = prepare_polygons(
            reader.polygons, repair=self.config.layers.repair_self_intersections
        )
        components = union_all(prepared)
        return {
            "source": str(terrain_path),
            "format": reader.format,
            "polygons": reader.polygon_count,
            "clockwise": sum(
                1
                for p in reader.polygons
                if len(p) >= 3 and winding_direction(p) is WindingDirection.CLOCKWISE
            ),
            "components": len(components),
            "area": sum(area(c) for c in components),
        }

    def process(
        self,
        terrain_paths: list[Path],
        output_dir: Path | None = None,
        max_workers: int | None = None,
        progress_callback: ProgressCallback | None = None,
    ) -> ProcessingStats:
        """Build and save the layers of every terrain file.

        Args:
            terrain_paths: Terrain JSON files to process
            output_dir: Directory for output files (defaults to next to each input)
            max_workers: Maximum worker processes (None = config or auto-detect)
            progress_callback: Optional callback(completed, total, source, success)
                for progress updates

        Returns:
            ProcessingStats with counts, timing, and error details

        Raises:
            ProcessingCancelledError: If processing is cancelled by user
        """
        processing_logger = ProcessingLogger(self.logger)
        stats = processing_logger.stats
        stats.start_time = time.time()

        if max_workers is None:
            max_workers = self.config.processing.max_workers

        self.logger.info(
            "Starting terrain processing",
            files=len(terrain_paths),
            output_dir=str(output_dir) if output_dir else None,
            max_workers=max_workers,
        )

        tasks: dict[str, list[Polygon]] = {}
        outputs: dict[str, Path] = {}
        for path in terrain_paths:
            source = str(path)
            try:
                reader = TerrainReader(path)
                reader.load()
            except (FileNotFoundError, TerrainError) as e:
                processing_logger.log_terrain_error(source, e)
                continue

            polygons = [p for p in reader.polygons if len(p) >= 3]
            if not polygons:
                processing_logger.log_terrain_skipped(source, "no polygons")
                continue

            processing_logger.log_terrain_start(source, len(polygons))
            tasks[source] = polygons
            outputs[source] = LayerWriter.get_layers_path(path, output_dir)

        if tasks:
            self._run(tasks, outputs, max_workers, processing_logger, progress_callback)
        else:
            self.logger.info("No terrains to process")

        stats.end_time = time.time()

        self.logger.info(
            "Processing complete",
            processed=stats.processed_count,
            skipped=stats.skipped_count,
            errors=stats.error_count,
            layers_built=stats.layers_built,
            curves_built=stats.curves_built,
            duration_seconds=round(stats.duration_seconds, 2),
        )

        return stats

    def _run(
        self,
        tasks: dict[str, list[Polygon]],
        outputs: dict[str, Path],
        max_workers: int | None,
        processing_logger: ProcessingLogger,
        progress_callback: ProgressCallback | None,
    ) -> None:
        config_dict = self.config.layers.model_dump()
        payloads = {source: polygons_to_json(polygons) for source, polygons in tasks.items()}
        total = len(payloads)

        if total == 1 or max_workers == 1:
            self.logger.info("Processing in-process", terrain_count=total)
            completed = 0
            try:
                for source, polygons_data in payloads.items():
                    result = process_terrain(polygons_data, config_dict, source)
                    success = self._handle_result(result, outputs[source], processing_logger)
                    completed += 1
                    if progress_callback is not None:
                        progress_callback(completed, total, source, success)
            except KeyboardInterrupt:
                self.logger.info("Cancellation requested by user")
                stats = processing_logger.stats
                stats.was_cancelled = True
                stats.cancelled_count = total - completed
                raise ProcessingCancelledError(completed, total - completed) from None
            return

        self.logger.info(
            "Starting parallel processing",
            terrain_count=total,
            max_workers=max_workers,
        )

        completed = 0
        pending_futures: dict[Future, str] = {}

        with ProcessPoolExecutor(max_workers=max_workers) as executor:
            for source, polygons_data in payloads.items():
                future = executor.submit(process_terrain, polygons_data, config_dict, source)
                pending_futures[future] = source

            try:
                for future in as_completed(list(pending_futures)):
                    source = pending_futures.pop(future)
                    success = False

                    try:
                        success = self._handle_result(
                            future.result(), outputs[source], processing_logger
                        )
                    except Exception as e:
                        # Executor-level error
                        processing_logger.log_terrain_error(
                            source, e, traceback=traceback.format_exc()
                        )

                    completed += 1
                    if progress_callback is not None:
                        progress_callback(completed, total, source, success)

            except KeyboardInterrupt:
                self.logger.info("Cancellation requested by user")
                for f in pending_futures:
                    f.cancel()

                stats = processing_logger.stats
                stats.was_cancelled = True
                stats.cancelled_count = len(pending_futures)

                executor.shutdown(wait=True, cancel_futures=True)
                raise ProcessingCancelledError(completed, len(pending_futures)) from None

    def _handle_result(
        self,
        result: dict[str, Any],
        output_path: Path,
        processing_logger: ProcessingLogger,
    ) -> bool:
        """Save a worker result and record it in the statistics.

        Returns:
            True if the layers were built and saved
        """
        source = result["source"]
        if "error" in result:
            processing_logger.log_terrain_error(
                source, result["error"], traceback=result.get("traceback")
            )
            return False

        layers = [Layer.from_dict(d) for d in result["layers"]]
        try:
            LayerWriter(output_path).write(layers, source=source)
        except TerrainError as e:
            processing_logger.log_terrain_error(source, e)
            return False

        processing_logger.log_terrain_complete(
            source,
            layers_built=len(layers),
            curves_built=result["curves_built"],
            duration_ms=result.get("duration_ms", 0.0),
        )
        self.logger.info("Layers saved", source=source, output=str(output_path))
        return True
