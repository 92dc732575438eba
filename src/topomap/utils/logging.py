"""Logging utilities for topomap."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog


@dataclass
class ProcessingStats:
    """Statistics from a processing run."""

    processed_count: int = 0
    skipped_count: int = 0
    error_count: int = 0
    layers_built: int = 0
    curves_built: int = 0
    errors: list[tuple[str, str]] = field(default_factory=list)
    timings_ms: list[float] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None
    was_cancelled: bool = False
    cancelled_count: int = 0

    @property
    def duration_seconds(self) -> float:
        """Calculate processing duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0

    @property
    def avg_time_ms(self) -> float:
        if not self.timings_ms:
            return 0.0
        return sum(self.timings_ms) / len(self.timings_ms)

    @property
    def min_time_ms(self) -> float:
        return min(self.timings_ms) if self.timings_ms else 0.0

    @property
    def max_time_ms(self) -> float:
        return max(self.timings_ms) if self.timings_ms else 0.0


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output except errors

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.ERROR if quiet else getattr(logging, console_level.upper()))
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("topomap")
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level,
    )

    return logger


class ProcessingLogger:
    """Logger for tracking processing progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = ProcessingStats()

    def log_terrain_start(self, source: str, polygon_count: int) -> None:
        """Log start of terrain processing."""
        self._logger.debug("Processing terrain", source=source, polygons=polygon_count)

    def log_terrain_complete(
        self,
        source: str,
        layers_built: int,
        curves_built: int,
        duration_ms: float,
    ) -> None:
        """Log successful terrain processing."""
        self._logger.info(
            "Terrain processed",
            source=source,
            layers=layers_built,
            curves=curves_built,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.processed_count += 1
        self._stats.layers_built += layers_built
        self._stats.curves_built += curves_built
        self._stats.timings_ms.append(duration_ms)

    def log_terrain_skipped(self, source: str, reason: str) -> None:
        """Log skipped terrain."""
        self._logger.debug("Terrain skipped", source=source, reason=reason)
        self._stats.skipped_count += 1

    def log_terrain_error(
        self,
        source: str,
        error: Exception | str,
        traceback: str | None = None,
    ) -> None:
        """Log terrain processing error."""
        self._logger.error(
            "Terrain processing failed",
            source=source,
            error=str(error),
            error_type=type(error).__name__ if isinstance(error, Exception) else None,
            traceback=traceback,
        )
        self._stats.error_count += 1
        self._stats.errors.append((source, str(error)))

    @property
    def stats(self) -> ProcessingStats:
        """Get current processing statistics."""
        return self._stats
