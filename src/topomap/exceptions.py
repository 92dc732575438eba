"""Exception hierarchy for Topomap."""


class TopomapError(Exception):
    """Base exception for all Topomap errors."""

    pass


class TerrainError(TopomapError):
    """Errors related to terrain loading or layer saving."""

    pass


class TerrainLoadError(TerrainError):
    """Error loading a terrain file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load terrain '{path}': {reason}")


class TerrainFormatError(TerrainError):
    """Unsupported or invalid terrain file contents."""

    def __init__(self, path: str, details: str) -> None:
        self.path = path
        self.details = details
        super().__init__(f"Invalid terrain format '{path}': {details}")


class LayerSaveError(TerrainError):
    """Error saving generated layers."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save layers '{path}': {reason}")


class GeometryError(TopomapError):
    """Errors in geometric calculations."""

    pass


class ZeroLengthVectorError(GeometryError, ValueError):
    """A zero-length vector cannot be normalized."""

    def __init__(self, x: float, y: float) -> None:
        self.x = x
        self.y = y
        super().__init__(f"Cannot normalize zero-length vector ({x}, {y})")


class ProcessingCancelledError(TopomapError):
    """Processing was cancelled by user."""

    def __init__(self, processed_count: int, pending_count: int) -> None:
        self.processed_count = processed_count
        self.pending_count = pending_count
        super().__init__(
            f"Processing cancelled: {processed_count} completed, {pending_count} pending"
        )
