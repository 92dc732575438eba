"""Configuration settings for topomap."""

from pathlib import Path

from pydantic import BaseModel, Field, field_validator, model_validator

# Fill colors of the default palette, cycled when there are more layers.
DEFAULT_COLORS = [0xA5EB34, 0x65EB34, 0x34EB52, 0x34EB89, 0x34EBC3, 0x34EBE8]


class LayerConfig(BaseModel):
    """Configuration for contour layer generation.

    Amounts are cumulative expansion distances in drawing units: every
    layer is grown from the previous one by the difference between its
    amount and the previous amount.
    """

    amounts: list[float] = Field(
        default_factory=lambda: [0.0, 20.0, 40.0, 60.0, 80.0],
        description="Expansion amount of each layer",
    )
    colors: list[int] = Field(
        default_factory=lambda: list(DEFAULT_COLORS),
        min_length=1,
        description="Layer fill colors as 0xRRGGBB integers, cycled",
    )
    step: float = Field(
        default=1.0,
        gt=0.0,
        description="Expansion increment; polygons are re-unioned after every step",
    )
    max_edge_length: float | None = Field(
        default=300.0,
        ge=1.0,
        description="Edges this long are subdivided before curve fitting (None = never)",
    )
    max_points: int = Field(
        default=500,
        ge=3,
        description="Densification never grows a polygon beyond this many points",
    )
    max_layers: int = Field(
        default=16,
        ge=1,
        le=64,
        description="Maximum number of layers",
    )
    repair_self_intersections: bool = Field(
        default=True,
        description="Reorder self-intersecting input polygons around their centroid",
    )

    @field_validator("amounts")
    @classmethod
    def check_amounts(cls, value: list[float]) -> list[float]:
        if any(a < 0 for a in value):
            raise ValueError("amounts must be non-negative")
        if any(b < a for a, b in zip(value, value[1:])):
            raise ValueError("amounts must be non-decreasing")
        return value

    @field_validator("colors")
    @classmethod
    def check_colors(cls, value: list[int]) -> list[int]:
        for color in value:
            if not 0 <= color <= 0xFFFFFF:
                raise ValueError(f"color out of range: {color}")
        return value

    @model_validator(mode="after")
    def check_layer_count(self) -> "LayerConfig":
        if len(self.amounts) > self.max_layers:
            raise ValueError(
                f"{len(self.amounts)} amounts given, at most {self.max_layers} layers allowed"
            )
        return self

    def color_for(self, index: int) -> int:
        """Color of the layer at ``index``, cycling through the palette."""
        return self.colors[index % len(self.colors)]


class ProcessingConfig(BaseModel):
    """Configuration for batch processing."""

    max_workers: int | None = Field(
        default=None,
        ge=1,
        description="Max worker processes (None = auto)",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class TopomapSettings(BaseModel):
    """Main application settings."""

    layers: LayerConfig = Field(default_factory=LayerConfig)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> TopomapSettings:
    """Get default application settings."""
    return TopomapSettings()
