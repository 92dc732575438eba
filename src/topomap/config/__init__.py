"""Configuration management for topomap.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- LayerConfig: Contour layer generation settings
- ProcessingConfig: Batch processing settings
- LoggingConfig: Logging settings
- TopomapSettings: Main application settings
"""

from topomap.config.settings import (
    DEFAULT_COLORS,
    LayerConfig,
    LoggingConfig,
    ProcessingConfig,
    TopomapSettings,
    get_default_settings,
)

__all__ = [
    "DEFAULT_COLORS",
    "LayerConfig",
    "LoggingConfig",
    "ProcessingConfig",
    "TopomapSettings",
    "get_default_settings",
]
