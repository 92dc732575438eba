"""Unit tests for configuration models."""

import pytest
from pydantic import ValidationError

from topomap.config import (
    DEFAULT_COLORS,
    LayerConfig,
    LoggingConfig,
    ProcessingConfig,
    TopomapSettings,
    get_default_settings,
)


class TestLayerConfig:
    """Tests for LayerConfig."""

    def test_defaults(self) -> None:
        config = LayerConfig()
        assert config.amounts == [0.0, 20.0, 40.0, 60.0, 80.0]
        assert config.colors == DEFAULT_COLORS
        assert config.step == 1.0
        assert config.max_edge_length == 300.0
        assert config.max_layers == 16
        assert config.max_points == 500
        assert config.repair_self_intersections is True

    def test_default_colors_not_shared(self) -> None:
        config = LayerConfig()
        config.colors.append(0)
        assert len(DEFAULT_COLORS) == 6

    def test_equal_amounts_allowed(self) -> None:
        assert LayerConfig(amounts=[0, 10, 10]).amounts == [0, 10, 10]

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"amounts": [0, 20, 10]},
            {"amounts": [-5, 0]},
            {"amounts": [0, 1, 2], "max_layers": 2},
            {"step": 0},
            {"step": -1},
            {"max_edge_length": 0.5},
            {"max_points": 2},
            {"max_layers": 0},
            {"max_layers": 65},
            {"colors": []},
            {"colors": [0x1000000]},
        ],
    )
    def test_invalid(self, kwargs: dict) -> None:
        with pytest.raises(ValidationError):
            LayerConfig(**kwargs)

    def test_densify_can_be_disabled(self) -> None:
        assert LayerConfig(max_edge_length=None).max_edge_length is None

    def test_color_for_cycles(self) -> None:
        config = LayerConfig(colors=[1, 2, 3])
        assert [config.color_for(i) for i in range(7)] == [1, 2, 3, 1, 2, 3, 1]


class TestSettings:
    """Tests for the top-level settings."""

    def test_default_settings(self) -> None:
        settings = get_default_settings()
        assert isinstance(settings, TopomapSettings)
        assert settings.layers == LayerConfig()
        assert settings.processing.max_workers is None
        assert settings.logging.log_file is None
        assert settings.logging.log_level == "WARNING"
        assert settings.logging.file_log_level == "DEBUG"

    def test_worker_count_validated(self) -> None:
        with pytest.raises(ValidationError):
            ProcessingConfig(max_workers=0)

    def test_nested_from_dict(self, tmp_path) -> None:
        settings = TopomapSettings.model_validate(
            {
                "layers": {"amounts": [0, 5], "step": 0.5},
                "logging": {"log_file": str(tmp_path / "run.log")},
            }
        )
        assert settings.layers.amounts == [0, 5]
        assert settings.layers.step == 0.5
        assert settings.logging.log_file == tmp_path / "run.log"

    def test_layer_config_round_trips_through_dict(self) -> None:
        """Workers receive the layer config as a plain dict."""
        config = LayerConfig(amounts=[0, 3], max_edge_length=None)
        assert LayerConfig(**config.model_dump()) == config

    def test_logging_config(self) -> None:
        assert LoggingConfig(log_level="DEBUG").log_level == "DEBUG"
