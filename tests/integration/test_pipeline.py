"""End-to-end tests: terrain files in, layer files out."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from topomap.cli import app
from topomap.core.polygon import area, point_in_polygon
from topomap.domain import Curve, Layer
from topomap.io.converter import json_to_layers

runner = CliRunner()


def run_cli(*args: str) -> None:
    result = runner.invoke(app, [*args, "-q"])
    assert result.exit_code == 0, result.output


def load_layers(path: Path) -> list[Layer]:
    return json_to_layers(json.loads(path.read_text(encoding="utf-8")))


class TestPlainPolygons:
    """Plain polygon terrains."""

    @pytest.fixture
    def layers(self, tmp_path: Path) -> list[Layer]:
        terrain = tmp_path / "hill.json"
        terrain.write_text(
            json.dumps({"polygons": [[[0, 0], [10, 0], [10, 10], [0, 10]]]}), encoding="utf-8"
        )
        run_cli(str(terrain), "--amounts", "0,2,4")
        return load_layers(tmp_path / "hill-layers.json")

    def test_layer_count_and_colors(self, layers: list[Layer]) -> None:
        assert len(layers) == 3
        assert [layer.color_hex for layer in layers] == ["#a5eb34", "#65eb34", "#34eb52"]

    def test_layers_nest(self, layers: list[Layer]) -> None:
        for inner, outer in zip(layers, layers[1:]):
            (outer_polygon,) = outer.polygons
            for p in inner.polygons[0]:
                assert point_in_polygon(outer_polygon, p)

    def test_areas_grow(self, layers: list[Layer]) -> None:
        areas = [area(layer.polygons[0]) for layer in layers]
        assert areas == pytest.approx([100.0, 196.0, 256.0])

    def test_curves_are_drawable(self, layers: list[Layer]) -> None:
        for layer in layers:
            (curve,) = layer.curves
            assert isinstance(curve, Curve)
            assert len(curve.control_points) == 2 * (len(curve.points) - 1)
            polygon = layer.polygons[0]
            for p in curve.to_polyline():
                assert point_in_polygon(polygon, p)


class TestPointsetTerrain:
    """Terrains saved by the editor as normalized pointsets."""

    def test_shapes_merge_as_they_grow(self, tmp_path: Path) -> None:
        terrain = tmp_path / "ridge.json"
        terrain.write_text(
            json.dumps(
                {
                    "pointsets": [
                        {"points": [[0, 0], [0.4, 0], [0.4, 0.4], [0, 0.4]]},
                        {"points": [[0.52, 0.2], [0.92, 0.2], [0.92, 0.6], [0.52, 0.6]]},
                    ],
                    "width": 25,
                    "height": 25,
                }
            ),
            encoding="utf-8",
        )
        out_dir = tmp_path / "out"
        run_cli(str(terrain), "--amounts", "0,2", "--output-dir", str(out_dir))

        first, second = load_layers(out_dir / "ridge-layers.json")
        assert len(first.polygons) == 2
        assert len(second.polygons) == 1
        assert area(second.polygons[0]) == pytest.approx(383.0)

    def test_batch(self, tmp_path: Path) -> None:
        paths = []
        for i in range(3):
            path = tmp_path / f"t{i}.json"
            offset = i * 5
            square = [[offset, 0], [offset + 10, 0], [offset + 10, 10], [offset, 10]]
            path.write_text(json.dumps([square]), encoding="utf-8")
            paths.append(str(path))

        run_cli(*paths, "--amounts", "0,1", "--workers", "2")

        for i in range(3):
            layers = load_layers(tmp_path / f"t{i}-layers.json")
            assert area(layers[1].polygons[0]) == pytest.approx(144.0)
