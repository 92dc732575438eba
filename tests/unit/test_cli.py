"""Tests for the command line interface."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from topomap import __version__
from topomap.cli import app
from topomap.cli.app import parse_amounts

runner = CliRunner()


@pytest.fixture
def terrain(tmp_path: Path) -> Path:
    path = tmp_path / "hill.json"
    path.write_text(
        json.dumps({"polygons": [[[0, 0], [10, 0], [10, 10], [0, 10]]]}), encoding="utf-8"
    )
    return path


class TestParseAmounts:
    """Tests for parse_amounts."""

    def test_parses_list(self) -> None:
        assert parse_amounts("0, 10,20") == [0.0, 10.0, 20.0]

    def test_trailing_comma(self) -> None:
        assert parse_amounts("0,5,") == [0.0, 5.0]

    @pytest.mark.parametrize("value", ["", " , ", "a,b"])
    def test_invalid(self, value: str) -> None:
        with pytest.raises(ValueError):
            parse_amounts(value)


class TestCli:
    """Tests for the topomap command."""

    def test_version(self) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_builds_layers(self, terrain: Path) -> None:
        result = runner.invoke(app, [str(terrain), "-q", "-a", "0,2"])
        assert result.exit_code == 0, result.output

        document = json.loads((terrain.parent / "hill-layers.json").read_text(encoding="utf-8"))
        assert [layer["amount"] for layer in document["layers"]] == [0.0, 2.0]

    def test_rich_output(self, terrain: Path) -> None:
        result = runner.invoke(app, [str(terrain), "-a", "0,1", "--max-edge-length", "0"])
        assert result.exit_code == 0, result.output
        assert "Complete" in result.output
        assert "1 terrains" in result.output

    def test_output_dir(self, terrain: Path, tmp_path: Path) -> None:
        out_dir = tmp_path / "out"
        result = runner.invoke(app, [str(terrain), "-q", "-a", "0", "-o", str(out_dir)])
        assert result.exit_code == 0, result.output
        assert (out_dir / "hill-layers.json").exists()

    def test_dry_run_writes_nothing(self, terrain: Path) -> None:
        result = runner.invoke(app, [str(terrain), "--dry-run"])
        assert result.exit_code == 0, result.output
        assert "Dry run complete" in result.output
        assert not (terrain.parent / "hill-layers.json").exists()

    def test_missing_input(self, tmp_path: Path) -> None:
        result = runner.invoke(app, [str(tmp_path / "missing.json"), "-q"])
        assert result.exit_code == 1

    def test_directory_input(self, tmp_path: Path) -> None:
        result = runner.invoke(app, [str(tmp_path), "-q"])
        assert result.exit_code == 1

    @pytest.mark.parametrize("amounts", ["a,b", "4,2", "-1,0"])
    def test_invalid_amounts(self, terrain: Path, amounts: str) -> None:
        result = runner.invoke(app, [str(terrain), "-q", "--amounts", amounts])
        assert result.exit_code == 1
        assert not (terrain.parent / "hill-layers.json").exists()

    def test_verbose_and_quiet_conflict(self, terrain: Path) -> None:
        result = runner.invoke(app, [str(terrain), "-v", "-q"])
        assert result.exit_code == 1

    def test_invalid_terrain_fails(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.json"
        path.write_text('{"foo": 1}', encoding="utf-8")
        result = runner.invoke(app, [str(path), "-q", "-a", "0"])
        assert result.exit_code == 1
