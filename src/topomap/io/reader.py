"""Terrain reader for loading sketched polygons.

This module provides the TerrainReader class for loading terrain JSON
files into domain polygons and pointsets.
"""

import json
from pathlib import Path

from topomap.domain.geometry import Polygon
from topomap.domain.pointset import Pointset
from topomap.exceptions import TerrainFormatError, TerrainLoadError
from topomap.io.converter import json_to_polygons, persisted_to_pointsets

FORMAT_POLYGONS = "polygons"
FORMAT_POINTSETS = "pointsets"


class TerrainReader:
    """Loads terrain files and exposes their polygons.

    Both plain polygon files and persisted editor pointsets are accepted.
    For pointsets, the polygons are the pointsets' points.

    Example:
        reader = TerrainReader(Path("terrain.json"))
        reader.load()
        for polygon in reader.polygons:
            print(len(polygon))
    """

    def __init__(self, terrain_path: Path) -> None:
        """Initialize the terrain reader.

        Args:
            terrain_path: Path to the terrain JSON file
        """
        self._terrain_path = terrain_path
        self._polygons: list[Polygon] | None = None
        self._pointsets: list[Pointset] = []
        self._format: str | None = None

    def load(self) -> None:
        """Load and parse the terrain file.

        Raises:
            FileNotFoundError: If terrain file does not exist
            TerrainLoadError: If the file cannot be read
            TerrainFormatError: If the file is not valid terrain JSON
        """
        if not self._terrain_path.exists():
            raise FileNotFoundError(f"Terrain file not found: {self._terrain_path}")

        path = str(self._terrain_path)
        try:
            text = self._terrain_path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise TerrainFormatError(path, f"not UTF-8 text: {e}") from e
        except OSError as e:
            raise TerrainLoadError(path, str(e)) from e

        try:
            data = json.loads(text)
        except ValueError as e:
            raise TerrainFormatError(path, f"invalid JSON: {e}") from e

        try:
            if isinstance(data, dict) and "pointsets" in data:
                self._pointsets = persisted_to_pointsets(data)
                self._polygons = [list(ps.points) for ps in self._pointsets]
                self._format = FORMAT_POINTSETS
            elif isinstance(data, list) or (isinstance(data, dict) and "polygons" in data):
                self._polygons = json_to_polygons(data)
                self._format = FORMAT_POLYGONS
            else:
                raise TerrainFormatError(path, "expected 'polygons' or 'pointsets'")
        except (KeyError, TypeError, ValueError) as e:
            raise TerrainFormatError(path, str(e)) from e

    def _require_loaded(self) -> list[Polygon]:
        if self._polygons is None:
            raise RuntimeError("Terrain not loaded. Call load() first.")
        return self._polygons

    @property
    def polygons(self) -> list[Polygon]:
        """Return the loaded polygons.

        Raises:
            RuntimeError: If terrain has not been loaded yet
        """
        return self._require_loaded()

    @property
    def pointsets(self) -> list[Pointset]:
        """Return the loaded pointsets (empty for plain polygon files)."""
        self._require_loaded()
        return self._pointsets

    @property
    def format(self) -> str:
        """Return the terrain format, ``"polygons"`` or ``"pointsets"``."""
        if self._format is None:
            raise RuntimeError("Terrain not loaded. Call load() first.")
        return self._format

    @property
    def polygon_count(self) -> int:
        return len(self._require_loaded())

    def __enter__(self) -> "TerrainReader":
        """Context manager entry."""
        self.load()
        return self

    def __exit__(self, _exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        """Context manager exit."""
