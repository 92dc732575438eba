"""Layer writer for saving generated contour bands.

This module provides the LayerWriter class for writing layers to JSON
with the ``-layers`` naming convention.
"""

import json
from pathlib import Path

from topomap.domain.curve import Layer
from topomap.exceptions import LayerSaveError
from topomap.io.converter import layers_to_json


class LayerWriter:
    """Writes layers as a JSON document.

    Example:
        writer = LayerWriter(Path("terrain-layers.json"))
        writer.write(layers, source="terrain.json")
    """

    def __init__(self, output_path: Path) -> None:
        """Initialize the layer writer.

        Args:
            output_path: Path where the layers will be saved
        """
        self._output_path = output_path

    @property
    def output_path(self) -> Path:
        return self._output_path

    def write(self, layers: list[Layer], source: str) -> Path:
        """Write layers to the output path.

        Args:
            layers: Layers to save
            source: Name of the terrain the layers were built from

        Returns:
            The path written

        Raises:
            LayerSaveError: If the file cannot be written
        """
        document = layers_to_json(layers, source)
        try:
            self._output_path.parent.mkdir(parents=True, exist_ok=True)
            self._output_path.write_text(json.dumps(document, indent=2), encoding="utf-8")
        except OSError as e:
            raise LayerSaveError(str(self._output_path), str(e)) from e
        return self._output_path

    @staticmethod
    def get_layers_path(input_path: Path, output_dir: Path | None = None) -> Path:
        """Generate output path with the layers naming convention.

        Converts: terrain.json -> terrain-layers.json

        Args:
            input_path: Original terrain file path
            output_dir: Directory for the output (defaults to the input's)

        Returns:
            Path with -layers suffix and a .json extension
        """
        parent = output_dir if output_dir is not None else input_path.parent
        return parent / f"{input_path.stem}-layers.json"
