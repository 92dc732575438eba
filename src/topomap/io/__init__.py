"""Terrain I/O layer for topomap.

This module handles reading terrain files and writing generated layers.
It provides a clean abstraction layer between JSON documents and the
domain models.

Key responsibilities:
- Load plain polygon files and persisted editor pointsets
- Convert between JSON representations and domain models
- Write layers with the ``-layers`` naming convention

Key classes:
- TerrainReader: Load terrain and extract polygons
- LayerWriter: Save generated layers
"""

from topomap.io.converter import convert_to_persisted
from topomap.io.reader import TerrainReader
from topomap.io.writer import LayerWriter

__all__ = [
    "LayerWriter",
    "TerrainReader",
    "convert_to_persisted",
]
