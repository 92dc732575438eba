"""Topomap - Turn sketched polygons into topographic contour bands.

Topomap takes closed polygonal curves, unions them, and grows the union
outward in small steps to build concentric bands. Each band is smoothed into
closed Bezier curves, ready for a 2D or 3D renderer.

Example:
    $ topomap terrain.json

This will create terrain-layers.json with one entry per contour band.
"""

__version__ = "0.1.0"
__author__ = "topomap contributors"

__all__ = ["__author__", "__version__"]
