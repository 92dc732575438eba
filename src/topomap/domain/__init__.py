"""Domain models for topomap.

This module contains the value types shared by the geometry core, the I/O
layer and external editors/renderers. All models are designed to be:

- Immutable where possible (using frozen dataclasses)
- Serializable for inter-process communication (parallel processing)
- Independent of any rendering toolkit

Key classes:
- Point: An immutable 2D coordinate
- Segment, Interval, Intersection: Inputs and outputs of intersection tests
- Curve: A piecewise cubic Bezier curve
- Layer: The closed curves of one contour band
- Pointset: An editable point sequence with control point diffs
"""

from topomap.domain.curve import Curve, Layer
from topomap.domain.geometry import (
    Intersection,
    Interval,
    Point,
    Polygon,
    Segment,
    WindingDirection,
)
from topomap.domain.pointset import Pointset

__all__: list[str] = [
    # Enums
    "WindingDirection",
    # Core types
    "Point",
    "Polygon",
    "Segment",
    "Interval",
    "Intersection",
    "Curve",
    "Layer",
    "Pointset",
]
