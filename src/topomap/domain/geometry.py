"""Core geometric value types.

This module defines the fundamental geometric types used throughout topomap:
- Point: An immutable 2D coordinate
- Segment: A directed line segment between two points
- Interval: A parametric range used for collinear overlap resolution
- Intersection: Parametric positions of a segment/segment intersection
- WindingDirection: Enum for polygon winding direction

Coordinates follow screen conventions: the y axis grows downward, so a
polygon listed "clockwise" looks clockwise on screen.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any


class WindingDirection(Enum):
    """Polygon winding direction in screen coordinates (y pointing down)."""

    CLOCKWISE = auto()
    COUNTER_CLOCKWISE = auto()


@dataclass(frozen=True, slots=True)
class Point:
    """A point (or vector) in 2D space.

    Immutable and hashable for use in sets/dicts. Equality is exact; use
    ``topomap.core.vector.is_close`` for tolerant comparisons.

    Attributes:
        x: X coordinate
        y: Y coordinate
    """

    x: float
    y: float

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple.

        Returns:
            Tuple of (x, y) coordinates
        """
        return (self.x, self.y)

    def to_list(self) -> list[float]:
        """Convert to the ``[x, y]`` array form used in JSON files."""
        return [self.x, self.y]

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC.

        Returns:
            Dictionary with x and y fields
        """
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Point":
        """Deserialize from dictionary.

        Args:
            data: Dictionary with x and y fields

        Returns:
            Point instance
        """
        return cls(x=data["x"], y=data["y"])


# A polygon is an ordered, implicitly closed sequence of points.
Polygon = list[Point]


@dataclass(frozen=True, slots=True)
class Segment:
    """A directed line segment.

    Attributes:
        start: Start point (parameter 0)
        end: End point (parameter 1)
    """

    start: Point
    end: Point


@dataclass(frozen=True, slots=True)
class Interval:
    """A closed range ``[start, end]`` on a parametric line."""

    start: float
    end: float

    def is_valid(self) -> bool:
        """An interval is valid when it is not inverted."""
        return self.start <= self.end


@dataclass(frozen=True, slots=True)
class Intersection:
    """Parametric location of an intersection between two segments.

    The intersection point is ``s1.start + u * (s1.end - s1.start)`` and,
    equivalently, ``s2.start + v * (s2.end - s2.start)``. Values outside
    ``[0, 1]`` describe an intersection of the supporting lines only.

    Attributes:
        u: Position along the first segment
        v: Position along the second segment
    """

    u: float
    v: float
