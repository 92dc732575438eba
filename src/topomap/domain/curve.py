"""Curve and layer types produced by the geometry core.

- Curve: A piecewise cubic Bezier curve (points plus control point pairs)
- Layer: All closed curves of one contour band, sharing an expansion amount
  and a render color
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from topomap.domain.geometry import Point, Polygon


@dataclass
class Curve:
    """A piecewise cubic Bezier curve.

    Segment ``i`` runs from ``points[i]`` to ``points[i + 1]`` and is shaped by
    ``control_points[2 * i]`` and ``control_points[2 * i + 1]``. A well-formed
    curve with P points therefore carries ``2 * (P - 1)`` control points.

    Attributes:
        points: On-curve knots
        control_points: Bezier handles, two per segment
    """

    points: list[Point] = field(default_factory=list)
    control_points: list[Point] = field(default_factory=list)

    def is_empty(self) -> bool:
        """Check if curve has no drawable segment."""
        return len(self.points) < 2

    def segment_count(self) -> int:
        """Number of complete Bezier segments."""
        if len(self.points) < 2:
            return 0
        return min(len(self.points) - 1, len(self.control_points) // 2)

    def segments(self) -> Iterator[tuple[Point, Point, Point, Point]]:
        """Iterate over ``(p0, cp0, cp1, p1)`` tuples, one per segment."""
        for i in range(self.segment_count()):
            yield (
                self.points[i],
                self.control_points[2 * i],
                self.control_points[2 * i + 1],
                self.points[i + 1],
            )

    def point_at(self, segment_index: int, t: float) -> Point:
        """Evaluate a segment of the curve.

        Args:
            segment_index: Index of the Bezier segment
            t: Curve parameter in [0, 1]

        Returns:
            Point on the segment at parameter t
        """
        p0 = self.points[segment_index]
        cp0 = self.control_points[2 * segment_index]
        cp1 = self.control_points[2 * segment_index + 1]
        p1 = self.points[segment_index + 1]

        a = (1 - t) ** 3
        b = 3 * (1 - t) ** 2 * t
        c = 3 * (1 - t) * t * t
        d = t**3
        return Point(
            a * p0.x + b * cp0.x + c * cp1.x + d * p1.x,
            a * p0.y + b * cp0.y + c * cp1.y + d * p1.y,
        )

    def to_polyline(self, tolerance: float = 0.5) -> list[Point]:
        """Flatten the curve into a polyline.

        Args:
            tolerance: Maximum deviation from the true curve

        Returns:
            List of points approximating the curve, first knot included once
        """
        from topomap.core._bezier import flatten_cubic

        result: list[Point] = []
        for p0, cp0, cp1, p1 in self.segments():
            flattened = flatten_cubic([p0, cp0, cp1, p1], tolerance)
            if result:
                flattened = flattened[1:]
            result.extend(flattened)
        return result

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the JSON form used by layer files."""
        return {
            "points": [p.to_list() for p in self.points],
            "controlPoints": [p.to_list() for p in self.control_points],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Curve":
        """Deserialize from the JSON form used by layer files."""
        return cls(
            points=[Point(x, y) for x, y in data["points"]],
            control_points=[Point(x, y) for x, y in data["controlPoints"]],
        )


@dataclass
class Layer:
    """One contour band of the topographic map.

    Attributes:
        amount: Total expansion distance of this band
        color: Render color as a 0xRRGGBB integer
        polygons: Unioned and cleaned polygons before curve fitting
        curves: Closed curves fitted to the polygons
    """

    amount: float
    color: int
    polygons: list[Polygon] = field(default_factory=list)
    curves: list[Curve] = field(default_factory=list)

    @property
    def color_hex(self) -> str:
        """Color formatted as ``#rrggbb``."""
        return f"#{self.color:06x}"

    def point_count(self) -> int:
        """Total number of curve knots in this layer."""
        return sum(len(c.points) for c in self.curves)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC and layer files."""
        return {
            "amount": self.amount,
            "color": self.color_hex,
            "polygons": [[p.to_list() for p in poly] for poly in self.polygons],
            "curves": [c.to_dict() for c in self.curves],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Layer":
        """Deserialize from dictionary."""
        color = data["color"]
        if isinstance(color, str):
            color = int(color.lstrip("#"), 16)
        return cls(
            amount=data["amount"],
            color=color,
            polygons=[[Point(x, y) for x, y in poly] for poly in data.get("polygons", [])],
            curves=[Curve.from_dict(c) for c in data.get("curves", [])],
        )
