"""Editable point sequences with user-adjusted curve handles.

A Pointset is the editor-level representation of one sketched curve: the
ordered points plus one "control point diff" per Bezier handle. The diffs
are offsets from the canonical handles derived from monotone tangents, so a
Pointset with all-zero diffs renders exactly as the fitted curve.

Points are always addressed by index. Editors keep indices (not Point
references) in their selection and undo state, since Points are values and
references do not survive insertion, deletion or serialization.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from topomap.domain.geometry import Point

_ZERO = Point(0.0, 0.0)


@dataclass
class Pointset:
    """An ordered point sequence with per-handle control point diffs.

    For n points there are ``2 * (n - 1)`` diffs: entries ``2 * i`` and
    ``2 * i + 1`` shape the segment from point ``i`` to point ``i + 1``.

    Attributes:
        points: Ordered points of the sketched curve
        control_point_diffs: Offsets applied to the base control points
    """

    points: list[Point] = field(default_factory=list)
    control_point_diffs: list[Point] = field(default_factory=list)

    def __post_init__(self) -> None:
        expected = max(0, 2 * (len(self.points) - 1))
        if not self.control_point_diffs and expected:
            self.control_point_diffs = [_ZERO] * expected

    def __len__(self) -> int:
        return len(self.points)

    def is_empty(self) -> bool:
        """Check if pointset has no points."""
        return not self.points

    def base_control_points(self) -> list[Point]:
        """Control points derived from monotone tangents, without diffs."""
        from topomap.core.curves import control_points_from_tangents, monotone_tangents

        if len(self.points) <= 1:
            return []
        return control_points_from_tangents(self.points, monotone_tangents(self.points))

    def effective_control_points(self) -> list[Point]:
        """Base control points with the user's diffs applied."""
        base = self.base_control_points()
        return [
            Point(cp.x + diff.x, cp.y + diff.y)
            for cp, diff in zip(base, self.control_point_diffs)
        ]

    def control_points_for_point(
        self, index: int, control_points: list[Point] | None = None
    ) -> tuple[Point | None, Point | None]:
        """Get the incoming and outgoing handle of a point.

        Args:
            index: Point index
            control_points: Precomputed effective control points (optional)

        Returns:
            Tuple of (incoming, outgoing); None at the open ends
        """
        if control_points is None:
            control_points = self.effective_control_points()
        incoming = control_points[2 * index - 1] if index > 0 else None
        outgoing = control_points[2 * index] if index < len(self.points) - 1 else None
        return incoming, outgoing

    def insert_point(
        self,
        index: int,
        point: Point,
        incoming_diff: Point | None = None,
        outgoing_diff: Point | None = None,
    ) -> None:
        """Insert a point and the diffs for its handles.

        Args:
            index: Position of the new point
            point: Point to insert
            incoming_diff: Diff for the handle before the point
            outgoing_diff: Diff for the handle after the point
        """
        self.points.insert(index, point)
        diffs = self.control_point_diffs
        length = len(self.points)
        if length <= 1:
            return

        if index > 0:
            diffs.insert(2 * index - 1, incoming_diff or _ZERO)
        if index < length - 1:
            diffs.insert(2 * index, outgoing_diff or _ZERO)

        # A new endpoint opens a segment whose far handle belongs to the old endpoint.
        if index == 0:
            mirrored = _negate(diffs[1]) if length > 2 else _ZERO
            diffs.insert(1, mirrored)
        elif index == length - 1:
            mirrored = _negate(diffs[-2]) if length > 2 else _ZERO
            diffs.insert(2 * index - 2, mirrored)

    def delete_at(self, index: int) -> Point:
        """Delete a point and the diffs that belong to it.

        Deleting an interior point merges its two segments, keeping the
        outer handles. Deleting an endpoint drops its whole segment.

        Args:
            index: Index of the point to delete

        Returns:
            The deleted point
        """
        length = len(self.points)
        removed = self.points.pop(index)
        diffs = self.control_point_diffs
        if length <= 1:
            diffs.clear()
        elif index == 0:
            del diffs[0:2]
        elif index == length - 1:
            del diffs[-2:]
        else:
            del diffs[2 * index - 1 : 2 * index + 1]
        return removed

    def delete_at_indices(self, indices: Iterable[int]) -> list[Point]:
        """Delete several points, highest index first.

        Returns:
            Deleted points in ascending index order
        """
        removed = [self.delete_at(i) for i in sorted(set(indices), reverse=True)]
        return list(reversed(removed))

    def move_point(self, index: int, point: Point) -> None:
        """Move a point; its diffs stay relative to the new base handles."""
        self.points[index] = point

    def move_control_point(
        self, cp_index: int, target: Point, mirror_index: int | None = None
    ) -> None:
        """Drag an effective control point onto ``target``.

        Args:
            cp_index: Index of the dragged handle
            target: New location of the handle
            mirror_index: Sibling handle of the same point, mirrored through it
        """
        effective = self.effective_control_points()
        self.control_point_diffs[cp_index] = _shift(
            self.control_point_diffs[cp_index], target, effective[cp_index]
        )
        if mirror_index is not None:
            # Handle 2i-1 and 2i belong to point i.
            owner = self.points[(max(cp_index, mirror_index) + 1) // 2]
            mirrored = Point(2 * owner.x - target.x, 2 * owner.y - target.y)
            self.control_point_diffs[mirror_index] = _shift(
                self.control_point_diffs[mirror_index], mirrored, effective[mirror_index]
            )

    def reset_control_points(self, indices: Iterable[int]) -> None:
        """Zero the handle diffs of the given points."""
        for i in indices:
            if i > 0:
                self.control_point_diffs[2 * i - 1] = _ZERO
            if i < len(self.points) - 1:
                self.control_point_diffs[2 * i] = _ZERO

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {
            "points": [p.to_dict() for p in self.points],
            "control_point_diffs": [d.to_dict() for d in self.control_point_diffs],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Pointset":
        """Deserialize from dictionary."""
        return cls(
            points=[Point.from_dict(p) for p in data["points"]],
            control_point_diffs=[Point.from_dict(d) for d in data.get("control_point_diffs", [])],
        )


def _negate(p: Point) -> Point:
    return Point(-p.x, -p.y)


def _shift(diff: Point, target: Point, current: Point) -> Point:
    return Point(diff.x + target.x - current.x, diff.y + target.y - current.y)
