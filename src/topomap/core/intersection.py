"""Line segment and interval intersection.

The segment test solves for the parametric positions of the intersection
along both segments. It handles parallel, collinear and degenerate input
with EPSILON comparisons, and leaves range checks to the caller through
``is_valid_intersection`` and ``is_crossing``.
"""

from topomap.core.vector import (
    EPSILON,
    add,
    cross,
    dot,
    is_close,
    is_zero,
    scale,
    subtract,
    vector_between,
)
from topomap.domain.geometry import Intersection, Interval, Point, Segment


def intersect_intervals(i1: Interval, i2: Interval) -> Interval | None:
    """Intersect two closed intervals.

    Returns:
        The overlapping interval, or None if they are disjoint
    """
    result = Interval(max(i1.start, i2.start), min(i1.end, i2.end))
    return result if result.is_valid() else None


def intersect_segments(segment1: Segment, segment2: Segment) -> Intersection | None:
    """Find where two segments (or their supporting lines) intersect.

    For non-parallel segments the exact line intersection is returned, even
    if it lies outside either segment. Collinear segments resolve to the
    start of their overlap along ``segment1``, or to a shared endpoint.

    Args:
        segment1: First segment (parameter u)
        segment2: Second segment (parameter v)

    Returns:
        Intersection with u and v, or None for parallel non-collinear
        segments and for collinear segments that do not touch

    Examples:
        >>> s1 = Segment(Point(0.0, 0.0), Point(10.0, 0.0))
        >>> s2 = Segment(Point(5.0, -5.0), Point(5.0, 5.0))
        >>> intersect_segments(s1, s2)
        Intersection(u=0.5, v=0.5)
    """
    s1 = segment1.start
    s2 = segment2.start
    r = vector_between(s1, segment1.end)
    s = vector_between(s2, segment2.end)
    q = vector_between(s1, s2)

    numerator = cross(q, r)
    denom = cross(r, s)

    if is_zero(denom):
        if not is_zero(numerator):
            return None
        return _intersect_collinear(segment1, segment2, r, s, q)

    u = cross(q, s) / denom
    v = numerator / denom
    return Intersection(u, v)


def _intersect_collinear(
    segment1: Segment, segment2: Segment, r: Point, s: Point, q: Point
) -> Intersection | None:
    """Resolve segments lying on the same line."""
    dot_r_r = dot(r, r)
    if not is_zero(dot_r_r):
        u0 = dot(q, r) / dot_r_r
        u1 = dot(add(q, s), r) / dot_r_r
        if dot(s, r) < 0:
            u0, u1 = u1, u0

        overlap = intersect_intervals(Interval(u0, u1), Interval(0.0, 1.0))
        if overlap is not None:
            u = overlap.start
            dot_s_s = dot(s, s)
            if is_zero(dot_s_s):
                return Intersection(u, 0.0)
            v = (dot(subtract(segment1.start, segment2.start), s) + dot(scale(r, u), s)) / dot_s_s
            return Intersection(u, v)

    # Collinear without overlap: only shared endpoints count
    if is_close(segment1.start, segment2.start):
        return Intersection(0.0, 0.0)
    if is_close(segment2.start, segment1.end):
        return Intersection(1.0, 0.0)
    if is_close(segment1.start, segment2.end):
        return Intersection(0.0, 1.0)
    if is_close(segment1.end, segment2.end):
        return Intersection(1.0, 1.0)
    return None


def is_valid_intersection(intersection: Intersection | None) -> bool:
    """Check if an intersection lies on both segments and is not a mere touch.

    Both parameters must be within ``[-EPSILON, 1 + EPSILON]`` and at least
    one of them strictly inside (0, 1), so segments that only share an
    endpoint are not reported.
    """
    if intersection is None:
        return False
    u, v = intersection.u, intersection.v
    in_range = -EPSILON <= u <= 1 + EPSILON and -EPSILON <= v <= 1 + EPSILON
    return in_range and (0 < u < 1 or 0 < v < 1)


def is_crossing(intersection: Intersection | None) -> bool:
    """Check if an intersection lies strictly inside both segments."""
    if intersection is None:
        return False
    return 0 < intersection.u < 1 and 0 < intersection.v < 1


def intersection_point(intersection: Intersection, segment1: Segment) -> Point:
    """Coordinates of an intersection, measured along the first segment."""
    return add(segment1.start, scale(vector_between(segment1.start, segment1.end), intersection.u))
