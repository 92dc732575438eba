"""Internal Bezier curve flattening.

This is an internal module containing helpers for Curve.to_polyline.
Not intended for public use.
"""

import math

from topomap.domain.geometry import Point

# Subdivision depth cap; 2**12 pieces per segment is far beyond any tolerance.
MAX_DEPTH = 12


def flatten_cubic(points: list[Point], tolerance: float, depth: int = 0) -> list[Point]:
    """Flatten a cubic Bezier curve using recursive subdivision.

    Uses De Casteljau's algorithm for subdivision.

    Args:
        points: List of 4 control points [p0, p1, p2, p3]
        tolerance: Maximum distance from true curve
        depth: Current recursion depth

    Returns:
        List of points approximating the curve, both endpoints included
    """
    p0, p1, p2, p3 = points

    # Calculate curve midpoint (at t=0.5)
    curve_mid_x = 0.125 * (p0.x + 3 * p1.x + 3 * p2.x + p3.x)
    curve_mid_y = 0.125 * (p0.y + 3 * p1.y + 3 * p2.y + p3.y)

    # Approximate with line segment midpoint
    line_mid_x = (p0.x + p3.x) / 2
    line_mid_y = (p0.y + p3.y) / 2

    distance = math.hypot(curve_mid_x - line_mid_x, curve_mid_y - line_mid_y)

    if distance <= tolerance or depth >= MAX_DEPTH:
        return [p0, p3]

    # First level
    q1 = _midpoint(p0, p1)
    q2 = _midpoint(p1, p2)
    q3 = _midpoint(p2, p3)

    # Second level
    r1 = _midpoint(q1, q2)
    r2 = _midpoint(q2, q3)

    # Third level (point on the curve)
    mid = _midpoint(r1, r2)

    left = flatten_cubic([p0, q1, r1, mid], tolerance, depth + 1)
    right = flatten_cubic([mid, r2, q3, p3], tolerance, depth + 1)

    # Combine, avoiding duplicate midpoint
    return left[:-1] + right


def _midpoint(a: Point, b: Point) -> Point:
    return Point((a.x + b.x) / 2, (a.y + b.y) / 2)
