"""Smooth curve fitting over point sequences.

Two families of curves are produced, both expressed as cubic Bezier
segments (see ``topomap.domain.Curve``):

- Open curves through the given points, with monotone cubic Hermite
  tangents (Fritsch-Carlson) converted to Bezier handles. Used for editable
  pointsets.
- Closed uniform cubic B-splines approximating a control polygon. Used to
  round off the jagged output of union and expansion.
"""

import math

from topomap.core.vector import EPSILON
from topomap.domain.curve import Curve
from topomap.domain.geometry import Point, Polygon

# Tangent magnitudes below this are treated as flat when limiting overshoot.
FLAT_TANGENT = 1e-5


def monotone_tangents(points: list[Point]) -> list[Point]:
    """Compute monotone cubic Hermite tangents for an open polyline.

    Follows Fritsch-Carlson: tangent slopes start as the mean of the
    neighbouring secants, are zeroed around flat secants, and are rescaled
    wherever they would make the cubic overshoot. Each slope ``m`` is then
    turned into a Bezier-ready vector ``(dx / 3 / len, m * dx / 3 / len)``
    with ``len = 1 + m**2`` and ``dx`` the point's horizontal half-span.

    A vertical secant is treated as flat, so the result never contains
    NaN or infinite components.

    Args:
        points: Ordered points of the polyline

    Returns:
        One tangent vector per input point
    """
    n = len(points)
    if n < 2:
        return [Point(0.0, 0.0) for _ in points]

    # Secant slopes
    d: list[float] = []
    for k in range(n - 1):
        run = points[k + 1].x - points[k].x
        rise = points[k + 1].y - points[k].y
        d.append(rise / run if abs(run) > EPSILON else 0.0)

    # Initial tangent slopes and half-spans
    m = [0.0] * n
    dx = [0.0] * n
    m[0] = d[0]
    dx[0] = points[1].x - points[0].x
    for k in range(1, n - 1):
        m[k] = (d[k - 1] + d[k]) / 2
        dx[k] = (points[k + 1].x - points[k - 1].x) / 2
    m[n - 1] = d[n - 2]
    dx[n - 1] = points[n - 1].x - points[n - 2].x

    # Flat secants force flat tangents on both sides
    for k in range(n - 1):
        if d[k] == 0:
            m[k] = 0.0
            m[k + 1] = 0.0

    # Limit overshoot
    for k in range(n - 1):
        if abs(m[k]) < FLAT_TANGENT or abs(m[k + 1]) < FLAT_TANGENT:
            continue
        a = m[k] / d[k]
        b = m[k + 1] / d[k]
        s = a * a + b * b
        if s > 9:
            t = 3 / math.sqrt(s)
            m[k] = t * a * d[k]
            m[k + 1] = t * b * d[k]

    tangents = []
    for i in range(n):
        length = 1 + m[i] * m[i]
        tangents.append(Point(dx[i] / 3 / length, m[i] * dx[i] / 3 / length))
    return tangents


def control_points_from_tangents(points: list[Point], tangents: list[Point]) -> list[Point]:
    """Convert Hermite tangents into Bezier control points.

    Returns:
        ``2 * (n - 1)`` control points: ``p1 + t1`` and ``p2 - t2`` for each
        consecutive pair of points
    """
    result: list[Point] = []
    for i in range(len(points) - 1):
        p1, p2 = points[i], points[i + 1]
        t1, t2 = tangents[i], tangents[i + 1]
        result.append(Point(p1.x + t1.x, p1.y + t1.y))
        result.append(Point(p2.x - t2.x, p2.y - t2.y))
    return result


def closed_basis_curve_points(points: list[Point]) -> tuple[list[Point], list[Point]]:
    """Convert a closed control polygon into a closed cubic B-spline.

    Runs the uniform cubic B-spline to Bezier recurrence around the polygon.
    Every new vertex ``p`` combined with the two previous vertices
    ``p0, p1`` yields handles ``(2*p0 + p1)/3`` and ``(p0 + 2*p1)/3`` and the
    knot ``(p0 + 4*p1 + p)/6``. The first three vertices are fed again at
    the end to close the loop.

    Args:
        points: Control polygon, at least 4 points

    Returns:
        Tuple of (knots, control_points); both empty for 3 points or fewer
    """
    knots: list[Point] = []
    controls: list[Point] = []
    if len(points) <= 3:
        return knots, controls

    f, s, t = points[0], points[1], points[2]
    knots.append(Point((f.x + 4 * s.x + t.x) / 6, (f.y + 4 * s.y + t.y) / 6))

    p0, p1 = s, t
    for p in [*points[3:], f, s, t]:
        controls.append(Point((2 * p0.x + p1.x) / 3, (2 * p0.y + p1.y) / 3))
        controls.append(Point((p0.x + 2 * p1.x) / 3, (p0.y + 2 * p1.y) / 3))
        knots.append(Point((p0.x + 4 * p1.x + p.x) / 6, (p0.y + 4 * p1.y + p.y) / 6))
        p0, p1 = p1, p
    return knots, controls


def fit_closed_curve(polygon: Polygon) -> Curve:
    """Fit a smooth closed curve to a polygon.

    Returns:
        Closed B-spline as a Curve; empty for polygons of 3 points or fewer
    """
    knots, controls = closed_basis_curve_points(polygon)
    return Curve(points=knots, control_points=controls)


def fit_open_curve(points: list[Point]) -> Curve:
    """Fit a monotone Hermite curve through an open point sequence."""
    if len(points) < 2:
        return Curve(points=list(points))
    return Curve(
        points=list(points),
        control_points=control_points_from_tangents(points, monotone_tangents(points)),
    )
