"""2D vector arithmetic on Points.

Points double as vectors. All functions are pure and well-defined for any
finite input, except ``normalize`` on the zero vector.
"""

import math

from topomap.domain.geometry import Point
from topomap.exceptions import ZeroLengthVectorError

# Absolute tolerance for "is zero" checks and tolerant point equality.
EPSILON = 1e-9


def add(*vectors: Point) -> Point:
    """Sum any number of vectors."""
    x = 0.0
    y = 0.0
    for v in vectors:
        x += v.x
        y += v.y
    return Point(x, y)


def subtract(v1: Point, v2: Point) -> Point:
    """Return ``v1 - v2``."""
    return Point(v1.x - v2.x, v1.y - v2.y)


def scale(v: Point, factor: float) -> Point:
    """Multiply a vector by a scalar."""
    return Point(v.x * factor, v.y * factor)


def divide(v: Point, divisor: float) -> Point:
    """Divide a vector by a scalar."""
    return Point(v.x / divisor, v.y / divisor)


def vector_between(p1: Point, p2: Point) -> Point:
    """Vector pointing from ``p1`` to ``p2``."""
    return Point(p2.x - p1.x, p2.y - p1.y)


def dot(v1: Point, v2: Point) -> float:
    """Dot product."""
    return v1.x * v2.x + v1.y * v2.y


def cross(v1: Point, v2: Point) -> float:
    """2D cross product (the determinant of ``[v1 v2]``)."""
    return v1.x * v2.y - v2.x * v1.y


def magnitude(v: Point) -> float:
    """Euclidean length of a vector."""
    return math.sqrt(dot(v, v))


def normalize(v: Point) -> Point:
    """Scale a vector to unit length.

    Raises:
        ZeroLengthVectorError: If the vector has zero length
    """
    length = magnitude(v)
    if length == 0.0:
        raise ZeroLengthVectorError(v.x, v.y)
    return scale(v, 1.0 / length)


def distance_squared(p1: Point, p2: Point) -> float:
    """Squared Euclidean distance between two points."""
    return (p2.x - p1.x) ** 2 + (p2.y - p1.y) ** 2


def distance(p1: Point, p2: Point) -> float:
    """Euclidean distance between two points."""
    return math.hypot(p2.x - p1.x, p2.y - p1.y)


def angle_between(v1: Point, v2: Point) -> float:
    """Signed angle that rotates ``v1`` onto ``v2``.

    Returns:
        Angle in radians, in the range (-pi, pi]
    """
    angle = math.atan2(v2.y, v2.x) - math.atan2(v1.y, v1.x)
    if angle > math.pi:
        angle -= 2 * math.pi
    elif angle <= -math.pi:
        angle += 2 * math.pi
    return angle


def is_zero(value: float) -> bool:
    """Check if a scalar is zero within EPSILON."""
    return abs(value) < EPSILON


def is_close(p1: Point, p2: Point) -> bool:
    """Check if two points coincide within EPSILON on both axes."""
    return is_zero(p1.x - p2.x) and is_zero(p1.y - p2.y)


def centroid(points: list[Point]) -> Point:
    """Arithmetic mean of a non-empty list of points."""
    return divide(add(*points), len(points))
