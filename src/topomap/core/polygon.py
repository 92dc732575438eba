"""Polygon utilities: winding, containment and self-intersections.

Polygons are plain lists of Points, implicitly closed. Coordinates follow
screen conventions (y grows downward), which is what "clockwise" refers to
throughout this module.

All functions are pure: inputs are never mutated and degenerate polygons
(fewer than 3 points, repeated points) produce empty or pass-through
results instead of errors.
"""

import logging
import math
from functools import cmp_to_key

from topomap.core.intersection import (
    intersect_segments,
    intersection_point,
    is_valid_intersection,
)
from topomap.core.vector import (
    add,
    centroid,
    cross,
    distance,
    distance_squared,
    divide,
    magnitude,
    scale,
    subtract,
    vector_between,
)
from topomap.domain.geometry import Point, Polygon, Segment, WindingDirection

logger = logging.getLogger(__name__)

# Relative tolerance (sine of the angle) for collinearity tests.
COLLINEAR_TOLERANCE = 1e-6


def segments(polygon: Polygon) -> list[Segment]:
    """Closed list of directed segments, including last -> first.

    Returns:
        Segments of the polygon, or an empty list for fewer than 2 points
    """
    n = len(polygon)
    if n < 2:
        return []
    return [Segment(polygon[i], polygon[(i + 1) % n]) for i in range(n)]


def winding_is_clockwise(polygon: Polygon) -> bool:
    """Test winding order with the shoelace-style edge sum.

    Sums ``(x2 - x1) * (y2 + y1)`` over all edges; a negative sum means
    clockwise on a y-down screen.

    Examples:
        >>> square = [Point(0, 0), Point(10, 0), Point(10, 10), Point(0, 10)]
        >>> winding_is_clockwise(square)
        True
        >>> winding_is_clockwise(list(reversed(square)))
        False
    """
    total = 0.0
    for s in segments(polygon):
        total += (s.end.x - s.start.x) * (s.end.y + s.start.y)
    return total < 0


def winding_direction(polygon: Polygon) -> WindingDirection:
    """Winding direction of a polygon as an enum."""
    if winding_is_clockwise(polygon):
        return WindingDirection.CLOCKWISE
    return WindingDirection.COUNTER_CLOCKWISE


def canonical_clockwise(polygon: Polygon) -> Polygon:
    """Return the polygon in clockwise order.

    Polygons that are already clockwise, and polygons with 2 points or
    fewer, are returned unchanged.
    """
    if len(polygon) <= 2 or winding_is_clockwise(polygon):
        return polygon
    return list(reversed(polygon))


def signed_area(polygon: Polygon) -> float:
    """Signed area using the shoelace formula.

    Positive for clockwise polygons on a y-down screen (counter-clockwise in
    mathematical orientation). Returns 0.0 for degenerate polygons.
    """
    n = len(polygon)
    if n < 3:
        return 0.0

    area = 0.0
    for i in range(n):
        j = (i + 1) % n
        area += polygon[i].x * polygon[j].y
        area -= polygon[j].x * polygon[i].y

    return area / 2.0


def area(polygon: Polygon) -> float:
    """Unsigned polygon area."""
    return abs(signed_area(polygon))


def bounds(points: list[Point]) -> tuple[float, float, float, float]:
    """Bounding rectangle of a point set.

    Returns:
        Tuple of (min_x, min_y, width, height). A zero extent is reported as
        1 so the result can always be used as a divisor.
    """
    if not points:
        return (0.0, 0.0, 1.0, 1.0)
    xs = [p.x for p in points]
    ys = [p.y for p in points]
    min_x, max_x = min(xs), max(xs)
    min_y, max_y = min(ys), max(ys)
    width = max_x - min_x if max_x != min_x else 1.0
    height = max_y - min_y if max_y != min_y else 1.0
    return (min_x, min_y, width, height)


def point_in_polygon(polygon: Polygon, point: Point) -> bool:
    """Even-odd containment test.

    Casts a ray from the point in the +x direction and counts the polygon
    edges it hits (``u`` within the edge, ``v >= 0`` along the ray).

    Args:
        polygon: Polygon to test against
        point: The point to test

    Returns:
        True if the ray crosses the boundary an odd number of times
    """
    ray = Segment(point, Point(point.x + 1.0, point.y))
    hits = 0
    for s in segments(polygon):
        inters = intersect_segments(s, ray)
        if inters is not None and 0 <= inters.u <= 1 and inters.v >= 0:
            hits += 1
    return hits % 2 == 1


def has_self_intersections(polygon: Polygon) -> bool:
    """Check every pair of edges for a valid intersection.

    Edges that merely share an endpoint do not count, see
    ``is_valid_intersection``.
    """
    segs = segments(polygon)
    for i in range(len(segs)):
        for j in range(i + 1, len(segs)):
            if is_valid_intersection(intersect_segments(segs[i], segs[j])):
                return True
    return False


def reorder_around_centroid(polygon: Polygon) -> Polygon:
    """Sort points by angle around their centroid.

    Used to repair point sequences that were entered in an arbitrary order.
    Points on the same ray from the centroid are ordered farthest first.

    Returns:
        A new list with the same points in angular order
    """
    if not polygon:
        return []
    center = centroid(polygon)

    def compare(a: Point, b: Point) -> float:
        a_center = vector_between(a, center)
        b_center = vector_between(b, center)
        if a_center.x >= 0 and b_center.x < 0:
            return -1
        if a_center.x < 0 and b_center.x >= 0:
            return 1
        if a_center.x == 0 and b_center.x == 0:
            if a_center.y >= 0 and b_center.y >= 0:
                return b_center.y - a_center.y
        det = cross(a_center, b_center)
        if det != 0:
            return -1 if det < 0 else 1
        return distance_squared(b, center) - distance_squared(a, center)

    return sorted(polygon, key=cmp_to_key(compare))


def remove_self_intersections(polygon: Polygon) -> Polygon:
    """Cut self-crossing loops out of a polygon.

    Walks the clockwise polygon edge by edge. When the current edge crosses
    a later edge, the crossing closest to the current edge's start is
    emitted and the walk jumps to the later edge, dropping the loop between
    them.

    This is a greedy heuristic: inputs with many overlapping loops may keep
    small artifacts.

    Returns:
        A new, best-effort simple polygon
    """
    polygon = canonical_clockwise(polygon)
    segs = segments(polygon)
    if not segs:
        return polygon

    result = [segs[0].start]
    i = 0
    while i < len(segs):
        current = segs[i]
        closest_index = -1
        closest_point: Point | None = None
        closest_distance = math.inf
        for j in range(i + 1, len(segs)):
            inters = intersect_segments(current, segs[j])
            if not is_valid_intersection(inters):
                continue
            pt = intersection_point(inters, current)
            dist = distance_squared(current.start, pt)
            if dist <= closest_distance:
                closest_index, closest_point, closest_distance = j, pt, dist

        if closest_point is not None:
            logger.debug(
                "Cutting self-intersection loop between edges %d and %d", i, closest_index
            )
            result.append(closest_point)
            i = closest_index
        if i < len(segs) - 1:
            result.append(segs[i].end)
        i += 1

    return result


def is_collinear(p1: Point, p2: Point, p3: Point) -> bool:
    """Check if three points lie on one line.

    Compares the sine of the angle at ``p1`` against COLLINEAR_TOLERANCE, so
    the test does not depend on the scale of the coordinates. Coincident
    points count as collinear.
    """
    a = subtract(p2, p1)
    b = subtract(p3, p1)
    return abs(cross(a, b)) <= COLLINEAR_TOLERANCE * magnitude(a) * magnitude(b)


def densify(
    polygon: Polygon, max_edge_length: float, max_points: int | None = None
) -> Polygon:
    """Insert evenly spaced points on long edges.

    Every closed edge with length >= ``max_edge_length`` gets
    ``floor(length / max_edge_length)`` interior points, so curve fitting has
    enough knots on long straight runs.

    With ``max_points`` set, the insertions are scaled down proportionally
    per edge so the result never exceeds ``max_points`` points (a polygon
    already at or above the cap is returned unchanged).

    Args:
        polygon: Polygon to densify
        max_edge_length: Edge length that triggers subdivision
        max_points: Upper bound on the size of the result

    Returns:
        A new polygon with the inserted points
    """
    if len(polygon) < 2 or max_edge_length <= 0:
        return list(polygon)

    edges = segments(polygon)
    counts = []
    for s in edges:
        length = distance(s.start, s.end)
        counts.append(math.floor(length / max_edge_length) if length >= max_edge_length else 0)

    total = sum(counts)
    if max_points is not None:
        budget = max(0, max_points - len(polygon))
        if total > budget:
            logger.debug("Capping densify at %d points (%d requested)", max_points, total)
            counts = [c * budget // total for c in counts]

    result: Polygon = []
    for s, needed in zip(edges, counts):
        result.append(s.start)
        for j in range(1, needed + 1):
            weighted = add(scale(s.start, needed + 1 - j), scale(s.end, j))
            result.append(divide(weighted, needed + 1))
    return result
