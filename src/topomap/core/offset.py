"""Polygon offsetting with mitered corners.

Each edge of a clockwise polygon is pushed outward along its unit normal,
and consecutive offset edges are intersected to find the new corners. The
miter is unbounded: sharp corners produce long spikes, which the layering
pipeline keeps in check by expanding in small steps.
"""

from topomap.core.intersection import intersect_segments, intersection_point
from topomap.core.polygon import canonical_clockwise, is_collinear
from topomap.core.vector import add, cross, normalize, scale, vector_between
from topomap.domain.geometry import Point, Polygon, Segment


def edge_normal(segment: Segment) -> Point:
    """Unit normal of an edge, pointing outward for clockwise polygons.

    Of the two perpendiculars, picks the one whose cross product with the
    edge direction is negative.

    Raises:
        ZeroLengthVectorError: If the segment has zero length
    """
    v = vector_between(segment.start, segment.end)
    n1 = normalize(Point(-v.y, v.x))
    n2 = normalize(Point(v.y, -v.x))
    return n1 if cross(v, n1) < 0 else n2


def expand(polygon: Polygon, distance: float) -> Polygon:
    """Offset a polygon outward by ``distance``.

    Vertices that repeat a neighbour or sit on a straight line between their
    neighbours are dropped, as are corners whose offset edges turn out to
    be parallel.

    Args:
        polygon: Polygon in any winding order
        distance: Offset distance; 0 returns the cleaned clockwise polygon

    Returns:
        New clockwise polygon, possibly with fewer vertices than the input
    """
    pts = canonical_clockwise(polygon)
    n = len(pts)
    result: Polygon = []
    for i in range(n):
        pt = pts[i]
        prev_pt = pts[(i - 1) % n]
        next_pt = pts[(i + 1) % n]
        if pt == next_pt or prev_pt == pt or is_collinear(prev_pt, pt, next_pt):
            continue

        n1 = edge_normal(Segment(prev_pt, pt))
        n2 = edge_normal(Segment(pt, next_pt))

        prev_edge = Segment(add(prev_pt, scale(n1, distance)), add(pt, scale(n1, distance)))
        # Runs from next_pt back to pt.
        next_edge = Segment(add(next_pt, scale(n2, distance)), add(pt, scale(n2, distance)))

        inters = intersect_segments(prev_edge, next_edge)
        if inters is None:
            continue
        result.append(intersection_point(inters, prev_edge))

    return result
