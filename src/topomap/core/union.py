"""Graph-based boolean union of simple polygons.

The union of two polygons is found by tracing the outer boundary of the
planar graph formed by both outlines and their crossing points:

1. Both outlines become adjacency graphs; every proper crossing splits the
   crossed edges of both polygons.
2. Without crossings the polygons are either nested or disjoint, which is
   decided with a point-in-polygon test.
3. With crossings the walk starts at a vertex that is guaranteed to lie on
   the hull, fixes a clockwise direction, and at every crossing takes the
   leftmost turn on screen, which keeps it on the outside.

``union_all`` folds any number of polygons into a set of disjoint
components with the pairwise union.
"""

import logging
from collections import deque

from topomap.core.intersection import intersect_segments, intersection_point, is_crossing
from topomap.core.polygon import point_in_polygon, segments, winding_is_clockwise
from topomap.core.vector import angle_between, distance_squared, vector_between
from topomap.domain.geometry import Point, Polygon, Segment

logger = logging.getLogger(__name__)

# Decimal places kept when keying graph vertices by coordinate.
KEY_PRECISION = 9

PointKey = tuple[float, float]


def point_key(p: Point) -> PointKey:
    """Canonical dictionary key for a graph vertex."""
    return (round(p.x, KEY_PRECISION), round(p.y, KEY_PRECISION))


class BoundaryGraph:
    """Undirected adjacency graph of polygon vertices.

    Vertices are keyed by rounded coordinates, so equal points coming from
    different polygons collapse into one vertex.
    """

    def __init__(self) -> None:
        self._points: dict[PointKey, Point] = {}
        self._neighbours: dict[PointKey, list[Point]] = {}

    def __contains__(self, p: Point) -> bool:
        return point_key(p) in self._neighbours

    def __len__(self) -> int:
        return len(self._neighbours)

    def _add_neighbour(self, to: Point, neighbour: Point) -> None:
        key = point_key(to)
        if key not in self._neighbours:
            self._points[key] = to
            self._neighbours[key] = []
        self._neighbours[key].append(neighbour)

    def _remove_neighbour(self, to: Point, neighbour: Point) -> None:
        key = point_key(to)
        if key not in self._neighbours:
            return
        target = point_key(neighbour)
        self._neighbours[key] = [n for n in self._neighbours[key] if point_key(n) != target]

    def link(self, p1: Point, p2: Point) -> None:
        """Connect two vertices, creating them if needed."""
        self._add_neighbour(p1, p2)
        self._add_neighbour(p2, p1)

    def unlink(self, p1: Point, p2: Point) -> None:
        """Remove the edge between two vertices."""
        self._remove_neighbour(p1, p2)
        self._remove_neighbour(p2, p1)

    def neighbours(self, p: Point) -> list[Point]:
        """Neighbours of a vertex, in insertion order."""
        return self._neighbours.get(point_key(p), [])

    def merge(self, other: "BoundaryGraph") -> "BoundaryGraph":
        """Combine two graphs; shared vertices get both neighbour lists."""
        merged = BoundaryGraph()
        for graph in (self, other):
            for key, neighbours in graph._neighbours.items():
                if key not in merged._neighbours:
                    merged._points[key] = graph._points[key]
                    merged._neighbours[key] = []
                merged._neighbours[key].extend(neighbours)
        return merged


def _furthest_from_lower_left(points: list[Point]) -> Point:
    """Vertex farthest from the lower-left bounding corner (min x, max y on screen)."""
    lower_left = Point(min(p.x for p in points), max(p.y for p in points))
    return max(points, key=lambda p: distance_squared(p, lower_left))


def union(poly_a: Polygon, poly_b: Polygon) -> list[Polygon]:
    """Union of two simple polygons.

    Args:
        poly_a: First polygon
        poly_b: Second polygon

    Returns:
        ``[merged]`` when the polygons overlap, ``[poly_a]`` or ``[poly_b]``
        when one contains the other, and ``[poly_a, poly_b]`` when they are
        disjoint
    """
    b_graph = BoundaryGraph()
    b_segments = segments(poly_b)
    for s in b_segments:
        b_graph.link(s.start, s.end)

    a_graph = BoundaryGraph()
    have_crossing = False
    for s1 in segments(poly_a):
        crossings: list[Point] = []
        # Snapshot: splits below must not affect the edges seen for s1.
        for s2 in list(b_segments):
            inters = intersect_segments(s1, s2)
            if not is_crossing(inters):
                continue
            pt = intersection_point(inters, s1)
            crossings.append(pt)

            b_graph.link(s2.start, pt)
            b_graph.link(s2.end, pt)
            b_graph.unlink(s2.start, s2.end)
            idx = b_segments.index(s2)
            b_segments[idx : idx + 1] = [Segment(s2.start, pt), Segment(pt, s2.end)]
            have_crossing = True

        crossings.sort(key=lambda p: distance_squared(s1.start, p))
        previous = s1.start
        for pt in [*crossings, s1.end]:
            a_graph.link(previous, pt)
            previous = pt

    if not have_crossing:
        if not poly_b or point_in_polygon(poly_a, poly_b[0]):
            return [poly_a]
        if not poly_a or point_in_polygon(poly_b, poly_a[0]):
            return [poly_b]
        return [poly_a, poly_b]

    graph = a_graph.merge(b_graph)
    start = _furthest_from_lower_left([*poly_a, *poly_b])
    return [_trace_outer_boundary(graph, start)]


def _trace_outer_boundary(graph: BoundaryGraph, start: Point) -> Polygon:
    """Walk the outside of a merged boundary graph, clockwise."""
    queue = deque([start])
    visited = {point_key(start)}
    result: Polygon = []
    previous: Point | None = None
    orientation_fixed = False

    def visit(p: Point) -> None:
        queue.append(p)
        visited.add(point_key(p))

    while queue:
        v = queue.popleft()
        result.append(v)
        neighbours = graph.neighbours(v)
        if not neighbours:
            break

        if len(neighbours) == 2 or previous is None:
            if not orientation_fixed:
                n0, n1 = neighbours[0], neighbours[-1]
                # Always walk clockwise.
                nxt = n0 if winding_is_clockwise([n1, v, n0]) else n1
                orientation_fixed = True
                visit(nxt)
            else:
                prev_key = point_key(previous)
                nxt = next(
                    (
                        n
                        for n in neighbours
                        if point_key(n) != prev_key and point_key(n) not in visited
                    ),
                    None,
                )
                if nxt is not None:
                    visit(nxt)
        else:
            incoming = vector_between(previous, v)
            prev_key = point_key(previous)
            candidates = sorted(
                (n for n in neighbours if point_key(n) != prev_key),
                key=lambda n: angle_between(incoming, vector_between(v, n)),
            )
            if candidates and point_key(candidates[0]) not in visited:
                visit(candidates[0])
        previous = v

    return result


def union_all(polygons: list[Polygon]) -> list[Polygon]:
    """Union any number of polygons into disjoint components.

    Polygons are folded in left to right. Each new polygon is unioned with
    every component collected so far: components it does not touch are
    kept as they are, components it overlaps (or contains, or is contained
    by) are absorbed into a running union that is appended last.

    Polygons with fewer than 3 points are ignored.

    Returns:
        List of component polygons
    """
    result: list[Polygon] = []
    for current in polygons:
        if len(current) < 3:
            continue
        if not result:
            result = [current]
            continue

        running = current
        components: list[Polygon] = []
        for part in result:
            merged = union(part, running)
            if len(merged) == 2:
                components.append(part)
            else:
                running = merged[0]
        components.append(running)
        result = components

    logger.debug("Unioned %d polygons into %d components", len(polygons), len(result))
    return result
