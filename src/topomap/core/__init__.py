"""Core geometry algorithms for topomap.

This module contains the core algorithms for:

- Vector math and segment intersection
- Polygon utilities (winding, containment, self-intersection removal)
- Polygon union and outward offsetting
- Curve fitting (monotone Hermite and closed B-spline)
- The layering pipeline that ties them together

All functions are designed to be:
- Stateless (safe for use in worker processes)
- Pure (no side effects, inputs are never mutated)
- Tolerant of degenerate input (empty results instead of exceptions)

Key functions:
- union / union_all: Merge overlapping polygons
- expand: Offset a polygon outward with mitered corners
- remove_self_intersections: Cut self-crossing loops out of a polygon
- fit_closed_curve: Smooth a polygon into a closed Bezier curve
- build_layers: Build concentric contour bands

The batch processor lives in ``topomap.core.processor`` and is imported
from there, since it depends on the I/O layer.
"""

from topomap.core.curves import (
    closed_basis_curve_points,
    control_points_from_tangents,
    fit_closed_curve,
    fit_open_curve,
    monotone_tangents,
)
from topomap.core.intersection import (
    intersect_intervals,
    intersect_segments,
    intersection_point,
    is_crossing,
    is_valid_intersection,
)
from topomap.core.layers import build_layers, expand_stepwise, prepare_polygons
from topomap.core.offset import edge_normal, expand
from topomap.core.polygon import (
    area,
    bounds,
    canonical_clockwise,
    densify,
    has_self_intersections,
    is_collinear,
    point_in_polygon,
    remove_self_intersections,
    reorder_around_centroid,
    segments,
    signed_area,
    winding_direction,
    winding_is_clockwise,
)
from topomap.core.union import union, union_all

__all__ = [
    # Layering
    "build_layers",
    "expand_stepwise",
    "prepare_polygons",
    # Union and offset
    "edge_normal",
    "expand",
    "union",
    "union_all",
    # Curves
    "closed_basis_curve_points",
    "control_points_from_tangents",
    "fit_closed_curve",
    "fit_open_curve",
    "monotone_tangents",
    # Intersections
    "intersect_intervals",
    "intersect_segments",
    "intersection_point",
    "is_crossing",
    "is_valid_intersection",
    # Polygon functions
    "area",
    "bounds",
    "canonical_clockwise",
    "densify",
    "has_self_intersections",
    "is_collinear",
    "point_in_polygon",
    "remove_self_intersections",
    "reorder_around_centroid",
    "segments",
    "signed_area",
    "winding_direction",
    "winding_is_clockwise",
]
