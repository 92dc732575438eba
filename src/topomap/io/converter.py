"""Converters between terrain JSON and domain models.

Two terrain representations are understood:

- Plain polygons: ``{"polygons": [[[x, y], ...], ...]}`` or a bare list of
  polygons.
- Persisted pointsets, as saved by the terrain editor:
  ``{"pointsets": [{"points": [...], "controlPoints": [...]}], "width": W,
  "height": H}``. Coordinates are normalized to the bounding box of all
  points, and control points are stored as absolute positions.
"""

from typing import Any

from topomap.core.curves import control_points_from_tangents, monotone_tangents
from topomap.core.polygon import bounds
from topomap.domain.curve import Layer
from topomap.domain.geometry import Point, Polygon
from topomap.domain.pointset import Pointset

# Canvas offset applied to persisted pointsets when they are loaded.
PERSISTED_ORIGIN = Point(50.0, 100.0)


def json_to_point(value: Any) -> Point:
    """Convert an ``[x, y]`` pair or ``{"x", "y"}`` mapping to a Point.

    Raises:
        ValueError: If the value is not a 2D coordinate
    """
    if isinstance(value, dict):
        return Point(float(value["x"]), float(value["y"]))
    if isinstance(value, (list, tuple)) and len(value) == 2:
        return Point(float(value[0]), float(value[1]))
    raise ValueError(f"Not a coordinate pair: {value!r}")


def json_to_polygons(data: Any) -> list[Polygon]:
    """Convert plain polygon JSON to domain polygons.

    Raises:
        ValueError: If the structure is not a list of point lists
    """
    raw = data["polygons"] if isinstance(data, dict) else data
    if not isinstance(raw, list):
        raise ValueError("expected a list of polygons")

    polygons: list[Polygon] = []
    for i, poly in enumerate(raw):
        if not isinstance(poly, list):
            raise ValueError(f"polygon {i} is not a list of points")
        polygons.append([json_to_point(p) for p in poly])
    return polygons


def polygons_to_json(polygons: list[Polygon]) -> list[list[list[float]]]:
    """Convert domain polygons to nested coordinate lists."""
    return [[p.to_list() for p in poly] for poly in polygons]


def persisted_to_pointsets(data: dict[str, Any]) -> list[Pointset]:
    """Convert persisted editor JSON to pointsets.

    Normalized coordinates are scaled by the stored width and height and
    offset by PERSISTED_ORIGIN. Stored control points are turned into diffs
    against the tangent-derived control points of the scaled points.

    Raises:
        ValueError: If required keys are missing or malformed
    """
    try:
        width = float(data["width"])
        height = float(data["height"])
        entries = data["pointsets"]
    except (KeyError, TypeError) as e:
        raise ValueError(f"missing persisted field: {e}") from e

    def scale(p: Point) -> Point:
        return Point(p.x * width + PERSISTED_ORIGIN.x, p.y * height + PERSISTED_ORIGIN.y)

    pointsets: list[Pointset] = []
    if not isinstance(entries, list):
        raise ValueError("expected a list of pointsets")

    for i, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise ValueError(f"pointset {i} is not an object")
        # Pointsets with fewer than 2 points are saved as empty objects.
        if not entry.get("points"):
            continue
        points = [scale(json_to_point(p)) for p in entry["points"]]
        stored = [scale(json_to_point(p)) for p in entry.get("controlPoints", [])]
        base = control_points_from_tangents(points, monotone_tangents(points))
        if stored and len(stored) != len(base):
            raise ValueError(
                f"expected {len(base)} control points for {len(points)} points, got {len(stored)}"
            )
        diffs = [Point(s.x - b.x, s.y - b.y) for s, b in zip(stored, base)]
        pointsets.append(Pointset(points=points, control_point_diffs=diffs))
    return pointsets


def pointsets_to_persisted(pointsets: list[Pointset]) -> dict[str, Any]:
    """Convert pointsets to the persisted editor representation.

    Inverse of ``persisted_to_pointsets`` up to the canvas offset: points
    are normalized to the bounding box of all points, which becomes the
    stored width and height.
    """
    all_points = [p for ps in pointsets for p in ps.points]
    min_x, min_y, width, height = bounds(all_points)

    def normalize(p: Point) -> list[float]:
        return [(p.x - min_x) / width, (p.y - min_y) / height]

    entries: list[dict[str, Any]] = []
    for ps in pointsets:
        if ps.is_empty():
            continue
        if len(ps) < 2:
            entries.append({})
            continue
        entries.append(
            {
                "points": [normalize(p) for p in ps.points],
                "controlPoints": [normalize(p) for p in ps.effective_control_points()],
            }
        )
    return {"pointsets": entries, "width": width, "height": height}


convert_to_persisted = pointsets_to_persisted


def layers_to_json(layers: list[Layer], source: str) -> dict[str, Any]:
    """Build the layer output document."""
    return {"source": source, "layers": [layer.to_dict() for layer in layers]}


def json_to_layers(data: dict[str, Any]) -> list[Layer]:
    """Read layers back from an output document."""
    return [Layer.from_dict(entry) for entry in data.get("layers", [])]
