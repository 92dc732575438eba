"""Layering pipeline: concentric contour bands around a union of polygons.

Bands are built cumulatively. Each band starts from the previous band's
polygons, grows them in unit steps (re-unioning after every step so that
neighbouring shapes merge as they touch), cleans up any remaining
self-crossings, and fits closed curves to the result.

The loop is written as a fold over the configured bands, threading an
immutable ``LayerState`` through ``functools.reduce``.
"""

import logging
import math
from dataclasses import dataclass
from functools import reduce

from topomap.config import LayerConfig
from topomap.core.curves import fit_closed_curve
from topomap.core.offset import expand
from topomap.core.polygon import densify, has_self_intersections, remove_self_intersections
from topomap.core.polygon import reorder_around_centroid
from topomap.core.union import union_all
from topomap.domain.curve import Layer
from topomap.domain.geometry import Polygon

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LayerState:
    """Accumulator threaded through the band fold.

    Attributes:
        union: Polygons of the most recent band
        amount: Expansion amount reached so far
        layers: Layers emitted so far
    """

    union: tuple[Polygon, ...]
    amount: float
    layers: tuple[Layer, ...] = ()


def prepare_polygons(polygons: list[Polygon], repair: bool = True) -> list[Polygon]:
    """Repair point order of self-intersecting input polygons.

    Args:
        polygons: Raw input polygons
        repair: Reorder self-intersecting polygons around their centroid

    Returns:
        New list of polygons, self-intersecting ones reordered
    """
    if not repair:
        return list(polygons)
    return [reorder_around_centroid(p) if has_self_intersections(p) else p for p in polygons]


def expand_stepwise(union: list[Polygon], total: float, step: float) -> list[Polygon]:
    """Grow polygons by ``total`` in increments of ``step``.

    Re-unions after every increment. A single large offset would fold over
    itself at concave corners; small steps let neighbouring parts merge
    first.

    Returns:
        Unioned polygons after ``floor(total / step)`` increments
    """
    united = union
    if step <= 0 or total <= 0:
        return united
    steps = math.floor(total / step + 1e-9)
    for _ in range(steps):
        united = union_all([expand(p, step) for p in united])
    return united


def _advance(state: LayerState, band: tuple[float, int], config: LayerConfig) -> LayerState:
    amount, color = band
    delta = amount - state.amount

    expanded = expand_stepwise(list(state.union), delta, config.step)
    cleaned = [remove_self_intersections(p) for p in expanded]
    if config.max_edge_length is not None:
        cleaned = [densify(p, config.max_edge_length, config.max_points) for p in cleaned]

    curves = [c for c in (fit_closed_curve(p) for p in cleaned) if not c.is_empty()]
    layer = Layer(amount=amount, color=color, polygons=cleaned, curves=curves)

    logger.debug(
        "Built layer at amount %s: %d polygons, %d curves", amount, len(cleaned), len(curves)
    )
    return LayerState(
        union=tuple(cleaned),
        amount=max(amount, state.amount),
        layers=(*state.layers, layer),
    )


def build_layers(
    polygons: list[Polygon],
    amounts: list[float] | None = None,
    *,
    config: LayerConfig | None = None,
) -> list[Layer]:
    """Build the concentric contour bands for a set of polygons.

    Args:
        polygons: Input polygons, possibly overlapping or self-intersecting
        amounts: Expansion amounts, one per band (overrides config.amounts)
        config: Layer settings (defaults to LayerConfig())

    Returns:
        One Layer per amount, in order; later layers enclose earlier ones
    """
    if config is None:
        config = LayerConfig()
    if amounts is None:
        amounts = config.amounts
    amounts = list(amounts)[: config.max_layers]

    prepared = prepare_polygons(polygons, repair=config.repair_self_intersections)
    union = union_all(prepared)

    bands = [(amount, config.color_for(i)) for i, amount in enumerate(amounts)]
    initial = LayerState(union=tuple(union), amount=0.0)
    final = reduce(lambda state, band: _advance(state, band, config), bands, initial)
    return list(final.layers)
