from __future__ import annotations

from typing import Optional

import numpy as np

from .geometry import LogicalCoordinate, delta, try_step
from .grid import CellGraph

# Probability of continuing straight when that move is available.
STRAIGHT_BIAS = 0.8


def straight_ahead(
    position: LogicalCoordinate,
    previous: Optional[LogicalCoordinate],
    graph: CellGraph,
) -> Optional[LogicalCoordinate]:
    """Cell reached by repeating the last move, if it lies on the grid."""
    if previous is None:
        return None
    dr, dc = delta(previous, position)
    candidate = try_step(position, dr, dc)
    if candidate is None or not graph.contains(candidate):
        return None
    return candidate


def select_next(
    position: LogicalCoordinate,
    previous: Optional[LogicalCoordinate],
    graph: CellGraph,
    rng: np.random.Generator,
    straight_bias: float = STRAIGHT_BIAS,
) -> Optional[LogicalCoordinate]:
    """
    Pick the next cell to carve into from ``position``.

    Returns None when every neighbour has been touched, which tells the
    caller to backtrack. With two or more options, one uniform draw is
    taken; if it lands at or above ``1 - straight_bias`` and the
    straight-ahead cell is still untouched, that cell wins. Otherwise
    a second draw picks uniformly among the options.
    """
    options = graph.untouched_neighbors(position)
    if not options:
        return None
    if len(options) == 1:
        return options[0]

    straight = straight_ahead(position, previous, graph)
    # rounded so 1 - 0.8 compares as exactly 0.2
    threshold = round(1.0 - straight_bias, 12)
    draw = rng.random()
    if draw >= threshold and straight is not None and straight in options:
        return straight
    return options[int(rng.integers(len(options)))]


__all__ = ["STRAIGHT_BIAS", "straight_ahead", "select_next"]
