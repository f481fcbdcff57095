"""
Structural checks over an expanded maze board.

The board is the ``(2*height+1, 2*width+1)`` uint8 array returned by
``CellGraph.slots()``: non-zero slots are open (visited or paved), zero
slots are walls.
"""

from __future__ import annotations

from typing import Dict, Tuple

import numpy as np
from numba import njit
from scipy import ndimage


def _grid_shape(slots: np.ndarray) -> Tuple[int, int]:
    rows, cols = slots.shape
    return (rows - 1) // 2, (cols - 1) // 2


def open_mask(slots: np.ndarray) -> np.ndarray:
    return np.asarray(slots) != 0


def count_components(slots: np.ndarray) -> int:
    """Number of 4-connected regions of open slots."""
    _, num = ndimage.label(open_mask(slots))
    return int(num)


def is_perfect(slots: np.ndarray) -> bool:
    """
    True if the carved cells form a spanning tree: every cell is open,
    the open slots are one connected region, and there are exactly
    ``cells - 1`` corridors between cells.
    """
    slots = np.asarray(slots)
    height, width = _grid_shape(slots)
    if height == 0 or width == 0:
        return True
    inner = open_mask(slots)[1:-1, 1:-1]
    cells = inner[::2, ::2]
    if not cells.all():
        return False
    corridors = int(inner.sum()) - cells.size
    if corridors != cells.size - 1:
        return False
    _, num = ndimage.label(inner)
    return num == 1


@njit(cache=True)
def _corridor_shape_kernel(slots):
    """
    Classify each cell by its open sides.

    Returns (dead_ends, straights, turns, junctions). A straight cell has
    two open sides facing each other, a turn has two adjacent open sides.
    """
    rows, cols = slots.shape
    dead_ends = 0
    straights = 0
    turns = 0
    junctions = 0
    for r in range(1, rows - 1, 2):
        for c in range(1, cols - 1, 2):
            if slots[r, c] == 0:
                continue
            north = slots[r - 1, c] != 0
            south = slots[r + 1, c] != 0
            west = slots[r, c - 1] != 0
            east = slots[r, c + 1] != 0
            n_open = int(north) + int(south) + int(west) + int(east)
            if n_open == 1:
                dead_ends += 1
            elif n_open == 2:
                if (north and south) or (west and east):
                    straights += 1
                else:
                    turns += 1
            elif n_open > 2:
                junctions += 1
    return dead_ends, straights, turns, junctions


def corridor_shape(slots: np.ndarray) -> Dict[str, int]:
    board = np.ascontiguousarray(slots, dtype=np.uint8)
    dead_ends, straights, turns, junctions = _corridor_shape_kernel(board)
    return {
        "dead_ends": int(dead_ends),
        "straights": int(straights),
        "turns": int(turns),
        "junctions": int(junctions),
    }


def dead_ends(slots: np.ndarray) -> int:
    return corridor_shape(slots)["dead_ends"]


def straight_fraction(slots: np.ndarray) -> float:
    """Share of pass-through cells that continue straight instead of turning."""
    shape = corridor_shape(slots)
    through = shape["straights"] + shape["turns"]
    if through == 0:
        return 0.0
    return shape["straights"] / through


__all__ = [
    "open_mask",
    "count_components",
    "is_perfect",
    "corridor_shape",
    "dead_ends",
    "straight_fraction",
]
