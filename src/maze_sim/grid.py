from __future__ import annotations

from enum import IntEnum
from typing import List, Optional, Tuple

import numpy as np

from .geometry import (
    EAST,
    NORTH,
    SOUTH,
    WEST,
    ExpandedCoordinate,
    LogicalCoordinate,
    step,
    to_expanded,
)


class CellState(IntEnum):
    """Progress of a cell (or wall slot). Values are stored in uint8 grids."""

    UNTOUCHED = 0
    VISITED = 1
    PAVED = 2


class IndexOutOfRange(IndexError):
    """A lookup was made with a coordinate outside the configured grid."""


# Neighbour orientation per boundary case. The order only matters for
# reproducing tie-breaks under a fixed seed.
TOP_LEFT = (SOUTH, EAST)
TOP_RIGHT = (SOUTH, WEST)
BOTTOM_RIGHT = (NORTH, WEST)
BOTTOM_LEFT = (NORTH, EAST)
TOP_EDGE = (EAST, WEST, SOUTH)
LEFT_EDGE = (SOUTH, EAST, NORTH)
BOTTOM_EDGE = (EAST, NORTH, WEST)
RIGHT_EDGE = (NORTH, WEST, SOUTH)
INTERIOR = (SOUTH, EAST, NORTH, WEST)


class CellGraph:
    """
    Logical maze grid plus the expanded slot board it is drawn on.

    ``cells`` is a ``(height, width)`` uint8 array of :class:`CellState`.
    ``board`` is the ``(2*height+1, 2*width+1)`` array holding the same
    states for cell slots and the state of every wall/corridor slot.
    """

    def __init__(self, height: int, width: int) -> None:
        if height < 0 or width < 0:
            raise ValueError(f"Grid dimensions must be non-negative, got {height}x{width}")
        self.height = int(height)
        self.width = int(width)
        self.cells = np.zeros((self.height, self.width), dtype=np.uint8)
        self.board = np.zeros((2 * self.height + 1, 2 * self.width + 1), dtype=np.uint8)

    # ------------------------------------------------------------------ bounds
    def contains(self, pos: LogicalCoordinate) -> bool:
        return 0 <= pos.row < self.height and 0 <= pos.column < self.width

    def contains_slot(self, slot: ExpandedCoordinate) -> bool:
        rows, cols = self.board.shape
        return 0 <= slot.row < rows and 0 <= slot.column < cols

    def _check(self, pos: LogicalCoordinate) -> None:
        if not self.contains(pos):
            raise IndexOutOfRange(
                f"{pos} is outside the {self.height}x{self.width} grid"
            )

    def _check_slot(self, slot: ExpandedCoordinate) -> None:
        if not self.contains_slot(slot):
            rows, cols = self.board.shape
            raise IndexOutOfRange(f"{slot} is outside the {rows}x{cols} board")

    # ------------------------------------------------------------------ adjacency
    def _orientation(self, pos: LogicalCoordinate) -> Tuple[Tuple[int, int], ...]:
        last_row = self.height - 1
        last_col = self.width - 1
        row, col = pos.row, pos.column
        if row == 0 and col == 0:
            return TOP_LEFT
        if row == 0 and col == last_col:
            return TOP_RIGHT
        if row == last_row and col == last_col:
            return BOTTOM_RIGHT
        if row == last_row and col == 0:
            return BOTTOM_LEFT
        if row == 0:
            return TOP_EDGE
        if col == 0:
            return LEFT_EDGE
        if row == last_row:
            return BOTTOM_EDGE
        if col == last_col:
            return RIGHT_EDGE
        return INTERIOR

    def neighbors(self, pos: LogicalCoordinate) -> List[LogicalCoordinate]:
        """
        Grid-adjacent cells of ``pos`` in the fixed boundary-case order.

        Single-row or single-column grids hit a corner case on both sides,
        so candidates are still filtered against the grid.
        """
        self._check(pos)
        result = []
        for dr, dc in self._orientation(pos):
            row, col = pos.row + dr, pos.column + dc
            if 0 <= row < self.height and 0 <= col < self.width:
                result.append(step(pos, dr, dc))
        return result

    def untouched_neighbors(self, pos: LogicalCoordinate) -> List[LogicalCoordinate]:
        return [
            n for n in self.neighbors(pos)
            if self.cells[n.row, n.column] == CellState.UNTOUCHED
        ]

    # ------------------------------------------------------------------ state
    def state(self, pos: LogicalCoordinate) -> CellState:
        self._check(pos)
        return CellState(int(self.cells[pos.row, pos.column]))

    def slot_state(self, slot: ExpandedCoordinate) -> CellState:
        self._check_slot(slot)
        return CellState(int(self.board[slot.row, slot.column]))

    def mark(self, pos: LogicalCoordinate, state: CellState) -> ExpandedCoordinate:
        """Set a cell's state and return the board slot that changed."""
        self._check(pos)
        self.cells[pos.row, pos.column] = state
        slot = to_expanded(pos)
        self.board[slot.row, slot.column] = state
        return slot

    def mark_slot(self, slot: ExpandedCoordinate, state: CellState) -> ExpandedCoordinate:
        """Set a wall/corridor slot. Cell slots keep ``cells`` in sync."""
        self._check_slot(slot)
        self.board[slot.row, slot.column] = state
        if slot.row % 2 == 1 and slot.column % 2 == 1:
            self.cells[(slot.row - 1) // 2, (slot.column - 1) // 2] = state
        return slot

    def count(self, state: CellState) -> int:
        return int(np.count_nonzero(self.cells == state))

    def slots(self) -> np.ndarray:
        """Copy of the expanded board for rendering or analysis."""
        return self.board.copy()

    # ------------------------------------------------------------------ random
    def random_slot_in_row(
        self, row: int, rng: Optional[np.random.Generator] = None
    ) -> LogicalCoordinate:
        """Uniformly random cell in ``row``."""
        if not 0 <= row < self.height or self.width == 0:
            raise IndexOutOfRange(f"Row {row} is outside the {self.height}x{self.width} grid")
        rng = rng if rng is not None else np.random.default_rng()
        return LogicalCoordinate(row, int(rng.integers(self.width)))

    def __repr__(self) -> str:
        return (
            f"CellGraph({self.height}x{self.width}, "
            f"visited={self.count(CellState.VISITED)}, paved={self.count(CellState.PAVED)})"
        )


__all__ = ["CellState", "CellGraph", "IndexOutOfRange"]
