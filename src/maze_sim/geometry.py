"""
Coordinate math for the maze board.

Two coordinate spaces are used:

- Logical coordinates index cells of the ``height x width`` maze.
- Expanded (slot) coordinates index the ``(2*height+1) x (2*width+1)``
  rendering board. Odd/odd slots are cells, every other slot is a wall
  or the corridor opened between two neighbouring cells.

Both spaces are unsigned: stepping below zero is an error.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, TypeVar, Union

# (row_delta, col_delta); row grows "south"
SOUTH = (1, 0)
EAST = (0, 1)
NORTH = (-1, 0)
WEST = (0, -1)


class OutOfBounds(ValueError):
    """Coordinate arithmetic left the unsigned coordinate space."""


@dataclass(frozen=True)
class LogicalCoordinate:
    row: int
    column: int


@dataclass(frozen=True)
class ExpandedCoordinate:
    row: int
    column: int


Coordinate = Union[LogicalCoordinate, ExpandedCoordinate]
C = TypeVar("C", LogicalCoordinate, ExpandedCoordinate)


def to_expanded(coord: LogicalCoordinate) -> ExpandedCoordinate:
    """Map a logical cell to its slot on the expanded board."""
    return ExpandedCoordinate(1 + 2 * coord.row, 1 + 2 * coord.column)


def try_step(coord: C, row_delta: int, col_delta: int) -> Optional[C]:
    """Return ``coord`` moved by the deltas, or None if an axis goes negative."""
    row = coord.row + row_delta
    column = coord.column + col_delta
    if row < 0 or column < 0:
        return None
    return type(coord)(row, column)


def step(coord: C, row_delta: int, col_delta: int) -> C:
    """Like :func:`try_step` but raises :class:`OutOfBounds` instead."""
    moved = try_step(coord, row_delta, col_delta)
    if moved is None:
        raise OutOfBounds(
            f"Overflow navigating the maze board: {coord} + ({row_delta}, {col_delta})"
        )
    return moved


def delta(src: Coordinate, dst: Coordinate) -> tuple[int, int]:
    """Vector pointing from ``src`` to ``dst``."""
    return dst.row - src.row, dst.column - src.column


def corridor_between(a: LogicalCoordinate, b: LogicalCoordinate) -> ExpandedCoordinate:
    """Wall slot separating two adjacent cells."""
    dr, dc = delta(b, a)
    if abs(dr) + abs(dc) != 1:
        raise ValueError(f"{a} and {b} are not adjacent")
    return step(to_expanded(b), dr, dc)


__all__ = [
    "SOUTH",
    "EAST",
    "NORTH",
    "WEST",
    "OutOfBounds",
    "LogicalCoordinate",
    "ExpandedCoordinate",
    "Coordinate",
    "to_expanded",
    "try_step",
    "step",
    "delta",
    "corridor_between",
]
