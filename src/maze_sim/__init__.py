"""
Maze Simulation Library - animated growing-tree maze generation

This package provides:
- MazeGenerator: tick-driven randomized depth-first maze builder
- CellGraph: logical grid of cell states plus the expanded slot board
- select_next: neighbour selection with straight-ahead bias
- analysis: structural checks over generated boards
"""

from .engine import GenerationState, MazeConfig, MazeGenerator, run_model
from .geometry import ExpandedCoordinate, LogicalCoordinate, OutOfBounds
from .grid import CellGraph, CellState, IndexOutOfRange
from .policy import STRAIGHT_BIAS, select_next
from . import analysis, utils

__all__ = [
    # Generator
    "MazeGenerator",
    "MazeConfig",
    "GenerationState",
    "run_model",
    # Grid
    "CellGraph",
    "CellState",
    "LogicalCoordinate",
    "ExpandedCoordinate",
    # Policy
    "select_next",
    "STRAIGHT_BIAS",
    # Errors
    "OutOfBounds",
    "IndexOutOfRange",
    # Utilities
    "analysis",
    "utils",
]
