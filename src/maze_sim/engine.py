"""
Tick-driven maze generator.

A randomized depth-first "growing tree" backtracker that performs exactly
one structural change per call to :meth:`MazeGenerator.advance`, so an
animation driver can show the maze being carved cell by cell.

Lifecycle::

    TRIGGER_GENERATION -> GENERATING -> DONE
            ^                               |
            +----------- restart() ---------+

Every change to the board is reported to an optional render sink as
``sink(ExpandedCoordinate, CellState)``.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Callable, List, Mapping, Optional

import numpy as np

from . import utils
from .geometry import ExpandedCoordinate, LogicalCoordinate, corridor_between, to_expanded
from .grid import CellGraph, CellState
from .policy import STRAIGHT_BIAS, select_next

RenderSink = Callable[[ExpandedCoordinate, CellState], None]

START_POLICIES = ("origin", "entrance")


class GenerationState(Enum):
    TRIGGER_GENERATION = "trigger_generation"
    GENERATING = "generating"
    DONE = "done"


@dataclass(frozen=True)
class MazeConfig:
    """Grid size and generation rules for one run. Immutable once built."""

    height: int = 37
    width: int = 49
    start: str = "origin"
    straight_bias: float = STRAIGHT_BIAS
    seed: Optional[int] = None
    verbose: bool = False

    def __post_init__(self) -> None:
        if self.height < 0 or self.width < 0:
            raise ValueError(
                f"Maze dimensions must be non-negative, got {self.height}x{self.width}"
            )
        if self.start not in START_POLICIES:
            raise ValueError(
                f"Unknown start policy {self.start!r}; expected one of {START_POLICIES}"
            )
        if not 0.0 <= self.straight_bias <= 1.0:
            raise ValueError(f"straight_bias must be within [0, 1], got {self.straight_bias}")

    @classmethod
    def from_dict(cls, params: Mapping[str, Any]) -> "MazeConfig":
        """Build a config from a flat mapping or one with a ``maze`` table."""
        if "maze" in params and isinstance(params["maze"], Mapping):
            params = params["maze"]
        known = {f.name for f in fields(cls)}
        unknown = set(params) - known
        if unknown:
            raise ValueError(f"Unknown maze parameters: {sorted(unknown)}")
        return cls(**dict(params))


class MazeGenerator:
    """
    Owns the grid, the backtracking stack and the current position.

    Nothing else mutates them; callers drive the generator with
    :meth:`advance` and cancel with :meth:`restart`.
    """

    def __init__(
        self,
        config: MazeConfig | None = None,
        *,
        rng: Optional[np.random.Generator] = None,
        sink: Optional[RenderSink] = None,
        on_reset: Optional[Callable[[], None]] = None,
    ) -> None:
        self.config = config or MazeConfig()
        self.rng = rng if rng is not None else utils.make_rng(self.config.seed)
        self.sink = sink
        self.on_reset = on_reset
        # parameters of the run in progress, fixed at Generating-entry
        self._run = self.config

        self._state = GenerationState.TRIGGER_GENERATION
        self._graph: Optional[CellGraph] = None
        self._stack: List[LogicalCoordinate] = []
        self._position: Optional[LogicalCoordinate] = None
        self.entrance: Optional[LogicalCoordinate] = None
        self.exit: Optional[LogicalCoordinate] = None
        self.ticks = 0
        self.max_depth = 0
        self._started_at = 0.0

    # ------------------------------------------------------------------ views
    @property
    def state(self) -> GenerationState:
        return self._state

    @property
    def graph(self) -> Optional[CellGraph]:
        return self._graph

    @property
    def position(self) -> Optional[LogicalCoordinate]:
        return self._position

    @property
    def stack(self) -> tuple[LogicalCoordinate, ...]:
        return tuple(self._stack)

    @property
    def done(self) -> bool:
        return self._state is GenerationState.DONE

    # ------------------------------------------------------------------ lifecycle
    def restart(self) -> None:
        """Discard the current maze (at any point) and start a fresh one."""
        self._enter_trigger()

    def advance(self) -> GenerationState:
        """Perform one step of the lifecycle and return the resulting state."""
        if self._state is GenerationState.TRIGGER_GENERATION:
            self._enter_trigger()
        elif self._state is GenerationState.GENERATING:
            self.ticks += 1
            self._step()
        return self._state

    def run(self, max_ticks: Optional[int] = None) -> utils.MazeResult:
        """Advance until the maze is done (or ``max_ticks`` steps were taken)."""
        if self._state is GenerationState.TRIGGER_GENERATION:
            self.advance()
        while self._state is GenerationState.GENERATING:
            if max_ticks is not None and self.ticks >= max_ticks:
                break
            self.advance()
        return self.result()

    def result(self) -> utils.MazeResult:
        slots = self._graph.slots() if self._graph is not None else None
        meta = {
            "height": self._run.height,
            "width": self._run.width,
            "start": self._run.start,
            "seed": self._run.seed,
            "straight_bias": self._run.straight_bias,
            "ticks": self.ticks,
            "max_depth": self.max_depth,
            "done": self.done,
        }
        if self.entrance is not None:
            meta["entrance"] = (self.entrance.row, self.entrance.column)
            meta["exit"] = (self.exit.row, self.exit.column)
        return utils.MazeResult(slots=slots, meta=meta)

    def _enter_trigger(self) -> None:
        self._state = GenerationState.TRIGGER_GENERATION
        self._stack.clear()
        self._graph = None
        self._position = None
        self.entrance = None
        self.exit = None
        if self.on_reset is not None:
            self.on_reset()
        self._enter_generating()

    def _enter_generating(self) -> None:
        self._run = self.config
        height, width = self._run.height, self._run.width
        self._graph = CellGraph(height, width)
        self._state = GenerationState.GENERATING
        self.ticks = 0
        self.max_depth = 0
        self._started_at = time.time()

        if height == 0 or width == 0:
            self._state = GenerationState.DONE
            return

        if self._run.start == "entrance":
            start = self._graph.random_slot_in_row(0, self.rng)
            self.entrance = start
            self.exit = self._graph.random_slot_in_row(height - 1, self.rng)
            for slot in self._openings():
                self._mark_slot(slot, CellState.VISITED)
        else:
            start = LogicalCoordinate(0, 0)

        self._mark(start, CellState.VISITED)
        self._position = start
        if self._run.verbose:
            print(f"[maze] Generating {height}x{width} from ({start.row}, {start.column})")

    def _openings(self) -> List[ExpandedCoordinate]:
        top = to_expanded(self.entrance)
        bottom = to_expanded(self.exit)
        return [
            ExpandedCoordinate(top.row - 1, top.column),
            ExpandedCoordinate(bottom.row + 1, bottom.column),
        ]

    # ------------------------------------------------------------------ actions
    def _step(self) -> None:
        position = self._position
        previous = self._stack[-1] if self._stack else None
        nxt = select_next(
            position, previous, self._graph, self.rng, self._run.straight_bias
        )
        if nxt is not None:
            self._visit(position, nxt)
        elif self._stack:
            self._backtrack(position, self._stack.pop())
        else:
            self._complete(position)

    def _visit(self, src: LogicalCoordinate, dst: LogicalCoordinate) -> None:
        self._mark(dst, CellState.VISITED)
        self._mark_slot(corridor_between(src, dst), CellState.VISITED)
        self._stack.append(src)
        self._position = dst
        self.max_depth = max(self.max_depth, len(self._stack))

    def _backtrack(self, src: LogicalCoordinate, dst: LogicalCoordinate) -> None:
        self._mark(src, CellState.PAVED)
        self._mark_slot(corridor_between(src, dst), CellState.PAVED)
        self._position = dst

    def _complete(self, position: LogicalCoordinate) -> None:
        self._mark(position, CellState.PAVED)
        if self.entrance is not None:
            for slot in self._openings():
                self._mark_slot(slot, CellState.PAVED)
        self._state = GenerationState.DONE
        if self._run.verbose:
            elapsed = time.time() - self._started_at
            print(
                f"[maze] Done: {self._graph.height * self._graph.width} cells, "
                f"ticks={self.ticks}, max_depth={self.max_depth}, elapsed={elapsed:.2f}s"
            )

    # ------------------------------------------------------------------ events
    def _mark(self, pos: LogicalCoordinate, state: CellState) -> None:
        slot = self._graph.mark(pos, state)
        if self.sink is not None:
            self.sink(slot, state)

    def _mark_slot(self, slot: ExpandedCoordinate, state: CellState) -> None:
        self._graph.mark_slot(slot, state)
        if self.sink is not None:
            self.sink(slot, state)


def run_model(config: MazeConfig | dict | None = None) -> utils.MazeResult:
    """Generate one complete maze and return its board."""
    if config is None:
        config = MazeConfig()
    elif isinstance(config, dict):
        config = MazeConfig.from_dict(config)
    return MazeGenerator(config).run()


__all__ = [
    "GenerationState",
    "MazeConfig",
    "MazeGenerator",
    "RenderSink",
    "START_POLICIES",
    "run_model",
]
