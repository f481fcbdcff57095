import math

import numpy as np
import pytest

from maze_sim.geometry import LogicalCoordinate as L
from maze_sim.grid import CellGraph, CellState
from maze_sim.policy import STRAIGHT_BIAS, select_next, straight_ahead


class ScriptedRng:
    """Stand-in random source returning fixed draws."""

    def __init__(self, draw, index=0):
        self.draw = draw
        self.index = index
        self.calls = []

    def random(self):
        self.calls.append("random")
        return self.draw

    def integers(self, high):
        self.calls.append(("integers", high))
        return self.index


def test_no_options_returns_none():
    graph = CellGraph(1, 1)
    assert select_next(L(0, 0), None, graph, ScriptedRng(0.5)) is None


def test_single_option_needs_no_randomness():
    graph = CellGraph(1, 3)
    graph.mark(L(0, 0), CellState.VISITED)
    rng = ScriptedRng(0.5)
    assert select_next(L(0, 1), L(0, 0), graph, rng) == L(0, 2)
    assert rng.calls == []


def test_straight_ahead_chosen_when_draw_is_high():
    graph = CellGraph(5, 5)
    graph.mark(L(2, 1), CellState.VISITED)
    rng = ScriptedRng(0.2, index=0)
    assert select_next(L(2, 2), L(2, 1), graph, rng) == L(2, 3)


def test_draw_just_below_cutoff_does_not_go_straight():
    graph = CellGraph(5, 5)
    graph.mark(L(2, 1), CellState.VISITED)
    options = graph.untouched_neighbors(L(2, 2))
    rng = ScriptedRng(math.nextafter(0.2, 0.0), index=0)
    assert options[0] != L(2, 3)
    assert select_next(L(2, 2), L(2, 1), graph, rng) == options[0]
    assert rng.calls == ["random", ("integers", len(options))]


def test_low_draw_falls_back_to_uniform_choice():
    graph = CellGraph(5, 5)
    graph.mark(L(2, 1), CellState.VISITED)
    options = graph.untouched_neighbors(L(2, 2))
    rng = ScriptedRng(0.1, index=2)
    assert select_next(L(2, 2), L(2, 1), graph, rng) == options[2]
    assert rng.calls == ["random", ("integers", len(options))]


def test_touched_straight_cell_is_ignored():
    graph = CellGraph(5, 5)
    graph.mark(L(2, 1), CellState.VISITED)
    graph.mark(L(2, 3), CellState.PAVED)
    options = graph.untouched_neighbors(L(2, 2))
    assert L(2, 3) not in options
    assert select_next(L(2, 2), L(2, 1), graph, ScriptedRng(0.99, index=1)) == options[1]


def test_straight_ahead_off_grid_is_unavailable():
    graph = CellGraph(3, 3)
    # heading east along the top row into the right wall
    assert straight_ahead(L(0, 2), L(0, 1), graph) is None
    # heading north off the top of the board
    assert straight_ahead(L(0, 1), L(1, 1), graph) is None
    assert straight_ahead(L(1, 1), None, graph) is None
    assert straight_ahead(L(1, 1), L(1, 0), graph) == L(1, 2)


def test_no_previous_means_uniform_choice():
    graph = CellGraph(5, 5)
    options = graph.untouched_neighbors(L(2, 2))
    assert select_next(L(2, 2), None, graph, ScriptedRng(0.9, index=3)) == options[3]


def test_same_seed_reproduces_choices():
    def walk(seed):
        graph = CellGraph(8, 8)
        rng = np.random.default_rng(seed)
        position, previous = L(0, 0), None
        graph.mark(position, CellState.VISITED)
        path = [position]
        while True:
            nxt = select_next(position, previous, graph, rng)
            if nxt is None:
                return path
            graph.mark(nxt, CellState.VISITED)
            previous, position = position, nxt
            path.append(position)

    assert walk(7) == walk(7)
    assert len(walk(7)) > 1


def test_straight_bias_frequency():
    graph = CellGraph(5, 5)
    graph.mark(L(2, 1), CellState.VISITED)
    n_options = len(graph.untouched_neighbors(L(2, 2)))
    rng = np.random.default_rng(1234)
    trials = 5000
    hits = sum(select_next(L(2, 2), L(2, 1), graph, rng) == L(2, 3) for _ in range(trials))
    # straight wins outright 80% of the time, plus its share of the uniform fallback
    expected = STRAIGHT_BIAS + (1 - STRAIGHT_BIAS) / n_options
    assert hits / trials == pytest.approx(expected, abs=0.03)


def test_bias_extremes():
    graph = CellGraph(5, 5)
    graph.mark(L(2, 1), CellState.VISITED)
    rng = np.random.default_rng(0)
    always = [select_next(L(2, 2), L(2, 1), graph, rng, straight_bias=1.0) for _ in range(200)]
    assert set(always) == {L(2, 3)}
    never = [select_next(L(2, 2), L(2, 1), graph, rng, straight_bias=0.0) for _ in range(600)]
    assert set(never) == set(graph.untouched_neighbors(L(2, 2)))
