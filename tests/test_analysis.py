import numpy as np

from maze_sim import analysis

# 2x2 maze shaped like a "U" turned on its side:
#   #####
#   #...#
#   #.###
#   #...#
#   #####
TREE_2X2 = np.array(
    [
        [0, 0, 0, 0, 0],
        [0, 2, 2, 2, 0],
        [0, 2, 0, 0, 0],
        [0, 2, 2, 2, 0],
        [0, 0, 0, 0, 0],
    ],
    dtype=np.uint8,
)


def test_perfect_tree_detected():
    assert analysis.is_perfect(TREE_2X2)
    assert analysis.count_components(TREE_2X2) == 1


def test_cycle_is_not_perfect():
    board = TREE_2X2.copy()
    board[2, 3] = 2
    assert not analysis.is_perfect(board)


def test_unvisited_cell_is_not_perfect():
    board = TREE_2X2.copy()
    board[3, 2] = 0
    board[3, 3] = 0
    assert not analysis.is_perfect(board)
    assert analysis.count_components(board) == 1


def test_disconnected_regions_counted():
    board = TREE_2X2.copy()
    board[2, 1] = 0
    assert analysis.count_components(board) == 2
    assert not analysis.is_perfect(board)


def test_corridor_shape_of_turning_maze():
    shape = analysis.corridor_shape(TREE_2X2)
    assert shape == {"dead_ends": 2, "straights": 0, "turns": 2, "junctions": 0}
    assert analysis.dead_ends(TREE_2X2) == 2
    assert analysis.straight_fraction(TREE_2X2) == 0.0


def test_straight_corridor():
    board = np.zeros((3, 7), dtype=np.uint8)
    board[1, 1:6] = 1
    assert analysis.is_perfect(board)
    assert analysis.straight_fraction(board) == 1.0
    assert analysis.corridor_shape(board)["straights"] == 1


def test_entrance_openings_do_not_break_perfection():
    board = TREE_2X2.copy()
    board[0, 1] = 2
    board[4, 3] = 2
    assert analysis.is_perfect(board)
    assert analysis.dead_ends(board) == 1


def test_empty_board_is_trivially_perfect():
    assert analysis.is_perfect(np.zeros((1, 1), dtype=np.uint8))
    assert analysis.straight_fraction(np.zeros((1, 1), dtype=np.uint8)) == 0.0
