import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from blockworld.life import LifeBoard


def _board_with(cells, size_x=8, size_z=8):
    board = LifeBoard(size_x, size_z)
    for pos in cells:
        board[pos] = True
    return board


def test_new_board_is_empty():
    board = LifeBoard(5, 7)
    assert list(board.live_cells()) == []


def test_set_and_get_cell():
    board = LifeBoard(5, 5)
    board[(2, 3)] = True
    assert board[(2, 3)] is True
    assert board[(3, 2)] is False
    board[(2, 3)] = False
    assert board[(2, 3)] is False


def test_clear_kills_everything():
    board = _board_with([(0, 0), (1, 1), (4, 4)], 5, 5)
    board.clear()
    assert list(board.live_cells()) == []


@pytest.mark.parametrize("pos", [(-1, 0), (0, -1), (5, 0), (0, 5)])
def test_out_of_range_cells_raise(pos):
    board = LifeBoard(5, 5)
    with pytest.raises(IndexError):
        _ = board[pos]
    with pytest.raises(IndexError):
        board[pos] = True
    assert list(board.live_cells()) == []


@pytest.mark.parametrize("size", [(0, 5), (5, 0), (-3, 4)])
def test_invalid_dimensions_raise(size):
    with pytest.raises(ValueError):
        LifeBoard(*size)


def test_neighbours_wrap_around_edges():
    board = _board_with([(0, 0)], 6, 6)
    assert board.live_neighbours(5, 5) == 1
    assert board.live_neighbours(0, 0) == 0
    assert board.live_neighbours(3, 3) == 0


def test_lone_cell_dies():
    board = _board_with([(3, 3)])
    board.step()
    assert list(board.live_cells()) == []


def test_block_is_still_life():
    cells = {(2, 2), (3, 2), (2, 3), (3, 3)}
    board = _board_with(cells)
    board.step()
    assert set(board.live_cells()) == cells


def test_blinker_oscillates():
    horizontal = {(2, 3), (3, 3), (4, 3)}
    vertical = {(3, 2), (3, 3), (3, 4)}
    board = _board_with(horizontal)
    board.step()
    assert set(board.live_cells()) == vertical
    board.step()
    assert set(board.live_cells()) == horizontal


def test_glider_moves_diagonally_and_wraps():
    glider = {(1, 0), (2, 1), (0, 2), (1, 2), (2, 2)}
    board = _board_with(glider, 8, 8)
    for _ in range(4):
        board.step()
    assert set(board.live_cells()) == {((x + 1) % 8, (z + 1) % 8) for x, z in glider}
    for _ in range(28):
        board.step()
    assert set(board.live_cells()) == glider


@settings(max_examples=30, deadline=None)
@given(
    st.sets(st.tuples(st.integers(0, 5), st.integers(0, 5)), max_size=20),
    st.integers(0, 5),
    st.integers(0, 5),
)
def test_neighbour_count_matches_live_cells_around(cells, x, z):
    board = _board_with(cells, 6, 6)
    around = {
        ((x + dx) % 6, (z + dz) % 6)
        for dx in (-1, 0, 1)
        for dz in (-1, 0, 1)
        if (dx, dz) != (0, 0)
    }
    assert board.live_neighbours(x, z) == len(around & cells)


@settings(max_examples=30, deadline=None)
@given(st.sets(st.tuples(st.integers(0, 5), st.integers(0, 5)), max_size=20))
def test_step_is_translation_invariant(cells):
    board = _board_with(cells, 6, 6)
    shifted = _board_with({((x + 2) % 6, (z + 1) % 6) for x, z in cells}, 6, 6)
    board.step()
    shifted.step()
    assert set(shifted.live_cells()) == {
        ((x + 2) % 6, (z + 1) % 6) for x, z in board.live_cells()
    }