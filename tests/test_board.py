from ctxtris_board import (above_ceiling, collides, full_rows, ghost_y, merge,
                           new_board, remove_rows)
from ctxtris_config import COLS, ROWS
from ctxtris_piece import Piece

from tests.helpers import fill_row

DOT = [[1]]
O = [[1, 1], [1, 1]]


def test_new_board_dimensions():
    board = new_board()
    assert len(board) == ROWS
    assert all(len(row) == COLS and not any(row) for row in board)


def test_collides_horizontal_bounds():
    board = new_board()
    assert collides(board, DOT, -1, 5)
    assert collides(board, DOT, COLS, 5)
    assert not collides(board, DOT, 0, 5)
    assert not collides(board, DOT, COLS - 1, 5)


def test_collides_floor():
    board = new_board()
    assert collides(board, DOT, 3, ROWS)
    assert not collides(board, DOT, 3, ROWS - 1)
    assert collides(board, O, 3, ROWS - 1)


def test_collides_occupied_cell():
    board = new_board()
    board[10][4] = "#ffffff"
    assert collides(board, DOT, 4, 10)
    assert collides(board, O, 3, 9)
    assert not collides(board, DOT, 5, 10)


def test_rows_above_grid_are_not_checked_for_occupancy():
    board = new_board()
    fill_row(board, 0)
    assert not collides(board, DOT, 4, -1)
    assert not collides(board, DOT, 4, -5)
    # still bounded horizontally
    assert collides(board, DOT, -1, -1)
    assert collides(board, DOT, COLS, -3)


def test_empty_shape_cells_are_ignored():
    board = new_board()
    shape = [[0, 0, 0], [0, 1, 0], [0, 0, 0]]
    assert not collides(board, shape, -1, 0)
    assert not collides(board, shape, COLS - 2, ROWS - 2)


def test_merge_writes_piece_color():
    board = new_board()
    p = Piece.spawn("O")
    p.y = ROWS - 2
    merge(board, p)
    cells = {(x, y) for y in range(ROWS) for x in range(COLS) if board[y][x]}
    assert cells == {(4, 18), (5, 18), (4, 19), (5, 19)}
    assert board[19][4] == p.color


def test_above_ceiling():
    p = Piece.spawn("O")
    assert above_ceiling(p)
    p.y = 0
    assert not above_ceiling(p)
    i = Piece.spawn("I")  # first shape row is empty
    assert not above_ceiling(i)


def test_full_rows_bottom_to_top():
    board = new_board()
    fill_row(board, 19)
    fill_row(board, 17)
    fill_row(board, 18, skip=[3])
    assert full_rows(board) == [19, 17]


def test_remove_row_shifts_rows_above():
    board = new_board()
    for y in range(ROWS):
        board[y][0] = f"r{y}"
    fill_row(board, 12, color="full")
    before = [row[:] for row in board]

    remove_rows(board, [12])

    assert len(board) == ROWS
    assert board[0] == [None] * COLS
    for y in range(12):
        assert board[y + 1] == before[y]
    for y in range(13, ROWS):
        assert board[y] == before[y]


def test_remove_multiple_rows():
    board = new_board()
    for y in range(ROWS):
        board[y][0] = f"r{y}"
    fill_row(board, 19, color="a")
    fill_row(board, 17, color="b")
    before = [row[:] for row in board]

    remove_rows(board, {17, 19})

    assert board[0] == [None] * COLS
    assert board[1] == [None] * COLS
    assert board[19] == before[18]
    assert board[18] == before[16]
    assert board[2] == before[0]


def test_ghost_y_lands_on_stack():
    board = new_board()
    p = Piece.spawn("O")
    assert ghost_y(board, p) == ROWS - 2
    board[15][4] = "#ffffff"
    assert ghost_y(board, p) == 13
