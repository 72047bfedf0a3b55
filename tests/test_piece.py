import random

import pytest

from ctxtris_board import new_board
from ctxtris_config import COLS
from ctxtris_piece import KINDS, PIECES, Piece, rotate_ccw, rotate_cw, try_rotate
from ctxtris_rng import Bag, PieceQueue


def test_all_shapes_are_square():
    for d in PIECES.values():
        assert all(len(row) == len(d.shape) for row in d.shape)


@pytest.mark.parametrize("kind", KINDS)
@pytest.mark.parametrize("rotate", [rotate_cw, rotate_ccw])
def test_four_rotations_restore_shape(kind, rotate):
    original = [list(r) for r in PIECES[kind].shape]
    m = original
    for _ in range(4):
        m = rotate(m)
    assert m == original


def test_rotation_formulas():
    src = [[1, 2, 3], [4, 5, 6], [7, 8, 9]]
    assert rotate_cw(src) == [[7, 4, 1], [8, 5, 2], [9, 6, 3]]
    assert rotate_ccw(src) == [[3, 6, 9], [2, 5, 8], [1, 4, 7]]


def test_spawn_is_centered_above_grid():
    assert Piece.spawn("I").x == 3
    assert Piece.spawn("O").x == 4
    assert Piece.spawn("T").x == 3
    p = Piece.spawn("L")
    assert p.y == -1
    assert p.color == PIECES["L"].color
    # fresh copy, not the definition itself
    p.shape[0][0] = 1
    assert PIECES["L"].shape[0][0] == 0


def test_rotate_in_open_space_uses_no_kick():
    board = new_board()
    p = Piece.spawn("T")
    p.y = 5
    r = try_rotate(board, p, cw=True)
    assert r.x == p.x
    assert r.shape == rotate_cw(p.shape)


def test_rotate_kicks_off_left_wall():
    board = new_board()
    p = Piece("I", rotate_cw(Piece.spawn("I").shape), -2, 5, PIECES["I"].color)
    # lying flat needs x >= 0; kicks 0, -1, +1, -2 all stay off the grid
    r = try_rotate(board, p, cw=True)
    assert r is not None
    assert r.x == 0


def test_rotate_kicks_off_right_wall_ccw():
    board = new_board()
    vertical = rotate_cw(Piece.spawn("I").shape)  # occupies column 2
    p = Piece("I", vertical, COLS - 3, 5, PIECES["I"].color)
    r = try_rotate(board, p, cw=False)
    assert r is not None
    # CCW tries 0, +1, -1, +2, -2: only -1 and -2 can fit, -1 comes first
    assert r.x == COLS - 4


def test_rotation_rejected_when_every_kick_collides():
    board = new_board()
    for y in range(10, 14):
        for x in range(COLS):
            if x != 4:
                board[y][x] = "#444444"
    vertical = rotate_cw(Piece.spawn("I").shape)
    p = Piece("I", vertical, 2, 10, PIECES["I"].color)
    assert try_rotate(board, p, cw=True) is None
    assert try_rotate(board, p, cw=False) is None


def test_bag_deals_each_kind_once_per_cycle():
    bag = Bag(random.Random(123))
    for _ in range(5):
        draws = [bag.draw() for _ in range(7)]
        assert sorted(draws) == sorted(KINDS)


def test_bag_is_reproducible_with_seed():
    a = Bag(random.Random(42))
    b = Bag(random.Random(42))
    assert [a.draw() for _ in range(21)] == [b.draw() for _ in range(21)]


def test_no_kind_starves_longer_than_twelve_draws():
    bag = Bag(random.Random(9))
    seq = [bag.draw() for _ in range(700)]
    for kind in KINDS:
        positions = [n for n, k in enumerate(seq) if k == kind]
        gaps = [b - a - 1 for a, b in zip(positions, positions[1:])]
        assert max(gaps) <= 12


def test_queue_keeps_three_upcoming():
    bag = Bag(random.Random(1))
    q = PieceQueue(bag)
    assert len(q.peek()) == 3
    upcoming = q.peek()
    assert q.pop() == upcoming[0]
    assert q.peek()[:2] == upcoming[1:]
    assert len(q.peek()) == 3
