
"""Board helpers: collide, merge, line detection, row removal, ghost"""
from typing import Iterable, List, Optional
from ctxtris_config import COLS, ROWS
from ctxtris_piece import Piece

Board = List[List[Optional[str]]]

def new_board() -> Board:
    return [[None] * COLS for _ in range(ROWS)]

def collides(board: Board, shape, x: int, y: int) -> bool:
    for r,row in enumerate(shape):
        for c,v in enumerate(row):
            if not v: continue
            bx,by = x+c, y+r
            if bx<0 or bx>=COLS or by>=ROWS: return True
            if by>=0 and board[by][bx]: return True
    return False

def above_ceiling(piece: Piece) -> bool:
    return any(by < 0 for _, by in piece.cells())

def merge(board: Board, piece: Piece):
    for bx,by in piece.cells():
        board[by][bx] = piece.color

def full_rows(board: Board) -> List[int]:
    """Indices of full rows, bottom to top."""
    return [y for y in range(ROWS-1, -1, -1) if all(board[y][x] for x in range(COLS))]

def remove_rows(board: Board, rows: Iterable[int]):
    # Highest index first so earlier deletions don't shift later ones
    for y in sorted(set(rows), reverse=True):
        del board[y]
    while len(board) < ROWS:
        board.insert(0, [None]*COLS)

def ghost_y(board: Board, piece: Piece) -> int:
    y = piece.y
    while not collides(board, piece.shape, piece.x, y+1):
        y += 1
    return y
