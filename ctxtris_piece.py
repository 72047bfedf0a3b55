
"""Piece model, shapes, rotation with horizontal kicks"""
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple
from ctxtris_config import COLS

@dataclass(frozen=True)
class PieceDef:
    shape: Tuple[Tuple[int, ...], ...]
    color: str
    name: str
    icon: str

PIECES: Dict[str, PieceDef] = {
    "I": PieceDef(((0,0,0,0),(1,1,1,1),(0,0,0,0),(0,0,0,0)), "#06b6d4", "Long Doc", "📄"),
    "O": PieceDef(((1,1),(1,1)), "#eab308", "Data Block", "📦"),
    "T": PieceDef(((0,1,0),(1,1,1),(0,0,0)), "#a855f7", "API Call", "🔌"),
    "S": PieceDef(((0,1,1),(1,1,0),(0,0,0)), "#22c55e", "Chat Msg", "💬"),
    "Z": PieceDef(((1,1,0),(0,1,1),(0,0,0)), "#ef4444", "Error Log", "⚠️"),
    "J": PieceDef(((1,0,0),(1,1,1),(0,0,0)), "#3b82f6", "Code Block", "{ }"),
    "L": PieceDef(((0,0,1),(1,1,1),(0,0,0)), "#f97316", "Config", "⚙️"),
}

KINDS = tuple(PIECES)

CW_KICKS = (0, -1, 1, -2, 2)
CCW_KICKS = (0, 1, -1, 2, -2)

def rotate_cw(m): return [list(r) for r in zip(*m[::-1])]
def rotate_ccw(m): return [list(c) for c in zip(*m)][::-1]

@dataclass
class Piece:
    t: str
    shape: List[List[int]]
    x: int
    y: int
    color: str

    @staticmethod
    def spawn(t: str) -> "Piece":
        d = PIECES[t]
        s = [list(r) for r in d.shape]
        return Piece(t, s, (COLS - len(s[0])) // 2, -1, d.color)

    def moved(self, dx: int = 0, dy: int = 0) -> "Piece":
        return Piece(self.t, [r[:] for r in self.shape], self.x + dx, self.y + dy, self.color)

    def cells(self):
        for r, row in enumerate(self.shape):
            for c, v in enumerate(row):
                if v: yield self.x + c, self.y + r

# rotation

def try_rotate(board, piece: Piece, cw: bool = True) -> Optional[Piece]:
    """Rotate and try each horizontal kick in order; None if all collide."""
    ns = rotate_cw(piece.shape) if cw else rotate_ccw(piece.shape)
    from ctxtris_board import collides
    for dx in (CW_KICKS if cw else CCW_KICKS):
        if not collides(board, ns, piece.x + dx, piece.y):
            return Piece(piece.t, ns, piece.x + dx, piece.y, piece.color)
    return None
