from __future__ import annotations

import random
from typing import Iterable, Optional

from ctxtris_config import COLS
from ctxtris_game import GameState


class FakeClock:
    """Millisecond clock the tests advance by hand."""

    def __init__(self, now: int = 0):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


def make_game(seed: int = 7, start: bool = True) -> tuple[GameState, FakeClock]:
    clock = FakeClock(1000)
    game = GameState(rng=random.Random(seed), clock=clock)
    if start:
        game.start()
    return game, clock


def fill_row(board, y: int, skip: Iterable[int] = (), color: Optional[str] = "#888888") -> None:
    skipped = set(skip)
    for x in range(COLS):
        board[y][x] = None if x in skipped else color
