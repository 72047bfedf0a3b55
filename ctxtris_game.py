"""
Game engine: the GameState aggregate, the phase machine and the per-frame tick.

The engine is headless. It never touches pygame surfaces or events; the main
loop feeds it actions from ctxtris_input and hands its snapshots to
ctxtris_render. Time comes from an injectable millisecond clock (pygame's
tick counter by default) so tests can drive it frame by frame.

Phases:

  NOT_STARTED --start--> RUNNING <--toggle_pause--> PAUSED
  RUNNING --ceiling lock / blocked spawn--> GAME_OVER --start--> RUNNING

Line clears are deferred: full rows are scored on lock, flash for a few
frames and are removed once CLEAR_DELAY_MS of running time has passed.
Gravity and piece actions are frozen until the removal happens, so a
cleared row can never be matched twice.
"""

from __future__ import annotations
import enum
import logging
import random
from dataclasses import dataclass
from typing import Callable, FrozenSet, Mapping, Optional, Tuple

import pygame

from ctxtris_board import (Board, above_ceiling, collides, full_rows, ghost_y,
                           merge, new_board, remove_rows)
from ctxtris_config import (CONFIG, LEVELS, LINES_PER_LEVEL, SCORE_HARD_DROP,
                            SCORE_LINES, SCORE_SOFT_DROP)
from ctxtris_input import Action
from ctxtris_piece import Piece, try_rotate
from ctxtris_rng import Bag, PieceQueue

logger = logging.getLogger(__name__)


class Phase(enum.Enum):
    NOT_STARTED = "not_started"
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game_over"


def level_for_lines(lines: int) -> int:
    return min(lines // LINES_PER_LEVEL, len(LEVELS) - 1)


def drop_interval_ms(level: int, config: Mapping = CONFIG) -> float:
    """Milliseconds between gravity steps at the given level."""
    return max(config["MIN_DROP_MS"], config["BASE_DROP_MS"] / LEVELS[level].speed)


@dataclass(frozen=True)
class ActiveView:
    kind: str
    shape: Tuple[Tuple[int, ...], ...]
    x: int
    y: int
    color: str


@dataclass(frozen=True)
class FrameSnapshot:
    """Read-only view of everything the board and side panels draw."""
    grid: Tuple[Tuple[Optional[str], ...], ...]
    active: Optional[ActiveView]
    ghost_y: Optional[int]
    hold: Optional[str]
    next: Tuple[str, ...]
    flashing: FrozenSet[int]
    flash_frames: int


@dataclass(frozen=True)
class HudSnapshot:
    score: int
    lines: int
    level: int
    level_name: str
    ctx: str
    speed: float
    phase: Phase
    final_score: Optional[int] = None
    final_level: Optional[int] = None

    @property
    def game_over(self) -> bool:
        return self.phase is Phase.GAME_OVER


class GameState:
    """Owns the grid, active piece, hold slot, next queue and bag."""

    def __init__(self, rng: Optional[random.Random] = None,
                 clock: Optional[Callable[[], int]] = None,
                 config: Optional[Mapping] = None):
        self.config = dict(CONFIG if config is None else config)
        if rng is None:
            rng = random.Random(self.config["SEED"])
        self.rng = rng
        self.clock = clock if clock is not None else pygame.time.get_ticks
        self.phase = Phase.NOT_STARTED
        self._reset()

    def _reset(self):
        self.board: Board = new_board()
        self.bag = Bag(self.rng)
        self.queue = PieceQueue(self.bag)
        self.current: Optional[Piece] = None
        self.hold_kind: Optional[str] = None
        self.can_hold = True
        self.score = 0
        self.lines = 0
        self.level = 0
        self.drop_interval = drop_interval_ms(0, self.config)
        self.clearing: FrozenSet[int] = frozenset()
        self.flash_frames = 0
        self.clear_remaining_ms = 0.0
        now = self.clock()
        self.last_drop = now
        self.last_tick = now

    # ---------- phase machine ----------
    def start(self) -> bool:
        if self.phase not in (Phase.NOT_STARTED, Phase.GAME_OVER):
            return False
        self._reset()
        self.phase = Phase.RUNNING
        logger.info("Game started")
        self._spawn()
        return True

    def toggle_pause(self) -> bool:
        if self.phase is Phase.RUNNING:
            self.phase = Phase.PAUSED
            logger.debug("Paused")
            return True
        if self.phase is Phase.PAUSED:
            self.phase = Phase.RUNNING
            # Paused time counts toward neither gravity nor the clear delay
            now = self.clock()
            self.last_drop = now
            self.last_tick = now
            logger.debug("Resumed")
            return True
        return False

    def start_or_resume(self) -> bool:
        if self.phase is Phase.PAUSED:
            return self.toggle_pause()
        return self.start()

    def _game_over(self, reason: str):
        self.phase = Phase.GAME_OVER
        logger.info("Context overflow (%s): %d tokens, level %d (%s)",
                    reason, self.score, self.level + 1, LEVELS[self.level].name)

    @property
    def running(self) -> bool:
        return self.phase is Phase.RUNNING

    @property
    def clear_pending(self) -> bool:
        return bool(self.clearing)

    def _can_act(self) -> bool:
        return self.phase is Phase.RUNNING and not self.clearing and self.current is not None

    # ---------- spawning / locking ----------
    def _spawn(self):
        t = self.queue.pop()
        p = Piece.spawn(t)
        self.current = p
        logger.debug("Spawned %s at x=%d", t, p.x)
        if collides(self.board, p.shape, p.x, p.y + 1) and collides(self.board, p.shape, p.x, p.y):
            self._game_over("blocked spawn")

    def _lock(self):
        p = self.current
        if above_ceiling(p):
            self._game_over("locked above ceiling")
            return
        merge(self.board, p)
        self._detect_lines()
        self.can_hold = True
        self._spawn()

    def _detect_lines(self):
        rows = full_rows(self.board)
        if not rows:
            return
        n = len(rows)
        self.clearing = frozenset(rows)
        self.flash_frames = self.config["FLASH_FRAMES"]
        self.clear_remaining_ms = self.config["CLEAR_DELAY_MS"]
        self.lines += n
        self.score += SCORE_LINES[min(n, 4)] * (self.level + 1)
        logger.debug("Cleared %d line(s) %s, total %d", n, sorted(rows), self.lines)

    def _finish_clear(self, now: int):
        remove_rows(self.board, self.clearing)
        self.clearing = frozenset()
        self.clear_remaining_ms = 0.0
        self.last_drop = now
        self._update_level()

    def _update_level(self):
        lv = level_for_lines(self.lines)
        if lv != self.level:
            self.level = lv
            logger.info("Level %d: %s (%s context)", lv + 1, LEVELS[lv].name, LEVELS[lv].ctx)
        self.drop_interval = drop_interval_ms(self.level, self.config)

    # ---------- per-frame tick ----------
    def tick(self):
        """Advance the simulation by one display frame."""
        if self.phase is not Phase.RUNNING:
            return
        now = self.clock()
        dt = now - self.last_tick
        self.last_tick = now

        if self.clearing:
            self.clear_remaining_ms -= dt
            if self.clear_remaining_ms <= 0:
                self._finish_clear(now)
        elif now - self.last_drop > self.drop_interval:
            p = self.current
            if not collides(self.board, p.shape, p.x, p.y + 1):
                p.y += 1
            else:
                self._lock()
            self.last_drop = now

        if self.flash_frames > 0:
            self.flash_frames -= 1
        # Level changes land with the row removal, not with the scoring
        if not self.clearing:
            self._update_level()

    # ---------- actions ----------
    def _shift(self, dx: int) -> bool:
        if not self._can_act():
            return False
        p = self.current
        if collides(self.board, p.shape, p.x + dx, p.y):
            return False
        p.x += dx
        return True

    def move_left(self) -> bool:
        return self._shift(-1)

    def move_right(self) -> bool:
        return self._shift(1)

    def soft_drop(self) -> bool:
        if not self._can_act():
            return False
        p = self.current
        if collides(self.board, p.shape, p.x, p.y + 1):
            return False
        p.y += 1
        self.score += SCORE_SOFT_DROP
        self.last_drop = self.clock()
        return True

    def hard_drop(self) -> int:
        """Drop to the ghost row and lock; returns rows dropped."""
        if not self._can_act():
            return 0
        p = self.current
        gy = ghost_y(self.board, p)
        dropped = gy - p.y
        p.y = gy
        self.score += dropped * SCORE_HARD_DROP
        self._lock()
        self.last_drop = self.clock()
        return dropped

    def _rotate(self, cw: bool) -> bool:
        if not self._can_act():
            return False
        t = try_rotate(self.board, self.current, cw)
        if t is None:
            return False
        self.current = t
        return True

    def rotate_cw(self) -> bool:
        return self._rotate(True)

    def rotate_ccw(self) -> bool:
        return self._rotate(False)

    def hold(self) -> bool:
        if not self._can_act() or not self.can_hold:
            return False
        self.can_hold = False
        t = self.current.t
        if self.hold_kind is not None:
            # Not collision-checked: on a high stack the swapped-in piece may overlap row 0
            self.current = Piece.spawn(self.hold_kind)
            self.hold_kind = t
        else:
            self.hold_kind = t
            self._spawn()
        logger.debug("Held %s", t)
        return True

    def apply(self, action: Action):
        handler = {
            Action.MOVE_LEFT: self.move_left,
            Action.MOVE_RIGHT: self.move_right,
            Action.SOFT_DROP: self.soft_drop,
            Action.HARD_DROP: self.hard_drop,
            Action.ROTATE_CW: self.rotate_cw,
            Action.ROTATE_CCW: self.rotate_ccw,
            Action.HOLD: self.hold,
            Action.TOGGLE_PAUSE: self.toggle_pause,
            Action.START: self.start_or_resume,
        }[action]
        return handler()

    # ---------- snapshots ----------
    def snapshot(self) -> FrameSnapshot:
        active = gy = None
        p = self.current
        if p is not None and self.phase is not Phase.GAME_OVER:
            active = ActiveView(p.t, tuple(tuple(r) for r in p.shape), p.x, p.y, p.color)
            gy = ghost_y(self.board, p)
        return FrameSnapshot(
            grid=tuple(tuple(r) for r in self.board),
            active=active, ghost_y=gy, hold=self.hold_kind,
            next=tuple(self.queue.peek()),
            flashing=self.clearing, flash_frames=self.flash_frames,
        )

    def hud(self) -> HudSnapshot:
        lv = LEVELS[self.level]
        over = self.phase is Phase.GAME_OVER
        return HudSnapshot(
            score=self.score, lines=self.lines, level=self.level,
            level_name=lv.name, ctx=lv.ctx, speed=lv.speed, phase=self.phase,
            final_score=self.score if over else None,
            final_level=self.level if over else None,
        )
