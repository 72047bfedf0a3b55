
"""Raw key/touch events -> logical actions, plus DAS/ARR auto-repeat"""
import enum
from typing import Dict, List, Optional
import pygame
from ctxtris_config import CONFIG

class Action(enum.Enum):
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    SOFT_DROP = "soft_drop"
    HARD_DROP = "hard_drop"
    ROTATE_CW = "rotate_cw"
    ROTATE_CCW = "rotate_ccw"
    HOLD = "hold"
    TOGGLE_PAUSE = "toggle_pause"
    START = "start"

KEYMAP: Dict[int, Action] = {
    pygame.K_LEFT: Action.MOVE_LEFT, pygame.K_a: Action.MOVE_LEFT,
    pygame.K_RIGHT: Action.MOVE_RIGHT, pygame.K_d: Action.MOVE_RIGHT,
    pygame.K_DOWN: Action.SOFT_DROP, pygame.K_s: Action.SOFT_DROP,
    pygame.K_SPACE: Action.HARD_DROP,
    pygame.K_UP: Action.ROTATE_CW, pygame.K_x: Action.ROTATE_CW,
    pygame.K_z: Action.ROTATE_CCW,
    pygame.K_c: Action.HOLD,
    pygame.K_p: Action.TOGGLE_PAUSE,
    pygame.K_RETURN: Action.START, pygame.K_KP_ENTER: Action.START, pygame.K_r: Action.START,
}

# On-screen touch buttons
BUTTONS: Dict[str, Action] = {
    "left": Action.MOVE_LEFT,
    "right": Action.MOVE_RIGHT,
    "down": Action.SOFT_DROP,
    "drop": Action.HARD_DROP,
    "rotate": Action.ROTATE_CW,
    "hold": Action.HOLD,
}

class ShiftRepeat:
    """Auto-repeat for a held left/right key.

    The first step comes from the KEYDOWN event itself, so update() only
    emits the repeats: nothing before DAS_MS, then one step every ARR_MS.
    """
    def __init__(self):
        self.dir=0; self.held_ms=0; self.last=0
    def update(self, dt, left, right):
        nd=(-1 if left else 0)+(1 if right else 0)
        if nd!=self.dir:
            self.dir=nd; self.held_ms=0; self.last=0
        if self.dir==0: return 0
        self.held_ms+=dt
        if self.held_ms < CONFIG["DAS_MS"]: return 0
        arr=CONFIG["ARR_MS"]
        if arr==0: return self.dir
        self.last+=dt
        if self.last>=arr:
            self.last=0; return self.dir
        return 0

class DropRepeat:
    """Soft drop for a held Down key, one step every SOFT_DROP_MS.

    Like ShiftRepeat the first step is the KEYDOWN itself.
    """
    def __init__(self):
        self.held=False; self.last=0
    def update(self, dt, down):
        if not down:
            self.held=False; self.last=0; return False
        if not self.held:
            self.held=True; self.last=0; return False
        self.last+=dt
        if self.last>=CONFIG["SOFT_DROP_MS"]:
            self.last=0; return True
        return False

class InputMapper:
    """Applies no game logic; only names the action an input stands for.

    dims, when given, supplies the touch strip for mouse and finger hits.
    """
    def __init__(self, dims=None):
        self.dims = dims
        self.shift = ShiftRepeat()
        self.drop = DropRepeat()

    def map_event(self, e) -> Optional[Action]:
        if e.type == pygame.KEYDOWN:
            return KEYMAP.get(e.key)
        if self.dims is None: return None
        # SDL mirrors touches as mouse clicks; FINGERDOWN already covers them
        if e.type == pygame.MOUSEBUTTONDOWN and e.button == 1 and not getattr(e, "touch", False):
            return self.map_button(self.dims.button_at(*e.pos))
        if e.type == pygame.FINGERDOWN:
            # finger positions are normalized to the window
            px, py = int(e.x * self.dims.total_w), int(e.y * self.dims.total_h)
            return self.map_button(self.dims.button_at(px, py))
        return None

    def map_button(self, name: Optional[str]) -> Optional[Action]:
        return BUTTONS.get(name)

    def repeat(self, dt, pressed) -> List[Action]:
        out = []
        step = self.shift.update(dt, pressed[pygame.K_LEFT] or pressed[pygame.K_a],
                                 pressed[pygame.K_RIGHT] or pressed[pygame.K_d])
        if step < 0: out.append(Action.MOVE_LEFT)
        if step > 0: out.append(Action.MOVE_RIGHT)
        if self.drop.update(dt, pressed[pygame.K_DOWN] or pressed[pygame.K_s]):
            out.append(Action.SOFT_DROP)
        return out
