# ctxtris_layout.py
from dataclasses import dataclass, field
from typing import List, Optional, Tuple
from ctxtris_config import CONFIG, COLS, ROWS

# Touch strip under the board, left to right
BUTTON_ORDER = ("left", "right", "down", "drop", "rotate", "hold")

Box = Tuple[int, int, int, int]

@dataclass
class Dims:
    cell: int
    margin: int
    panel_w: int
    board_w: int
    board_h: int
    total_w: int
    total_h: int
    board_x: int
    board_y: int
    panel_x: int
    panel_y: int
    hold_y: int
    next_y: int
    slot_h: int
    buttons: List[Tuple[str, Box]] = field(default_factory=list)

    def button_at(self, px: int, py: int) -> Optional[str]:
        for name, (x, y, w, h) in self.buttons:
            if x <= px < x + w and y <= py < y + h:
                return name
        return None

def button_boxes(left: int, top: int, width: int, height: int, gap: int) -> List[Tuple[str, Box]]:
    n = len(BUTTON_ORDER)
    w = (width - gap * (n - 1)) // n
    return [(name, (left + i * (w + gap), top, w, height)) for i, name in enumerate(BUTTON_ORDER)]

def compute_dims() -> Dims:
    cell = int(CONFIG["CELL_SIZE"])
    margin = 16
    panel_w = 160
    slot_h = 90
    button_h = 44

    board_w = COLS * cell
    board_h = ROWS * cell
    board_x = board_y = margin

    # Side panel: HUD text, hold box, then the next queue
    panel_x = board_x + board_w + margin
    panel_y = margin
    hold_y = panel_y + 150
    next_y = hold_y + slot_h + 30

    total_w = panel_x + panel_w + margin
    strip_y = board_y + board_h + margin
    total_h = strip_y + button_h + margin
    buttons = button_boxes(margin, strip_y, total_w - 2 * margin, button_h, 8)

    return Dims(
        cell=cell, margin=margin, panel_w=panel_w,
        board_w=board_w, board_h=board_h,
        total_w=total_w, total_h=total_h,
        board_x=board_x, board_y=board_y,
        panel_x=panel_x, panel_y=panel_y,
        hold_y=hold_y, next_y=next_y, slot_h=slot_h,
        buttons=buttons,
    )
