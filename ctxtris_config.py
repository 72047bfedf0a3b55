
from typing import NamedTuple

COLS, ROWS = 10, 20

CONFIG = {
    "CELL_SIZE": 28,
    "DAS_MS": 170,
    "ARR_MS": 50,
    "SOFT_DROP_MS": 50,
    "CLEAR_DELAY_MS": 200,
    "FLASH_FRAMES": 12,
    "BASE_DROP_MS": 1000,
    "MIN_DROP_MS": 80,
    "FPS": 60,
    "SEED": None,
    "LOG_LEVEL": "INFO",
}

class Level(NamedTuple):
    name: str
    ctx: str
    speed: float

# Model progression, one entry per 10 lines
LEVELS = (
    Level("GPT-3.5", "4K", 1.0),
    Level("GPT-4", "8K", 1.2),
    Level("Claude 2", "100K", 1.5),
    Level("GPT-4 Turbo", "128K", 1.8),
    Level("Claude 3", "200K", 2.2),
    Level("Gemini 1.5", "1M", 2.6),
    Level("Gemini 2.0", "2M", 3.0),
    Level("Claude 4", "∞", 3.5),
    Level("GPT-5", "???", 4.0),
    Level("AGI Mode", "♾️", 5.0),
)

LINES_PER_LEVEL = 10
NEXT_QUEUE_SIZE = 3

# Tokens per action
SCORE_SOFT_DROP = 1
SCORE_HARD_DROP = 2  # per row
SCORE_LINES = (0, 100, 300, 500, 800)
