import os, sys

# Headless pygame for the render tests
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

# Ensure the project root is on path for test imports
ROOT = os.path.dirname(os.path.dirname(__file__))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from tests.helpers import FakeClock, fill_row, make_game

__all__ = [
    "FakeClock",
    "fill_row",
    "make_game",
]
