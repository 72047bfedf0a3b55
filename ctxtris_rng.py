
"""7-bag randomizer and next-piece queue"""
import random
from collections import deque
from typing import List, Optional
from ctxtris_config import NEXT_QUEUE_SIZE
from ctxtris_piece import KINDS

class Bag:
    """Deals every kind exactly once per cycle of seven draws."""
    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng if rng is not None else random.Random()
        self.items: List[str] = []

    def fill(self):
        self.items = list(KINDS)
        self.rng.shuffle(self.items)

    def draw(self) -> str:
        if not self.items: self.fill()
        return self.items.pop()

class PieceQueue:
    def __init__(self, bag: Bag, size: int = NEXT_QUEUE_SIZE):
        self.bag = bag
        self.size = size
        self.items = deque()
        self.refill()

    def refill(self):
        while len(self.items) < self.size:
            self.items.append(self.bag.draw())

    def pop(self) -> str:
        t = self.items.popleft()
        self.refill()
        return t

    def peek(self) -> List[str]:
        return list(self.items)
