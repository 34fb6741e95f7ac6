"""7-bag randomizer"""
import random
from typing import List, Optional

from tetris_shapes import PIECES


class SevenBag:
    """
    Deals piece types in shuffled cycles of seven.

    Every run of seven draws starting from a fresh bag contains each type
    exactly once. The bag refills with a new uniform permutation only when it
    is empty; reset() empties it so the next draw starts a new cycle.
    """

    def __init__(self, seed: Optional[int] = None):
        self.rng = random.Random(seed)
        self.remaining: List[str] = []

    def draw(self) -> str:
        if not self.remaining:
            self.remaining = list(PIECES)
            # random.shuffle is an unbiased Fisher-Yates
            self.rng.shuffle(self.remaining)
        return self.remaining.pop()

    def copy(self) -> "SevenBag":
        """Independent bag with the same remaining draws and RNG state."""
        other = SevenBag()
        other.rng.setstate(self.rng.getstate())
        other.remaining = list(self.remaining)
        return other

    def reset(self) -> None:
        self.remaining = []

    def __len__(self) -> int:
        return len(self.remaining)
