"""Seeded pseudo-random stream used by every generation stage.

A small linear congruential generator. The whole level is a function of
the seed, so the state lives on one owned object that is threaded through
the pipeline instead of in module globals.
"""

import math
from typing import Sequence, TypeVar

T = TypeVar("T")

LCG_MULTIPLIER = 9301
LCG_INCREMENT = 49297
LCG_MODULUS = 233280


class RandomSource:
    """Deterministic float stream in [0, 1).

    Usage:
        rng = RandomSource(12345)
        rng.next()              # 0.4131...
        rng.between(180, 200)
        rng.pick([100, 120, 140])
    """

    def __init__(self, seed: int = 12345):
        self.seed = int(seed)

    def next(self) -> float:
        """Advance the seed once and return it scaled to [0, 1)."""
        self.seed = (self.seed * LCG_MULTIPLIER + LCG_INCREMENT) % LCG_MODULUS
        return self.seed / LCG_MODULUS

    def between(self, low: float, high: float) -> float:
        return low + self.next() * (high - low)

    def pick(self, items: Sequence[T]) -> T:
        return items[math.floor(self.next() * len(items))]

    def randint(self, low: int, high: int) -> int:
        """Integer in [low, high], both ends inclusive."""
        return low + math.floor(self.next() * (high - low + 1))

    def chance(self, probability: float) -> bool:
        """Draw once; True with the given probability."""
        return self.next() > 1.0 - probability

    def __repr__(self) -> str:
        return f"RandomSource(seed={self.seed})"
