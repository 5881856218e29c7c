"""
Injectable random source.

All shuffling and sampling in the engine goes through RandomSource so that
tests can pass a seeded instance and get reproducible sessions.
"""

from __future__ import annotations

import random
from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")


class RandomSource:
    """Thin wrapper around random.Random with the operations the engine needs."""

    def __init__(self, seed: int | None = None):
        self._random = random.Random(seed)

    def shuffled(self, items: Sequence[T]) -> list[T]:
        """Return a Fisher-Yates shuffled copy of items."""
        result = list(items)
        for i in range(len(result) - 1, 0, -1):
            j = self._random.randint(0, i)
            result[i], result[j] = result[j], result[i]
        return result

    def sample(self, items: Sequence[T], k: int) -> list[T]:
        """Pick up to k distinct positions from items."""
        return self.shuffled(items)[: max(0, k)]

    def chance(self, probability: float) -> bool:
        """True with the given probability."""
        return self._random.random() < probability
