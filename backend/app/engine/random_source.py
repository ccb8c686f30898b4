"""RandomSource — the single random handle threaded through generation and editing.

Every random decision (color sampling, glyph picks, word placement, shuffles)
goes through one instance, so a seeded source reproduces a grid exactly.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

import numpy as np

T = TypeVar("T")


class RandomSource:
    """Thin wrapper over ``numpy.random.Generator``."""

    def __init__(self, seed: int | None = None) -> None:
        self.seed = seed
        self._rng = np.random.default_rng(seed)

    def next_int(self, bound: int) -> int:
        """Uniform integer in ``[0, bound)``."""
        if bound <= 0:
            raise ValueError(f"bound must be positive, got {bound}")
        return int(self._rng.integers(0, bound))

    def random(self) -> float:
        """Uniform float in ``[0, 1)``."""
        return float(self._rng.random())

    def choice(self, items: Sequence[T]) -> T:
        if not items:
            raise ValueError("cannot choose from an empty sequence")
        return items[self.next_int(len(items))]

    def shuffle(self, items: Sequence[T]) -> list[T]:
        """Return a shuffled copy; the input is left untouched."""
        items = list(items)
        return [items[i] for i in self._rng.permutation(len(items))]

    def sample(self, items: Sequence[T], k: int) -> list[T]:
        """``k`` distinct elements, in random order."""
        return self.shuffle(items)[:k]
