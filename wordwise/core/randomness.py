"""Randomness source used to vary practice drill order."""

from __future__ import annotations

import random
from typing import MutableSequence, Protocol


class Shuffler(Protocol):
    def shuffle(self, items: MutableSequence) -> None:
        """Permute *items* in place."""


class RandomShuffler:
    """Uniform in-place permutation backed by :class:`random.Random`.

    Pass ``seed`` to obtain a reproducible sequence of permutations.
    """

    def __init__(self, seed: int | None = None):
        self._random = random.Random(seed)

    def shuffle(self, items: MutableSequence) -> None:
        self._random.shuffle(items)


__all__ = ["RandomShuffler", "Shuffler"]
