"""Sources of seeded pseudo-random generators.

A game asks its source for one generator per picker part (and one for the
multiplier), so each part draws from its own stream. A seeded source derives
those child seeds from a single master seed, which makes a whole run
reproducible; the system source seeds every child from OS entropy.
"""

from __future__ import annotations

import random


class RandomSource:
    """Produces independent ``random.Random`` instances."""

    def generator(self) -> random.Random:
        raise NotImplementedError


class SystemRandomSource(RandomSource):
    def generator(self) -> random.Random:
        return random.Random()  # seeds from os.urandom / time

    def __repr__(self) -> str:
        return "SystemRandomSource()"


class SeededRandomSource(RandomSource):
    def __init__(self, seed: int) -> None:
        self.seed = seed
        self._master = random.Random(seed)

    def generator(self) -> random.Random:
        return random.Random(self._master.getrandbits(64))

    def __repr__(self) -> str:
        return f"SeededRandomSource({self.seed})"


def make_source(seed: int | None = None) -> RandomSource:
    return SystemRandomSource() if seed is None else SeededRandomSource(seed)
