from __future__ import annotations
import random
from math import comb, prod
from typing import Dict, Iterable, List, Sequence, Tuple

from .errors import ConfigurationError
from .random_source import RandomSource
from .rules import Part, PartSpec, Pick


def total_space(parts: Iterable[PartSpec]) -> int:
    """Total number of possible draws for the given parts."""
    return prod(comb(p.max, p.count) for p in parts)


class NumberGenerator:
    """Draws ``count`` distinct numbers from 1..max, without replacement."""

    def __init__(self, count: int, max: int, rng: random.Random) -> None:
        if count > max:
            raise ConfigurationError(
                f"cannot pick {count} distinct numbers from 1-{max}",
                details={"count": count, "max": max},
            )
        self.count = count
        self.max = max
        self.rng = rng
        self.freq: List[int] = [0] * (max + 1)  # 1-indexed; freq[0] unused
        self._odds: int | None = None

    def draw(self) -> Part:
        picks = self.rng.sample(range(1, self.max + 1), k=self.count)
        picks.sort()
        for n in picks:
            self.freq[n] += 1
        return tuple(picks)

    def odds(self) -> int:
        """1-in-N odds of guessing the drawn set exactly: C(max, count)."""
        if self._odds is None:
            self._odds = comb(self.max, self.count)
        return self._odds

    def problems(self, candidate: Sequence[int]) -> List[str]:
        out: List[str] = []
        if any(isinstance(n, bool) or not isinstance(n, int) for n in candidate):
            return [f"numbers must be integers, got {list(candidate)}"]
        if len(candidate) != self.count:
            out.append(f"must pick exactly {self.count} numbers, got {len(candidate)}")
        if len(set(candidate)) != len(candidate):
            out.append("duplicate numbers")
        if any(n < 1 for n in candidate):
            out.append(f"number below range (1-{self.max})")
        if any(n > self.max for n in candidate):
            out.append(f"number above range (1-{self.max})")
        return out

    def valid(self, candidate: Sequence[int]) -> bool:
        return not self.problems(candidate)

    def __repr__(self) -> str:
        return f"NumberGenerator({self.count} of 1-{self.max})"


class MultiSetPicker:
    """Composes one NumberGenerator per part into whole picks."""

    def __init__(self, parts: Sequence[PartSpec], source: RandomSource) -> None:
        self.parts: Tuple[PartSpec, ...] = tuple(parts)
        self.generators = [NumberGenerator(p.count, p.max, source.generator()) for p in self.parts]

    def pick(self) -> Pick:
        return Pick(tuple(g.draw() for g in self.generators))

    def picks(self, n: int) -> List[Pick]:
        return [self.pick() for _ in range(n)]

    def odds(self) -> int:
        return int(prod(g.odds() for g in self.generators))

    def problems(self, pick: Sequence[Sequence[int]]) -> Dict[int, List[str]]:
        """Reasons per part index; empty when the pick is acceptable."""
        if not isinstance(pick, Iterable):
            return {-1: [f"expected a list of parts, got {pick!r}"]}
        parts = list(pick)
        if len(parts) != len(self.generators):
            return {-1: [f"expected {len(self.generators)} part(s), got {len(parts)}"]}
        found: Dict[int, List[str]] = {}
        for i, (gen, part) in enumerate(zip(self.generators, parts)):
            if isinstance(part, (str, bytes)) or not isinstance(part, Iterable):
                found[i] = [f"expected a list of numbers, got {part!r}"]
                continue
            reasons = gen.problems(list(part))
            if reasons:
                found[i] = reasons
        return found

    def invalid(self, pick: Sequence[Sequence[int]]) -> bool:
        return bool(self.problems(pick))

    def describe(self) -> str:
        return " + ".join(f"{g.count} of 1-{g.max}" for g in self.generators)

    @property
    def freq(self) -> List[List[int]]:
        return [list(g.freq) for g in self.generators]
