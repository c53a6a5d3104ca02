from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from itertools import product
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Tuple, Union

from .errors import ConfigurationError

Part = Tuple[int, ...]            # a sorted tuple of distinct numbers
MatchVector = Tuple[int, ...]     # matched count per part


class Payout(str, Enum):
    JACKPOT = "jackpot"


JACKPOT = Payout.JACKPOT

Prize = Union[int, Payout]


@dataclass(frozen=True)
class PartSpec:
    count: int
    max: int

    def __post_init__(self) -> None:
        if self.count < 1:
            raise ConfigurationError(f"part must pick at least one number, got {self.count}")
        if self.count > self.max:
            raise ConfigurationError(
                f"cannot pick {self.count} distinct numbers from 1-{self.max}",
                details={"count": self.count, "max": self.max},
            )


@dataclass(frozen=True)
class Multiplier:
    """Optional add-on (PowerPlay, Megaplier, ...) drawn alongside the numbers."""

    name: str
    cost: int
    values: Tuple[int, ...]

    def __post_init__(self) -> None:
        if not self.values:
            raise ConfigurationError(f"multiplier {self.name} has no values")
        if any(v < 1 for v in self.values):
            raise ConfigurationError(f"multiplier {self.name} values must be >= 1")


@dataclass(frozen=True)
class GameConfig:
    name: str
    cost: int
    start_jackpot: int
    parts: Tuple[PartSpec, ...]
    payouts: Mapping[MatchVector, Prize] = field(hash=False)
    multiplier: Optional[Multiplier] = None

    def __post_init__(self) -> None:
        if not self.parts:
            raise ConfigurationError(f"{self.name}: at least one part is required")
        if self.cost < 0 or self.start_jackpot < 0:
            raise ConfigurationError(f"{self.name}: cost and jackpot must be non-negative")
        object.__setattr__(self, "parts", tuple(self.parts))
        object.__setattr__(self, "payouts", MappingProxyType(dict(self.payouts)))

        arity = len(self.parts)
        reachable = set(self.match_vectors())
        jackpots = 0
        for key, prize in self.payouts.items():
            if len(key) != arity:
                raise ConfigurationError(
                    f"{self.name}: payout key {key} has {len(key)} entries, expected {arity}",
                    details={"key": key},
                )
            if key not in reachable:
                raise ConfigurationError(
                    f"{self.name}: payout key {key} can never match; each entry must be 0..count",
                    details={"key": key},
                )
            if prize is JACKPOT:
                jackpots += 1
            elif not isinstance(prize, int) or isinstance(prize, bool) or prize < 0:
                raise ConfigurationError(
                    f"{self.name}: payout for {key} must be a non-negative int or JACKPOT",
                    details={"key": key, "prize": prize},
                )
        if jackpots > 1:
            raise ConfigurationError(f"{self.name}: only one outcome may pay the jackpot")

        missing = [key for key in self.match_vectors() if key not in self.payouts]
        if missing:
            raise ConfigurationError(
                f"{self.name}: payout table does not cover {len(missing)} match vector(s)",
                details={"missing": missing},
            )

    def match_vectors(self) -> Iterable[MatchVector]:
        """Every match vector a pick can produce against a draw."""
        return product(*(range(p.count + 1) for p in self.parts))

    @classmethod
    def from_dict(cls, data: Mapping) -> "GameConfig":
        """Build a config from plain data, e.g. parsed JSON.

        Payout keys may be tuples or strings like "5+1"; the value "jackpot"
        (any case) marks the jackpot outcome.
        """
        payouts: Dict[MatchVector, Prize] = {}
        for raw_key, raw_prize in data["payouts"].items():
            if isinstance(raw_key, str):
                key = tuple(int(k) for k in raw_key.replace("+", ",").split(","))
            else:
                key = tuple(int(k) for k in raw_key)
            if isinstance(raw_prize, str) and raw_prize.lower() == JACKPOT.value:
                payouts[key] = JACKPOT
            else:
                payouts[key] = raw_prize
        mult = data.get("multiplier")
        return cls(
            name=data["name"],
            cost=data["cost"],
            start_jackpot=data["start_jackpot"],
            parts=tuple(PartSpec(p["count"], p["max"]) for p in data["parts"]),
            payouts=payouts,
            multiplier=Multiplier(mult["name"], mult["cost"], tuple(mult["values"])) if mult else None,
        )


@dataclass(frozen=True)
class Pick:
    """One set of numbers per part, each part sorted ascending."""

    parts: Tuple[Part, ...]

    @classmethod
    def of(cls, parts: Iterable[Iterable[int]]) -> "Pick":
        return cls(tuple(tuple(sorted(part)) for part in parts))

    def __and__(self, other: "Pick") -> Tuple[Part, ...]:
        return tuple(
            tuple(sorted(set(mine) & set(theirs)))
            for mine, theirs in zip(self.parts, other.parts)
        )

    def match(self, other: "Pick") -> MatchVector:
        return tuple(len(common) for common in self & other)

    def __len__(self) -> int:
        return len(self.parts)

    def __iter__(self):
        return iter(self.parts)


POWERBALL = GameConfig(
    name="PowerBall",
    cost=2,
    start_jackpot=40_000_000,
    parts=(PartSpec(5, 69), PartSpec(1, 26)),
    multiplier=Multiplier("PowerPlay", 1, (2, 3, 4, 5)),
    payouts={
        (5, 1): JACKPOT,
        (5, 0): 1_000_000,
        (4, 1): 50_000,
        (4, 0): 100,
        (3, 1): 100,
        (3, 0): 7,
        (2, 1): 7,
        (1, 1): 4,
        (0, 1): 4,
        (2, 0): 0,
        (1, 0): 0,
        (0, 0): 0,
    },
)

MEGA_MILLIONS = GameConfig(
    name="Mega Millions",
    cost=2,
    start_jackpot=40_000_000,
    parts=(PartSpec(5, 70), PartSpec(1, 25)),
    # weighted: 2x twice, 3x four times, 4x three times, 5x six times
    multiplier=Multiplier("Megaplier", 1, (2,) * 2 + (3,) * 4 + (4,) * 3 + (5,) * 6),
    payouts={
        (5, 1): JACKPOT,
        (5, 0): 1_000_000,
        (4, 1): 5_000,
        (4, 0): 500,
        (3, 1): 50,
        (3, 0): 5,
        (2, 1): 5,
        (1, 1): 2,
        (0, 1): 1,
        (2, 0): 0,
        (1, 0): 0,
        (0, 0): 0,
    },
)

FLORIDA_LOTTO = GameConfig(
    name="Florida Lotto",
    cost=1,
    start_jackpot=1_000_000,
    parts=(PartSpec(6, 53),),
    multiplier=Multiplier("Xtra", 1, (2, 3, 4, 5)),
    payouts={
        (6,): JACKPOT,
        (5,): 5_000,
        (4,): 70,
        (3,): 5,
        (2,): 0,
        (1,): 0,
        (0,): 0,
    },
)

TEST_LOTTO = GameConfig(
    name="TestLotto",
    cost=1,
    start_jackpot=1_000_000,
    parts=(PartSpec(5, 50), PartSpec(1, 20)),
    multiplier=Multiplier("Fuzzball", 1, (2, 3, 4, 5)),
    payouts={
        (5, 1): JACKPOT, (5, 0): 100_000,
        (4, 1): 10_000, (4, 0): 100,
        (3, 1): 50, (3, 0): 5,
        (2, 1): 5, (1, 1): 2,
        (0, 1): 2, (2, 0): 0,
        (1, 0): 0, (0, 0): 0,
    },
)

GAMES: Dict[str, GameConfig] = {
    "powerball": POWERBALL,
    "mega": MEGA_MILLIONS,
    "florida": FLORIDA_LOTTO,
    "test": TEST_LOTTO,
}


def get_game(name: str) -> GameConfig:
    try:
        return GAMES[name.lower().strip()]
    except KeyError:
        raise ConfigurationError(
            f"unknown game {name!r}",
            details={"choices": sorted(GAMES)},
        ) from None
