"""Payout outcomes keyed by match vector, with per-run counters."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, Optional

from .errors import UnconfiguredOutcomeError
from .rules import JACKPOT, GameConfig, MatchVector, Pick, Prize


@dataclass
class Outcome:
    key: MatchVector
    prize: Prize
    occurrences: int = 0
    pending: int = 0
    awarded_share: Optional[int] = None

    @property
    def is_jackpot(self) -> bool:
        return self.prize is JACKPOT

    def payout(self, jackpot_pool: int = 0) -> int:
        """Amount paid per pick landing on this outcome.

        A jackpot pays an equal split of the pool across pending winners
        until the share is frozen by the award step.
        """
        if not self.is_jackpot:
            return int(self.prize)
        if self.awarded_share is not None:
            return self.awarded_share
        return jackpot_pool // max(1, self.pending)

    def record(self) -> None:
        self.occurrences += 1
        if self.is_jackpot:
            self.pending += 1

    def reset(self) -> None:
        self.occurrences = 0
        self.pending = 0
        self.awarded_share = None


class OutcomeTable:
    def __init__(self, config: GameConfig) -> None:
        self.config = config
        self.outcomes: Dict[MatchVector, Outcome] = {
            key: Outcome(key, prize) for key, prize in config.payouts.items()
        }
        self.jackpot: Optional[Outcome] = next(
            (o for o in self.outcomes.values() if o.is_jackpot), None
        )

    @staticmethod
    def match(pick: Pick, draw: Pick) -> MatchVector:
        return pick.match(draw)

    def lookup(self, key: MatchVector) -> Outcome:
        try:
            return self.outcomes[tuple(key)]
        except KeyError:
            raise UnconfiguredOutcomeError(tuple(key)) from None

    def __getitem__(self, key: MatchVector) -> Outcome:
        return self.lookup(key)

    def __iter__(self) -> Iterator[Outcome]:
        # highest match counts first
        return iter(sorted(self.outcomes.values(), key=lambda o: o.key, reverse=True))

    def __len__(self) -> int:
        return len(self.outcomes)

    def reset(self) -> None:
        for outcome in self.outcomes.values():
            outcome.reset()
