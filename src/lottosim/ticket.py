"""Purchased tickets and their per-pick results."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, List, Sequence, Tuple

from .errors import NotDrawnError
from .rules import MatchVector, Pick

if TYPE_CHECKING:
    from .lottery import Lottery

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PickResult:
    pick: Pick
    match: MatchVector
    amount: int      # 0 for a jackpot pick until the share is awarded
    jackpot: bool


class Ticket:
    def __init__(
        self,
        lotto: "Lottery",
        number: int,
        picks: Sequence[Pick],
        multiplier: bool = False,
    ) -> None:
        self.lotto = lotto
        self.number = number
        self.picks: Tuple[Pick, ...] = tuple(picks)
        self.multiplier = multiplier
        self.cost = lotto.calculate_cost(len(self.picks), multiplier)
        self.winnings = 0
        self.checked = False
        self.results: List[PickResult] = []
        self.jackpot_awarded = 0

    @property
    def num_picks(self) -> int:
        return len(self.picks)

    @property
    def jackpot_picks(self) -> int:
        return sum(1 for r in self.results if r.jackpot)

    def check(self) -> int:
        """Match every pick against the official draw and collect fixed prizes.

        Jackpot hits are only recorded here; their money moves in
        :meth:`award_jackpot` once every ticket has been checked.
        Raises NotDrawnError before the draw, leaving the ticket unchecked.
        """
        if not self.lotto.played:
            raise NotDrawnError(f"ticket #{self.number}: lottery not yet drawn")
        if self.checked:
            return self.winnings

        # resolve everything first so a failed lookup mutates nothing
        outcomes = [self.lotto.outcomes.lookup(self.lotto.match(p)) for p in self.picks]
        for pick, outcome in zip(self.picks, outcomes):
            amount = self.lotto.settle(outcome, self.multiplier)
            self.winnings += amount
            self.results.append(PickResult(pick, outcome.key, amount, outcome.is_jackpot))
        self.checked = True
        logger.debug("ticket #%d checked: winnings=%d jackpot_picks=%d",
                     self.number, self.winnings, self.jackpot_picks)
        return self.winnings

    def award_jackpot(self, share: int) -> int:
        amount = share * self.jackpot_picks
        if amount:
            self.lotto.bank.debit(amount)
            self.winnings += amount
            self.jackpot_awarded += amount
            self.results = [replace(r, amount=share) if r.jackpot else r for r in self.results]
        return amount

    def winning_results(self) -> List[PickResult]:
        return [r for r in self.results if r.amount or r.jackpot]

    def __repr__(self) -> str:
        won = f", winnings: {self.winnings}" if self.checked else ""
        return f"Ticket {self.number}: {self.num_picks} picks for {self.cost}{won}"
