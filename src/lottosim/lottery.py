"""The game: buy tickets, draw once, check, award jackpots, report stats."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from tqdm import tqdm

from .bank import Bank
from .errors import (
    AlreadyDrawnError,
    ConfigurationError,
    InvalidPickError,
    NotDrawnError,
    SequenceError,
)
from .generate import MultiSetPicker
from .outcomes import Outcome, OutcomeTable
from .random_source import RandomSource, SystemRandomSource
from .rules import MEGA_MILLIONS, GameConfig, MatchVector, Pick, Prize
from .ticket import Ticket

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OutcomeStats:
    key: MatchVector
    prize: Prize
    occurrences: int
    paid: int


@dataclass(frozen=True)
class GameStats:
    name: str
    played: bool
    draw: Optional[Pick]
    multiplier: Optional[int]
    tickets: int
    picks: int
    jackpot: int
    jackpot_winners: int
    jackpot_share: int
    odds: int
    start_balance: int
    credits: int
    debits: int
    balance: int
    outcomes: Tuple[OutcomeStats, ...]

    @property
    def winnings(self) -> int:
        return sum(o.paid for o in self.outcomes)


def _is_seq(value) -> bool:
    return isinstance(value, Iterable) and not isinstance(value, (str, bytes))


def _as_lists(numbers):
    """Copy a pick into lists so one-shot iterators are read only once."""
    if not _is_seq(numbers):
        return numbers
    return [list(part) if _is_seq(part) else part for part in numbers]


class Lottery:
    """A single parametrized game built from a :class:`GameConfig`.

    Lifecycle: tickets are bought while the game is open, :meth:`draw` runs
    exactly once, then :meth:`check_tickets` and :meth:`award_jackpots` settle
    the batch in that order. :meth:`reset` starts a fresh game on the same
    configuration.
    """

    def __init__(self, config: GameConfig = MEGA_MILLIONS, source: Optional[RandomSource] = None) -> None:
        self.config = config
        self.source = source or SystemRandomSource()
        self.game_picker = MultiSetPicker(config.parts, self.source)
        self.ticket_picker = MultiSetPicker(config.parts, self.source)
        self._multiplier_rng = self.source.generator() if config.multiplier else None
        self.outcomes = OutcomeTable(config)
        self.reset()

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def cost(self) -> int:
        return self.config.cost

    def reset(self) -> None:
        self.current_jackpot = self.config.start_jackpot
        self.official_draw: Optional[Pick] = None
        self.multiplier: Optional[int] = None
        self.played = False
        self.jackpots_awarded = False
        self.tickets: List[Ticket] = []
        self.ticket_counter = 0
        self.bank = Bank(self.config.start_jackpot)
        self.outcomes.reset()
        logger.debug("%s reset", self.name)

    def next_ticket_number(self) -> int:
        self.ticket_counter += 1
        return self.ticket_counter

    def calculate_cost(self, num_picks: int, multiplier: bool = False) -> int:
        per_pick = self.cost + (self.config.multiplier.cost if multiplier and self.config.multiplier else 0)
        return num_picks * per_pick

    def odds(self) -> int:
        return self.game_picker.odds()

    def played_check(self) -> None:
        if self.played:
            raise AlreadyDrawnError(f"{self.name} already drawn")

    def validate_picks(self, picks: Sequence[Sequence[Sequence[int]]]) -> List[Pick]:
        """Check explicit numbers against each part's rules and normalize them."""
        picks = [_as_lists(numbers) for numbers in picks]
        details = {}
        for i, numbers in enumerate(picks):
            found = self.ticket_picker.problems(numbers)
            if found:
                details[i] = found
        if details:
            raise InvalidPickError(
                f"{len(details)} invalid pick(s); expected {self.ticket_picker.describe()}",
                details=details,
            )
        return [Pick.of(numbers) for numbers in picks]

    def buy_ticket(
        self,
        easy_picks: int = 0,
        picks: Optional[Sequence[Sequence[Sequence[int]]]] = None,
        multiplier: bool = False,
    ) -> Ticket:
        """Buy one ticket of ``easy_picks`` random picks or explicit ``picks``."""
        self.played_check()
        if (picks is None) == (not easy_picks):
            raise ValueError("pass exactly one of easy_picks=N or picks=[...]")
        if multiplier and self.config.multiplier is None:
            raise ConfigurationError(f"{self.name} has no multiplier option")

        if picks is not None:
            chosen = self.validate_picks(picks)
            if not chosen:
                raise ValueError("a ticket needs at least one pick")
        else:
            if easy_picks < 1:
                raise ValueError(f"easy_picks must be >= 1, got {easy_picks}")
            chosen = self.ticket_picker.picks(easy_picks)

        ticket = Ticket(self, self.next_ticket_number(), chosen, multiplier)
        self.bank.credit(ticket.cost)
        self.tickets.append(ticket)
        return ticket

    def draw(self, numbers: Optional[Sequence[Sequence[int]]] = None) -> Pick:
        """Run the official draw. ``numbers`` injects a known result instead."""
        self.played_check()
        if numbers is not None:
            draw = self.validate_picks([numbers])[0]
        else:
            draw = self.game_picker.pick()
        if self._multiplier_rng is not None:
            self.multiplier = self._multiplier_rng.choice(self.config.multiplier.values)
        self.official_draw = draw
        self.played = True
        logger.info("%s draw: %s (multiplier=%s, tickets=%d)",
                    self.name, draw.parts, self.multiplier, len(self.tickets))
        return draw

    def match(self, pick: Pick) -> MatchVector:
        if self.official_draw is None:
            raise NotDrawnError(f"{self.name}: no official draw")
        return self.outcomes.match(pick, self.official_draw)

    def settle(self, outcome: Outcome, multiplier: bool = False) -> int:
        """Record one checked pick and pay it unless it is a jackpot hit."""
        outcome.record()
        if outcome.is_jackpot:
            return 0
        amount = outcome.payout()
        if multiplier and self.multiplier:
            amount *= self.multiplier
        self.bank.debit(amount)
        return amount

    def pick_pays(self, pick: Pick) -> Tuple[MatchVector, int]:
        """Match vector and the amount the pick would pay, without settling."""
        key = self.match(pick)
        return key, self.outcomes.lookup(key).payout(self.current_jackpot)

    def check_tickets(self) -> List[Ticket]:
        if not self.played:
            raise NotDrawnError(f"{self.name}: lottery not yet drawn")
        for ticket in self.tickets:
            ticket.check()
        return self.tickets

    def award_jackpots(self) -> int:
        """Split the jackpot pool evenly across every pending jackpot hit.

        Must run once, after every ticket has been checked; the share is
        frozen here. Returns the per-winner share.
        """
        if not self.played:
            raise NotDrawnError(f"{self.name}: lottery not yet drawn")
        if self.jackpots_awarded:
            raise SequenceError(f"{self.name}: jackpots already awarded")
        unchecked = [t.number for t in self.tickets if not t.checked]
        if unchecked:
            raise SequenceError(
                f"{self.name}: {len(unchecked)} ticket(s) unchecked; run check_tickets first",
                details={"unchecked": unchecked},
            )

        jackpot = self.outcomes.jackpot
        winners = jackpot.pending if jackpot else 0
        share = self.current_jackpot // winners if winners else 0
        if jackpot is not None:
            jackpot.awarded_share = share
            for ticket in self.tickets:
                ticket.award_jackpot(share)
            jackpot.pending = 0
        self.jackpots_awarded = True

        if winners:
            logger.info("%s jackpot %d split %d way(s): %d each",
                        self.name, self.current_jackpot, winners, share)
        else:
            logger.warning("%s jackpot %d has no winners", self.name, self.current_jackpot)
        return share

    @property
    def num_jackpot_winners(self) -> int:
        jackpot = self.outcomes.jackpot
        return jackpot.occurrences if jackpot else 0

    @property
    def current_jackpot_payout(self) -> int:
        jackpot = self.outcomes.jackpot
        return jackpot.payout(self.current_jackpot) if jackpot else 0

    def winning_tickets(self, top: int = 3) -> List[Ticket]:
        return sorted(self.tickets, key=lambda t: t.winnings, reverse=True)[:top]

    def stats(self) -> GameStats:
        paid_by_key: Dict[MatchVector, int] = {}
        for t in self.tickets:
            for r in t.results:
                paid_by_key[r.match] = paid_by_key.get(r.match, 0) + r.amount

        rows = []
        for outcome in self.outcomes:
            if outcome.is_jackpot:
                paid = (outcome.awarded_share or 0) * outcome.occurrences
            else:
                paid = paid_by_key.get(outcome.key, 0)
            rows.append(OutcomeStats(outcome.key, outcome.prize, outcome.occurrences, paid))
        return GameStats(
            name=self.name,
            played=self.played,
            draw=self.official_draw,
            multiplier=self.multiplier,
            tickets=len(self.tickets),
            picks=sum(t.num_picks for t in self.tickets),
            jackpot=self.current_jackpot,
            jackpot_winners=self.num_jackpot_winners,
            jackpot_share=self.current_jackpot_payout,
            odds=self.odds(),
            start_balance=self.bank.start_balance,
            credits=self.bank.credits,
            debits=self.bank.debits,
            balance=self.bank.balance,
            outcomes=tuple(rows),
        )

    def play(self, tickets: int, picks: int = 1, multiplier: bool = False, progress: bool = False) -> GameStats:
        """Fresh game: buy ``tickets`` easy-pick tickets, draw, settle, report."""
        self.reset()
        for _ in tqdm(range(tickets), desc=f"{self.name} tickets", unit="ticket", disable=not progress):
            self.buy_ticket(easy_picks=picks, multiplier=multiplier)
        self.draw()
        self.check_tickets()
        self.award_jackpots()
        return self.stats()

    def __repr__(self) -> str:
        state = "drawn" if self.played else "open"
        return f"<Lottery {self.name} {state} tickets={len(self.tickets)}>"
