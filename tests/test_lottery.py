import pytest

from lottosim.errors import (
    AlreadyDrawnError,
    ConfigurationError,
    InvalidPickError,
    NotDrawnError,
    SequenceError,
)
from lottosim.lottery import Lottery
from lottosim.random_source import SeededRandomSource
from lottosim.rules import FLORIDA_LOTTO, JACKPOT, POWERBALL, TEST_LOTTO, GameConfig, PartSpec, Pick


def test_scenario_jackpot_fixed_and_losing_tickets(lotto):
    t1 = lotto.buy_ticket(picks=[[[1, 2, 3, 4, 5]]])
    t2 = lotto.buy_ticket(picks=[[[1, 2, 3, 4, 6]]])
    t3 = lotto.buy_ticket(picks=[[[10, 20, 30, 40, 50]]])
    assert [t.number for t in (t1, t2, t3)] == [1, 2, 3]
    assert lotto.bank.credits == 3

    lotto.draw([[1, 2, 3, 4, 5]])
    lotto.check_tickets()

    assert t1.results[0].match == (5,)
    assert t1.results[0].jackpot is True
    assert t1.winnings == 0
    assert lotto.outcomes[(5,)].pending == 1

    assert t2.results[0].match == (4,)
    assert t2.winnings == 100
    assert t3.results[0].match == (0,)
    assert t3.winnings == 0
    assert lotto.bank.debits == 100

    assert lotto.award_jackpots() == 1_000_000
    assert t1.winnings == 1_000_000
    assert lotto.bank.debits == 1_000_100
    assert lotto.bank.balance == 1_000_000 + 3 - 1_000_100


@pytest.mark.parametrize("winners", [1, 2, 3, 4, 7])
def test_jackpot_is_split_evenly_across_winners(test_lotto, winners):
    draw = [[1, 9, 20, 34, 50], [14]]
    winning = [test_lotto.buy_ticket(picks=[draw]) for _ in range(winners)]
    for _ in range(50):
        test_lotto.buy_ticket(easy_picks=5)

    test_lotto.draw(draw)
    test_lotto.check_tickets()
    assert test_lotto.num_jackpot_winners == winners
    assert test_lotto.current_jackpot_payout == test_lotto.current_jackpot // winners

    share = test_lotto.award_jackpots()
    assert share == 1_000_000 // winners
    for ticket in winning:
        assert ticket.winnings == share
    total = sum(t.jackpot_awarded for t in test_lotto.tickets)
    assert total == share * winners <= test_lotto.current_jackpot
    assert test_lotto.current_jackpot_payout == share


def test_ticket_with_two_jackpot_picks_gets_two_shares(test_lotto):
    draw = [[1, 9, 20, 34, 50], [14]]
    double = test_lotto.buy_ticket(picks=[draw, draw])
    single = test_lotto.buy_ticket(picks=[draw])
    test_lotto.draw(draw)
    test_lotto.check_tickets()
    share = test_lotto.award_jackpots()
    assert share == 333_333
    assert double.winnings == 2 * share
    assert single.winnings == share


def test_award_without_winners_pays_nothing(lotto):
    lotto.buy_ticket(picks=[[[10, 20, 30, 40, 50]]])
    lotto.draw([[1, 2, 3, 4, 5]])
    lotto.check_tickets()
    assert lotto.award_jackpots() == 0
    assert lotto.bank.debits == 0


def test_buy_and_draw_rejected_after_draw(lotto):
    lotto.draw()
    with pytest.raises(AlreadyDrawnError):
        lotto.buy_ticket(easy_picks=1)
    with pytest.raises(AlreadyDrawnError):
        lotto.draw()
    assert lotto.tickets == []
    assert lotto.bank.credits == 0


def test_check_and_award_rejected_before_draw(lotto):
    lotto.buy_ticket(easy_picks=2)
    with pytest.raises(NotDrawnError):
        lotto.check_tickets()
    with pytest.raises(NotDrawnError):
        lotto.award_jackpots()
    with pytest.raises(NotDrawnError):
        lotto.match(Pick.of([[1, 2, 3, 4, 5]]))


def test_award_before_all_tickets_checked_is_rejected(lotto):
    first = lotto.buy_ticket(picks=[[[1, 2, 3, 4, 5]]])
    second = lotto.buy_ticket(picks=[[[1, 2, 3, 4, 5]]])
    lotto.draw([[1, 2, 3, 4, 5]])
    first.check()
    with pytest.raises(SequenceError) as exc:
        lotto.award_jackpots()
    assert exc.value.details == {"unchecked": [second.number]}
    assert first.winnings == 0

    second.check()
    assert lotto.award_jackpots() == 500_000


def test_award_runs_once(lotto):
    lotto.buy_ticket(picks=[[[1, 2, 3, 4, 5]]])
    lotto.draw([[1, 2, 3, 4, 5]])
    lotto.check_tickets()
    lotto.award_jackpots()
    with pytest.raises(SequenceError):
        lotto.award_jackpots()
    assert lotto.bank.debits == 1_000_000


def test_invalid_explicit_pick_is_rejected_with_details(test_lotto):
    with pytest.raises(InvalidPickError) as exc:
        test_lotto.buy_ticket(picks=[
            [[1, 2, 3, 4, 5], [1]],
            [[1, 2, 3, 4, 51], [21]],
        ])
    assert set(exc.value.details) == {1}
    assert set(exc.value.details[1]) == {0, 1}
    assert test_lotto.tickets == []
    assert test_lotto.bank.credits == 0
    assert test_lotto.ticket_counter == 0


def test_explicit_picks_may_be_one_shot_iterators(test_lotto):
    ticket = test_lotto.buy_ticket(picks=[(iter([5, 4, 3, 2, 1]), iter([1]))])
    assert ticket.picks == (Pick(((1, 2, 3, 4, 5), (1,))),)

    ticket = test_lotto.buy_ticket(picks=([[1, 2, 3, 4, 5], [n]] for n in (2, 3)))
    assert [p.parts[1] for p in ticket.picks] == [(2,), (3,)]
    assert test_lotto.bank.credits == 3


def test_invalid_iterator_pick_is_rejected(test_lotto):
    with pytest.raises(InvalidPickError):
        test_lotto.buy_ticket(picks=[(iter([1, 2, 3, 4, 99]), iter([1]))])
    assert test_lotto.tickets == []


def test_invalid_injected_draw_is_rejected(lotto):
    with pytest.raises(InvalidPickError):
        lotto.draw([[1, 1, 2, 3, 4]])
    assert lotto.played is False


def test_buy_ticket_needs_exactly_one_kind_of_pick(lotto):
    with pytest.raises(ValueError):
        lotto.buy_ticket()
    with pytest.raises(ValueError):
        lotto.buy_ticket(easy_picks=2, picks=[[[1, 2, 3, 4, 5]]])
    with pytest.raises(ValueError):
        lotto.buy_ticket(easy_picks=-1)
    with pytest.raises(ValueError):
        lotto.buy_ticket(picks=[])


def test_multiplier_requires_configured_option(lotto):
    with pytest.raises(ConfigurationError):
        lotto.buy_ticket(easy_picks=1, multiplier=True)


def test_multiplier_scales_fixed_prizes_but_not_jackpot(test_lotto):
    draw = [[1, 9, 20, 34, 50], [14]]
    boosted = test_lotto.buy_ticket(picks=[[[1, 9, 20, 34, 49], [14]], draw], multiplier=True)
    plain = test_lotto.buy_ticket(picks=[[[1, 9, 20, 34, 49], [14]]])
    assert boosted.cost == 2 * (TEST_LOTTO.cost + TEST_LOTTO.multiplier.cost)

    test_lotto.draw(draw)
    assert test_lotto.multiplier in TEST_LOTTO.multiplier.values
    test_lotto.check_tickets()
    share = test_lotto.award_jackpots()

    assert plain.winnings == 10_000
    assert boosted.winnings == 10_000 * test_lotto.multiplier + share
    assert share == 1_000_000


def test_ledger_conservation_after_play():
    game = Lottery(POWERBALL, SeededRandomSource(77))
    stats = game.play(tickets=500, picks=5, multiplier=True)
    assert stats.tickets == 500
    assert stats.picks == 2_500
    assert stats.credits == 2_500 * (POWERBALL.cost + POWERBALL.multiplier.cost)
    assert stats.balance == stats.start_balance + stats.credits - stats.debits
    assert stats.debits == sum(t.winnings for t in game.tickets)
    assert stats.winnings == stats.debits
    assert sum(o.occurrences for o in stats.outcomes) == stats.picks


def test_seeded_play_is_reproducible():
    a = Lottery(FLORIDA_LOTTO, SeededRandomSource(2024)).play(tickets=200, picks=3)
    b = Lottery(FLORIDA_LOTTO, SeededRandomSource(2024)).play(tickets=200, picks=3)
    c = Lottery(FLORIDA_LOTTO, SeededRandomSource(2025)).play(tickets=200, picks=3)
    assert a == b
    assert a.draw != c.draw


def test_reset_returns_to_open_state(lotto):
    lotto.buy_ticket(picks=[[[1, 2, 3, 4, 5]]])
    lotto.draw([[1, 2, 3, 4, 5]])
    lotto.check_tickets()
    lotto.award_jackpots()

    lotto.reset()
    assert lotto.played is False
    assert lotto.official_draw is None
    assert lotto.tickets == []
    assert lotto.jackpots_awarded is False
    assert lotto.bank.balance == lotto.config.start_jackpot
    assert lotto.bank.credits == lotto.bank.debits == 0
    assert all(o.occurrences == 0 and o.awarded_share is None for o in lotto.outcomes)
    assert lotto.buy_ticket(easy_picks=1).number == 1


def test_stats_before_and_after_draw(lotto):
    before = lotto.stats()
    assert before.played is False
    assert before.draw is None
    assert before.odds == 2_118_760

    lotto.buy_ticket(picks=[[[1, 2, 3, 4, 6]], [[1, 2, 3, 7, 8]]])
    lotto.draw([[1, 2, 3, 4, 5]])
    lotto.check_tickets()
    lotto.award_jackpots()
    after = lotto.stats()
    rows = {o.key: o for o in after.outcomes}
    assert rows[(4,)].occurrences == 1 and rows[(4,)].paid == 100
    assert rows[(3,)].occurrences == 1 and rows[(3,)].paid == 5
    assert rows[(5,)].prize is JACKPOT and rows[(5,)].paid == 0
    assert after.jackpot_winners == 0


def test_winning_tickets_sorted_by_winnings(lotto):
    lotto.buy_ticket(picks=[[[10, 20, 30, 40, 50]]])
    best = lotto.buy_ticket(picks=[[[1, 2, 3, 4, 6]]])
    middle = lotto.buy_ticket(picks=[[[1, 2, 3, 7, 8]]])
    lotto.draw([[1, 2, 3, 4, 5]])
    lotto.check_tickets()
    assert lotto.winning_tickets(2) == [best, middle]


def test_pick_pays_does_not_settle(lotto):
    lotto.draw([[1, 2, 3, 4, 5]])
    assert lotto.pick_pays(Pick.of([[1, 2, 3, 4, 9]])) == ((4,), 100)
    assert lotto.pick_pays(Pick.of([[1, 2, 3, 4, 5]])) == ((5,), 1_000_000)
    assert lotto.bank.debits == 0
    assert lotto.outcomes[(4,)].occurrences == 0


def test_games_are_independent():
    cfg = GameConfig(
        name="Tiny",
        cost=1,
        start_jackpot=10,
        parts=(PartSpec(1, 2),),
        payouts={(1,): JACKPOT, (0,): 0},
    )
    a = Lottery(cfg, SeededRandomSource(1))
    b = Lottery(cfg, SeededRandomSource(1))
    a.buy_ticket(easy_picks=3)
    assert b.tickets == []
    assert b.bank.credits == 0
