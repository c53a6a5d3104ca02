#!/usr/bin/env python3
from __future__ import annotations
import argparse
# allow running directly without editable install
import sys, pathlib
ROOT = pathlib.Path(__file__).resolve().parents[1]  # project root
sys.path.insert(0, str(ROOT / "src"))
from tqdm import tqdm
from lottosim.errors import LottoError
from lottosim.format import money, outcome_label, pick_str, prize_str
from lottosim.lottery import GameStats, Lottery
from lottosim.picks_csv import load_picks_csv
from lottosim.rules import GAMES, get_game
from lottosim.settings import configure_logging, get_settings


def print_stats(lotto: Lottery, s: GameStats) -> None:
    print(f"\n======== {s.name} ========")
    if s.draw is not None:
        mult = f"  x{s.multiplier}" if s.multiplier else ""
        print(f" DRAW  {pick_str(s.draw)}{mult}")
    print(f"Tickets: {s.tickets:,}   Picks: {s.picks:,}   Odds: 1 in {s.odds:,}")
    print(f"Jackpot: {money(s.jackpot)}   Winners: {s.jackpot_winners}   Share: {money(s.jackpot_share)}")
    print("\n match      prize            hits          paid")
    for o in s.outcomes:
        print(f" {outcome_label(o.key):>5}  {prize_str(o.prize):>14}  {o.occurrences:>10,}  {money(o.paid):>14}")
    print(f"\nSales: {money(s.credits)}   Paid: {money(s.debits)}   Balance: {money(s.balance)}")

    top = [t for t in lotto.winning_tickets(3) if t.winnings]
    if top:
        print("\nTop tickets:")
        for t in top:
            print(f"  #{t.number}: {money(t.winnings)} on {money(t.cost)}")
            for r in t.winning_results():
                print(f"      {pick_str(r.pick)}  ({outcome_label(r.match)})")


def main():
    settings = get_settings()
    ap = argparse.ArgumentParser(description="Simulate a lottery draw over many tickets.")
    ap.add_argument("--game", default=settings.GAME, choices=sorted(GAMES), help="Which game to play")
    ap.add_argument("--tickets", type=int, default=25_000, help="How many easy-pick tickets to buy")
    ap.add_argument("--picks", type=int, default=10, help="Picks per ticket")
    ap.add_argument("--seed", type=int, default=settings.SEED, help="Optional RNG seed for reproducibility")
    ap.add_argument("--multiplier", action="store_true", help="Buy the multiplier option on every ticket")
    ap.add_argument("--picks-file", help="CSV of explicit picks to buy as one extra ticket")
    ap.add_argument("--quiet", action="store_true", help="Hide the progress bar")
    args = ap.parse_args()

    configure_logging(settings.LOG_LEVEL)
    lotto = Lottery(get_game(args.game), settings.source(args.seed))
    print(f"{lotto.name}: {lotto.game_picker.describe()} at {money(lotto.cost)} per pick")

    try:
        if args.picks_file:
            own = load_picks_csv(args.picks_file, lotto.config)
            ticket = lotto.buy_ticket(picks=[p.parts for p in own], multiplier=args.multiplier)
            print(f"Loaded {len(own)} picks from {args.picks_file} as ticket #{ticket.number}")
        for _ in tqdm(range(args.tickets), unit="ticket", disable=args.quiet):
            lotto.buy_ticket(easy_picks=args.picks, multiplier=args.multiplier)
        lotto.draw()
        lotto.check_tickets()
        lotto.award_jackpots()
    except (LottoError, OSError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        sys.exit(2)

    print_stats(lotto, lotto.stats())


if __name__ == "__main__":
    main()
