"""Display helpers for the CLI and API. The engine never calls these."""

from __future__ import annotations

from typing import Sequence

from .rules import JACKPOT, Pick, Prize


def money(amount: int) -> str:
    return f"${amount:,}.00"


def pick_str(pick: Pick) -> str:
    return " | ".join(" ".join(f"{n:02d}" for n in part) for part in pick.parts)


def outcome_label(key: Sequence[int]) -> str:
    return "+".join(str(k) for k in key)


def prize_str(prize: Prize) -> str:
    return "JACKPOT" if prize is JACKPOT else money(prize)
