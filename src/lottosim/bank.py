from __future__ import annotations
from dataclasses import dataclass


@dataclass
class Bank:
    """Running credits (ticket sales) and debits (payouts) for one game."""

    start_balance: int = 0
    credits: int = 0
    debits: int = 0

    @property
    def balance(self) -> int:
        return self.start_balance + self.credits - self.debits

    def credit(self, amount: int) -> int:
        if amount < 0:
            raise ValueError(f"credit amount must be non-negative, got {amount}")
        self.credits += amount
        return self.balance

    def debit(self, amount: int) -> int:
        if amount < 0:
            raise ValueError(f"debit amount must be non-negative, got {amount}")
        self.debits += amount
        return self.balance
