"""Domain models for sp_ledger — pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Debt:
    user_id: int     # counterparty
    amount: float    # always a magnitude; direction comes from the list it is in


@dataclass
class Balance:
    balance: float = 0.0                              # net: credit total minus debit total
    debit: list[Debt] = field(default_factory=list)   # what the subject owes others
    credit: list[Debt] = field(default_factory=list)  # what others owe the subject

    @property
    def total_debit(self) -> float:
        return sum(d.amount for d in self.debit)

    @property
    def total_credit(self) -> float:
        return sum(d.amount for d in self.credit)
