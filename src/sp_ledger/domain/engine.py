"""Balance calculation over an expense history.

Every qualifying expense is split evenly between its participants (owner
included). Each non-owner participant owes the owner one share. Debts between
the same two users are kept as a single signed running total, so alternating
payers net out instead of piling up gross entries.

The computation is a pure function of its arguments: it allocates only local
state and may run concurrently on overlapping snapshots.
"""

import math
from collections import defaultdict
from collections.abc import Iterable

from src.sp_common.errors import InvalidExpenseError
from src.sp_expense.domain.models import Expense
from src.sp_ledger.domain.models import Balance, Debt

# A counterparty total at or below either bound counts as zero. The relative
# bound scales with the gross amount exchanged on the pair.
ZERO_TOLERANCE = 1e-9
RELATIVE_TOLERANCE = 1e-12


class PairLedger:
    """Signed net amount per unordered user pair.

    Stored under (low_id, high_id); a positive value means low owes high.
    """

    def __init__(self) -> None:
        self._totals: dict[tuple[int, int], float] = defaultdict(float)
        self._volume: dict[tuple[int, int], float] = defaultdict(float)

    def record(self, debtor: int, creditor: int, amount: float) -> None:
        if debtor == creditor:
            return
        if debtor < creditor:
            key = (debtor, creditor)
            self._totals[key] += amount
        else:
            key = (creditor, debtor)
            self._totals[key] -= amount
        self._volume[key] += amount

    def owed_by(self, user_id: int, counterparty: int) -> float:
        """Net amount user_id owes counterparty (negative: counterparty owes user_id)."""
        if user_id < counterparty:
            return self._totals.get((user_id, counterparty), 0.0)
        return -self._totals.get((counterparty, user_id), 0.0)

    def is_settled(self, user_id: int, counterparty: int) -> bool:
        """True when the pair nets to zero, up to float residue relative to its volume."""
        key = (min(user_id, counterparty), max(user_id, counterparty))
        volume = self._volume.get(key, 0.0)
        tolerance = max(ZERO_TOLERANCE, RELATIVE_TOLERANCE * volume)
        return abs(self._totals.get(key, 0.0)) <= tolerance

    def counterparties(self, user_id: int) -> dict[int, float]:
        """All net positions of user_id, keyed by counterparty, signed as in owed_by."""
        result: dict[int, float] = {}
        for (low, high), amount in self._totals.items():
            if low == user_id:
                result[high] = amount
            elif high == user_id:
                result[low] = -amount
        return result


def _validate(expense: Expense) -> None:
    if not expense.other_ids:
        raise InvalidExpenseError(expense.id, "no participants besides the owner")
    if not math.isfinite(expense.amount):
        raise InvalidExpenseError(expense.id, f"non-finite amount {expense.amount}")
    if expense.amount <= 0:
        raise InvalidExpenseError(expense.id, f"non-positive amount {expense.amount}")


def compute_balance(expenses: Iterable[Expense], subject: int) -> Balance:
    """Compute the net balance, debit list and credit list of ``subject``."""
    net = 0.0
    ledger = PairLedger()

    for expense in expenses:
        participants = expense.participant_ids
        if subject not in participants:
            continue
        _validate(expense)

        share = expense.amount / len(participants)
        if expense.owner_id == subject:
            net += (len(participants) - 1) * share
        else:
            net -= share

        for user_id in participants:
            if user_id != expense.owner_id:
                ledger.record(user_id, expense.owner_id, share)

    debit: list[Debt] = []
    credit: list[Debt] = []
    for counterparty, owed in sorted(ledger.counterparties(subject).items()):
        if ledger.is_settled(subject, counterparty):
            continue
        if owed > 0:
            debit.append(Debt(user_id=counterparty, amount=owed))
        else:
            credit.append(Debt(user_id=counterparty, amount=-owed))

    return Balance(balance=net, debit=debit, credit=credit)
