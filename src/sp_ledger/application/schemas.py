"""Pydantic schemas for the balance endpoint.

Field names are a compatibility contract with existing clients:
{"balance": n, "debit": [{"user_id": i, "amount": n}], "credit": [...]}.
"""

from pydantic import BaseModel

from src.sp_ledger.domain.models import Balance


class DebtItem(BaseModel):
    user_id: int
    amount: float


class BalanceResponse(BaseModel):
    balance: float
    debit: list[DebtItem]
    credit: list[DebtItem]

    @classmethod
    def from_domain(cls, balance: Balance) -> "BalanceResponse":
        return cls(
            balance=balance.balance,
            debit=[DebtItem(user_id=d.user_id, amount=d.amount) for d in balance.debit],
            credit=[DebtItem(user_id=d.user_id, amount=d.amount) for d in balance.credit],
        )
