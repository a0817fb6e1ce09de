"""Pydantic schemas for sp_expense API."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from src.sp_common.datetime_utils import ensure_utc
from src.sp_ledger.application.schemas import BalanceResponse


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class ParticipantRef(BaseModel):
    id: int


class CreateExpenseRequest(BaseModel):
    description: str = Field(..., min_length=1, max_length=500)
    amount: float = Field(
        ..., gt=0, allow_inf_nan=False, description="Total paid by the caller"
    )
    created_at: datetime | None = Field(
        None, description="RFC 3339 timestamp; defaults to now"
    )
    users: list[ParticipantRef] = Field(
        ..., min_length=1, description="Other users sharing the expense, excluding self"
    )

    @field_validator("description")
    @classmethod
    def description_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("description must not be empty")
        return v

    @field_validator("created_at")
    @classmethod
    def created_at_utc(cls, v: datetime | None) -> datetime | None:
        return ensure_utc(v) if v is not None else None

    @property
    def user_ids(self) -> list[int]:
        return [u.id for u in self.users]


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class ExpenseCreatedResponse(BaseModel):
    expense_id: int
    balance: BalanceResponse
