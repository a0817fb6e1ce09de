"""SQLAlchemy ORM models for sp_expense.

These map to existing tables created by Alembic migrations.
DO NOT add/remove columns here without a corresponding migration.
"""

from datetime import datetime

from sqlalchemy import DateTime, Double, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.sp_common.database import Base


class ExpenseORM(Base):
    __tablename__ = "expenses"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    amount: Mapped[float] = mapped_column(Double, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    # NOTE: No updated_at: expenses are immutable once created


class ExpenseParticipantORM(Base):
    __tablename__ = "expense_participants"

    # One row per participant, the owner included
    expense_id: Mapped[int] = mapped_column(
        ForeignKey("expenses.id"), primary_key=True
    )
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), primary_key=True)
