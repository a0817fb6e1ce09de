"""ExpenseRepository — concrete implementation of ExpenseRepositoryProtocol.

Writes go through the ORM tables; the per-user history read is one raw SQL
join folded back into Expense objects.

Transaction ownership: The CALLER (application service) is responsible for
committing or rolling back. `append` only issues the INSERTs.
"""

from sqlalchemy import insert, select, text
from sqlalchemy.ext.asyncio import AsyncSession

from src.sp_expense.domain.models import Expense
from src.sp_expense.infrastructure.db_models import ExpenseORM, ExpenseParticipantORM
from src.sp_gateway.user.db_models import UserModel

# One row per (expense, participant) for every expense the user is part of.
_LIST_FOR_USER_SQL = text("""
    SELECT e.id, e.user_id AS owner_id, ep.user_id AS participant_id,
           e.description, e.amount, e.created_at
    FROM expenses e
    JOIN expense_participants ep ON ep.expense_id = e.id
    WHERE e.id IN (
        SELECT expense_id FROM expense_participants WHERE user_id = :user_id
    )
    ORDER BY e.id, ep.user_id
""")


def _rows_to_expenses(rows: list[object]) -> list[Expense]:
    """Fold one-row-per-participant results back into Expense objects."""
    headers: dict[int, object] = {}
    others: dict[int, list[int]] = {}
    for row in rows:
        expense_id: int = row.id  # type: ignore[attr-defined]
        if expense_id not in headers:
            headers[expense_id] = row
            others[expense_id] = []
        if row.participant_id != row.owner_id:  # type: ignore[attr-defined]
            others[expense_id].append(row.participant_id)  # type: ignore[attr-defined]

    return [
        Expense(
            id=expense_id,
            owner_id=head.owner_id,  # type: ignore[attr-defined]
            other_ids=tuple(others[expense_id]),
            amount=float(head.amount),  # type: ignore[attr-defined]
            description=head.description,  # type: ignore[attr-defined]
            created_at=head.created_at,  # type: ignore[attr-defined]
        )
        for expense_id, head in headers.items()
    ]


class ExpenseRepository:
    """Concrete repository; expenses are append-only."""

    async def append(self, db: AsyncSession, expense: Expense) -> int:
        result = await db.execute(
            insert(ExpenseORM)
            .values(
                user_id=expense.owner_id,
                description=expense.description,
                amount=expense.amount,
                created_at=expense.created_at,
            )
            .returning(ExpenseORM.id)
        )
        expense_id: int = result.scalar_one()

        await db.execute(
            insert(ExpenseParticipantORM),
            [
                {"expense_id": expense_id, "user_id": user_id}
                for user_id in expense.participant_ids
            ],
        )
        return expense_id

    async def list_for_user(self, db: AsyncSession, user_id: int) -> list[Expense]:
        result = await db.execute(_LIST_FOR_USER_SQL, {"user_id": user_id})
        return _rows_to_expenses(list(result.fetchall()))

    async def existing_user_ids(
        self, db: AsyncSession, user_ids: list[int]
    ) -> set[int]:
        if not user_ids:
            return set()
        result = await db.execute(select(UserModel.id).where(UserModel.id.in_(user_ids)))
        return set(result.scalars().all())
