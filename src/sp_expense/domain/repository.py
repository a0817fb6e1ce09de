"""Repository Protocol — dependency inversion for testability.

Unit tests inject a mock that conforms to this Protocol.
Infrastructure layer provides the real implementation.
"""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.sp_expense.domain.models import Expense


class ExpenseRepositoryProtocol(Protocol):
    async def append(self, db: AsyncSession, expense: Expense) -> int:
        """Record the expense and its full participant set; return the new id.

        Runs inside the caller's transaction: the expense is visible to other
        readers once the caller commits.
        """
        ...

    async def list_for_user(self, db: AsyncSession, user_id: int) -> list[Expense]:
        """Every expense user_id takes part in (as owner or other), by id."""
        ...

    async def existing_user_ids(
        self, db: AsyncSession, user_ids: list[int]
    ) -> set[int]: ...
