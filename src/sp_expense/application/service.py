"""ExpenseApplicationService — expense submission and the balance write-through.

The expense is committed before the submitter's balance is recomputed, so the
recompute always sees it. Only the submitter's cache entry is refreshed; with
invalidate_participants enabled the other participants' entries are deleted
so their next read recomputes.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.sp_common.datetime_utils import utc_now
from src.sp_common.errors import InvalidParticipantsError, UnknownParticipantError
from src.sp_expense.application.schemas import CreateExpenseRequest, ExpenseCreatedResponse
from src.sp_expense.domain.models import Expense
from src.sp_expense.domain.repository import ExpenseRepositoryProtocol
from src.sp_expense.infrastructure.persistence import ExpenseRepository
from src.sp_ledger.application.schemas import BalanceResponse
from src.sp_ledger.domain.cache import BalanceCache
from src.sp_ledger.domain.engine import compute_balance

logger = logging.getLogger(__name__)


def _check_participants(owner_id: int, user_ids: list[int]) -> None:
    if owner_id in user_ids:
        raise InvalidParticipantsError("user list must not include self")
    if len(set(user_ids)) != len(user_ids):
        raise InvalidParticipantsError("duplicate user in user list")


class ExpenseApplicationService:
    def __init__(
        self,
        repo: ExpenseRepositoryProtocol | None = None,
        invalidate_participants: bool | None = None,
    ) -> None:
        self._repo: ExpenseRepositoryProtocol = repo or ExpenseRepository()
        self._invalidate_participants = (
            settings.BALANCE_INVALIDATE_PARTICIPANTS
            if invalidate_participants is None
            else invalidate_participants
        )

    async def create_expense(
        self,
        db: AsyncSession,
        cache: BalanceCache,
        owner_id: int,
        body: CreateExpenseRequest,
    ) -> ExpenseCreatedResponse:
        other_ids = body.user_ids
        _check_participants(owner_id, other_ids)

        known = await self._repo.existing_user_ids(db, other_ids)
        missing = [u for u in other_ids if u not in known]
        if missing:
            raise UnknownParticipantError(missing)

        expense = Expense(
            owner_id=owner_id,
            other_ids=tuple(other_ids),
            amount=body.amount,
            description=body.description,
            created_at=body.created_at or utc_now(),
        )
        try:
            expense_id = await self._repo.append(db, expense)
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        logger.info(
            "Added expense id=%d owner=%d amount=%.2f users=%s",
            expense_id, owner_id, expense.amount, other_ids,
        )

        # Write-through for the submitter only
        expenses = await self._repo.list_for_user(db, owner_id)
        balance = compute_balance(expenses, owner_id)
        await cache.put(owner_id, balance)
        logger.info("Balance for user %d is %.2f", owner_id, balance.balance)

        if self._invalidate_participants:
            for user_id in other_ids:
                await cache.invalidate(user_id)

        return ExpenseCreatedResponse(
            expense_id=expense_id,
            balance=BalanceResponse.from_domain(balance),
        )
