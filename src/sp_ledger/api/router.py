"""sp_ledger REST API — the balance query, served from the balance cache."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.sp_common.database import get_db_session
from src.sp_gateway.auth.dependencies import get_current_user
from src.sp_gateway.user.db_models import UserModel
from src.sp_ledger.application.dependencies import get_balance_cache
from src.sp_ledger.application.schemas import BalanceResponse
from src.sp_ledger.domain.cache import BalanceCache

logger = logging.getLogger(__name__)

router = APIRouter(tags=["balance"])


@router.get("/balance", response_model=BalanceResponse)
async def get_balance(
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    cache: Annotated[BalanceCache, Depends(get_balance_cache)],
) -> BalanceResponse:
    # Returned unwrapped: clients expect the bare balance object
    balance = await cache.get(db, current_user.id)
    logger.info("Balance for user %d is %.2f", current_user.id, balance.balance)
    return BalanceResponse.from_domain(balance)
