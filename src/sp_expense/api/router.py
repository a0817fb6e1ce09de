"""sp_expense REST API: expense submission, requires JWT authentication."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.sp_common.database import get_db_session
from src.sp_common.response import ApiResponse, success_response
from src.sp_expense.application.schemas import CreateExpenseRequest
from src.sp_expense.application.service import ExpenseApplicationService
from src.sp_gateway.auth.dependencies import get_current_user
from src.sp_gateway.user.db_models import UserModel
from src.sp_ledger.application.dependencies import get_balance_cache
from src.sp_ledger.domain.cache import BalanceCache

router = APIRouter(prefix="/expenses", tags=["expenses"])

_service = ExpenseApplicationService()


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ApiResponse)
async def create_expense(
    body: CreateExpenseRequest,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    cache: Annotated[BalanceCache, Depends(get_balance_cache)],
    request: Request,
) -> ApiResponse:
    data = await _service.create_expense(db, cache, current_user.id, body)
    return success_response(data.model_dump(), message="Expense created", request=request)
