"""Users API router: directory of registered users, requires JWT authentication."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.sp_common.database import get_db_session
from src.sp_common.response import ApiResponse, success_response
from src.sp_gateway.auth.dependencies import get_current_user
from src.sp_gateway.user.db_models import UserModel
from src.sp_gateway.user.schemas import UserItem, UsersResponse
from src.sp_gateway.user.service import UserService

router = APIRouter(prefix="/users", tags=["users"])
_service = UserService()


@router.get("", response_model=ApiResponse)
async def list_users(
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    users = await _service.list_users(db)
    data = UsersResponse(users=[UserItem(id=u.id, email=u.email) for u in users])
    return success_response(data.model_dump(), request=request)
