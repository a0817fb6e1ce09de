"""Auth API router: register and log in.

Login hands out a single access token; there is no refresh flow, a client
whose token expired logs in again.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.sp_common.database import get_db_session
from src.sp_common.response import ApiResponse, success_response
from src.sp_gateway.user.schemas import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
    UserInfo,
)
from src.sp_gateway.user.service import UserService

router = APIRouter(prefix="/auth", tags=["auth"])
_service = UserService()


@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=ApiResponse)
async def register(
    body: RegisterRequest,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    async with db.begin():
        user = await _service.register(body.email, body.password, db)

    data = RegisterResponse(
        user_id=user.id,
        email=user.email,
        created_at=user.created_at.isoformat(),
    )
    return success_response(data.model_dump(), message="User registered", request=request)


@router.post("/login", response_model=ApiResponse)
async def login(
    body: LoginRequest,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    user, access_token = await _service.login(body.email, body.password, db)

    data = LoginResponse(
        access_token=access_token,
        expires_in=settings.JWT_EXPIRE_MINUTES * 60,
        user=UserInfo(user_id=user.id, email=user.email),
    )
    return success_response(data.model_dump(), message="Login successful", request=request)
