"""FastAPI dependency resolving the caller from an ``Authorization: Bearer`` header.

    @router.get("/balance")
    async def get_balance(user: Annotated[UserModel, Depends(get_current_user)]): ...
"""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from src.sp_common.database import get_db_session
from src.sp_common.errors import AccountDisabledError, InvalidCredentialsError
from src.sp_gateway.auth.jwt_handler import decode_access_token
from src.sp_gateway.user.db_models import UserModel

# auto_error=False: a missing header gets the same 401 as a bad token
_bearer = HTTPBearer(auto_error=False)


def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid or expired token",
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_bearer)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> UserModel:
    """401 for a missing/invalid token or an unknown user, 403 for a disabled one."""
    if credentials is None:
        raise _unauthorized()
    try:
        user_id = decode_access_token(credentials.credentials)
    except InvalidCredentialsError:
        raise _unauthorized() from None

    user = await db.get(UserModel, user_id)
    if user is None:
        raise _unauthorized()
    if not user.is_active:
        raise AccountDisabledError()
    return user
