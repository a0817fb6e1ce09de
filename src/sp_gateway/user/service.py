"""User domain service: register, login, list.

All DB operations use the injected AsyncSession. Transactions are managed
by the caller (router layer) via `async with db.begin()`.
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.sp_common.errors import (
    AccountDisabledError,
    EmailExistsError,
    InvalidCredentialsError,
)
from src.sp_gateway.auth.jwt_handler import create_access_token
from src.sp_gateway.auth.password import hash_password, verify_password
from src.sp_gateway.user.db_models import UserModel

logger = logging.getLogger(__name__)


class UserService:
    """Stateless service; instantiate once, reuse across requests."""

    async def register(
        self,
        email: str,
        password: str,
        db: AsyncSession,
    ) -> UserModel:
        """Register a new user. The caller must wrap this in `async with db.begin()`."""
        # DB UNIQUE constraint is the final guard
        result = await db.execute(select(UserModel).where(UserModel.email == email))
        if result.scalar_one_or_none() is not None:
            logger.info("Registration rejected, email exists: %s", email)
            raise EmailExistsError()

        user = UserModel(
            email=email,
            password_hash=hash_password(password),
            is_active=True,
        )
        db.add(user)
        await db.flush()  # Get user.id and created_at without committing
        await db.refresh(user)
        logger.info("Added user id=%d email=%s", user.id, email)
        return user

    async def login(
        self,
        email: str,
        password: str,
        db: AsyncSession,
    ) -> tuple[UserModel, str]:
        """Authenticate user and return (user, access_token).

        "User not found" and "Wrong password" both raise InvalidCredentialsError
        so the response does not reveal which emails are registered.
        """
        result = await db.execute(select(UserModel).where(UserModel.email == email))
        user = result.scalar_one_or_none()

        if user is None or not verify_password(password, user.password_hash):
            logger.info("Authentication failed for '%s'", email)
            raise InvalidCredentialsError()

        if not user.is_active:
            raise AccountDisabledError()

        return user, create_access_token(user.id)

    async def list_users(self, db: AsyncSession) -> list[UserModel]:
        """All users, ordered by email."""
        result = await db.execute(select(UserModel).order_by(UserModel.email))
        return list(result.scalars().all())
