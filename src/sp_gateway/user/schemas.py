"""Pydantic request/response schemas for sp_gateway.

All responses are wrapped in ApiResponse at the router layer.
"""

from pydantic import BaseModel, EmailStr, Field


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)


class LoginRequest(BaseModel):
    # Normalised like RegisterRequest.email so the stored address matches
    email: EmailStr
    password: str


class UserInfo(BaseModel):
    """Minimal user info embedded in responses."""

    user_id: int
    email: str


class RegisterResponse(BaseModel):
    user_id: int
    email: str
    created_at: str


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "Bearer"
    expires_in: int = 1800  # 30 minutes in seconds
    user: UserInfo


class UserItem(BaseModel):
    id: int
    email: str


class UsersResponse(BaseModel):
    users: list[UserItem]
