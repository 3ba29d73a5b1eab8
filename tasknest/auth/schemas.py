"""
TASKNEST API - Authentication Schemas

Pydantic models for authentication requests and responses.
"""

from pydantic import BaseModel, EmailStr, Field

from tasknest.users.schemas import UserCreateRequest, UserResponse


class UserRegisterRequest(UserCreateRequest):
    """Request schema for user registration."""


class UserLoginRequest(BaseModel):
    """Request schema for user login."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class AuthResponse(BaseModel):
    """Response schema for successful registration or login."""

    user: UserResponse
    token: str
