"""Request/response schemas for auth endpoints."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from app.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
)
from app.schemas.user import PublicProfile, UserProfile


class RegisterRequest(BaseModel):
    """New account details. Registration always yields the default role."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    username: str = Field(
        ..., min_length=USERNAME_MIN_LEN, max_length=USERNAME_MAX_LEN, description="Username"
    )
    email: EmailStr = Field(..., description="Email address")
    password: str = Field(
        ..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN, description="Password"
    )
    first_name: str = Field(default="", max_length=100, alias="firstName")
    last_name: str = Field(default="", max_length=100, alias="lastName")


class LoginRequest(BaseModel):
    """
    Credentials for login. `username` may also be the account email.

    Both fields are optional at the schema level so that a missing one is
    reported with the login-specific message rather than a validation error.
    """

    username: str | None = Field(default=None, max_length=USERNAME_MAX_LEN)
    password: str | None = Field(default=None, max_length=PASSWORD_MAX_LEN)


class CurrentUser(BaseModel):
    """Authenticated identity (id, username, role) attached by the auth gate."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    role: str


class AuthResponse(BaseModel):
    """Token plus public profile returned by register and login."""

    success: bool = True
    message: str
    token: str = Field(..., description="JWT access token; send as Authorization: Bearer <token>")
    user: PublicProfile


class MeResponse(BaseModel):
    success: bool = True
    user: UserProfile


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    success: bool = True
    message: str
