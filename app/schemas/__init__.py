"""Pydantic request/response schemas."""

from app.schemas.auth import (
    AuthResponse,
    CurrentUser,
    LoginRequest,
    MeResponse,
    MessageResponse,
    RegisterRequest,
)
from app.schemas.health import HealthResponse
from app.schemas.user import (
    PublicProfile,
    UpdateUserRequest,
    UserProfile,
    UserResponse,
    UsersListResponse,
)

__all__ = [
    "AuthResponse",
    "CurrentUser",
    "HealthResponse",
    "LoginRequest",
    "MeResponse",
    "MessageResponse",
    "PublicProfile",
    "RegisterRequest",
    "UpdateUserRequest",
    "UserProfile",
    "UserResponse",
    "UsersListResponse",
]
