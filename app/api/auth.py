"""Register, login, current user and logout endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from app.api.deps import get_current_user, get_directory
from app.core.security import PasswordHasher, TokenService, get_password_hasher, get_token_service
from app.schemas.auth import (
    AuthResponse,
    CurrentUser,
    LoginRequest,
    MeResponse,
    MessageResponse,
    RegisterRequest,
)
from app.schemas.user import PublicProfile, UserProfile
from app.services import auth as auth_service
from app.services.directory import AccountDirectory

router = APIRouter()


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    directory: Annotated[AccountDirectory, Depends(get_directory)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> AuthResponse:
    """Create a student account and return a token for it."""
    token, user = auth_service.register(directory, hasher, tokens, body)
    return AuthResponse(
        message="User registered successfully",
        token=token,
        user=PublicProfile.from_account(user),
    )


@router.post("/login", response_model=AuthResponse)
def login(
    body: LoginRequest,
    directory: Annotated[AccountDirectory, Depends(get_directory)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> AuthResponse:
    """
    Authenticate with username (or email) and password; returns a JWT access token.
    Include the token in the Authorization header as: Bearer <token>
    """
    token, user = auth_service.login(directory, hasher, tokens, body)
    return AuthResponse(
        message="Login successful",
        token=token,
        user=PublicProfile.from_account(user),
    )


@router.get("/me", response_model=MeResponse)
def me(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    directory: Annotated[AccountDirectory, Depends(get_directory)],
) -> MeResponse:
    user = auth_service.get_me(directory, current_user.id)
    return MeResponse(user=UserProfile.from_account(user))


@router.post("/logout", response_model=MessageResponse)
def logout(
    _user: Annotated[CurrentUser, Depends(get_current_user)],
) -> MessageResponse:
    """Acknowledge logout. The token stays valid until it expires; clients must drop it."""
    return MessageResponse(message=auth_service.logout())
