"""User management endpoints: admin listing/deletion, self-or-admin read/update."""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.api.deps import get_current_user, get_directory, require_admin
from app.schemas.auth import CurrentUser, MessageResponse
from app.schemas.user import UpdateUserRequest, UserProfile, UserResponse, UsersListResponse
from app.services import accounts
from app.services.directory import AccountDirectory

router = APIRouter()


@router.get("", response_model=UsersListResponse)
def list_users(
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    directory: Annotated[AccountDirectory, Depends(get_directory)],
) -> UsersListResponse:
    """List all users (admin only)."""
    users = [UserProfile.from_account(u) for u in accounts.list_accounts(directory)]
    return UsersListResponse(count=len(users), users=users)


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: int,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    directory: Annotated[AccountDirectory, Depends(get_directory)],
) -> UserResponse:
    user = accounts.get_account(directory, current_user, user_id)
    return UserResponse(user=UserProfile.from_account(user))


@router.put("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: int,
    body: UpdateUserRequest,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    directory: Annotated[AccountDirectory, Depends(get_directory)],
) -> UserResponse:
    """Update first name, last name and/or email. Username and role are fixed."""
    user = accounts.update_account(directory, current_user, user_id, body)
    return UserResponse(message="User updated successfully", user=UserProfile.from_account(user))


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: int,
    admin: Annotated[CurrentUser, Depends(require_admin)],
    directory: Annotated[AccountDirectory, Depends(get_directory)],
) -> MessageResponse:
    """Delete a user (admin only)."""
    accounts.delete_account(directory, admin, user_id)
    return MessageResponse(message="User deleted successfully")
