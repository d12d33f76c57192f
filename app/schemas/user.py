"""Account profile schemas. None of them carries the password hash."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from app.models import User


class PublicProfile(BaseModel):
    """Profile returned alongside a token (register/login)."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    username: str
    email: str
    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")
    role: str

    @classmethod
    def from_account(cls, user: User) -> "PublicProfile":
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            first_name=user.first_name or "",
            last_name=user.last_name or "",
            role=user.role,
        )


class UserProfile(PublicProfile):
    """Extended profile with account status and creation time."""

    is_active: bool = Field(alias="isActive")
    created_at: datetime | None = Field(default=None, alias="createdAt")

    @classmethod
    def from_account(cls, user: User) -> "UserProfile":
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            first_name=user.first_name or "",
            last_name=user.last_name or "",
            role=user.role,
            is_active=bool(user.is_active),
            created_at=user.created_at,
        )


class UpdateUserRequest(BaseModel):
    """Fields a caller may change; omitted fields keep their current value."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    first_name: str | None = Field(default=None, max_length=100, alias="firstName")
    last_name: str | None = Field(default=None, max_length=100, alias="lastName")
    email: EmailStr | None = None

    def changes(self) -> dict[str, str]:
        """Column-name mapping of the fields actually sent with a value."""
        return {
            name: value
            for name, value in self.model_dump(exclude_unset=True).items()
            if value is not None
        }


class UserResponse(BaseModel):
    success: bool = True
    message: str | None = None
    user: UserProfile


class UsersListResponse(BaseModel):
    """Response for GET /users (admin only)."""

    success: bool = True
    count: int
    users: list[UserProfile]
