"""Auth gate dependencies: authenticate the bearer token, then authorize by role."""

from collections.abc import Callable
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.errors import Forbidden, Unauthorized
from app.core.security import TokenError, TokenService, get_token_service
from app.models import ROLE_ADMIN
from app.schemas.auth import CurrentUser
from app.services.directory import AccountDirectory, SqlAccountDirectory

security = HTTPBearer(auto_error=False)


def get_directory(db: Annotated[Session, Depends(get_db)]) -> AccountDirectory:
    """Dependency: account directory bound to this request's DB session."""
    return SqlAccountDirectory(db)


def get_current_user(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
    directory: Annotated[AccountDirectory, Depends(get_directory)],
) -> CurrentUser:
    """Dependency: require valid Bearer JWT and return the current user. Raises 401 if missing or invalid."""
    if credentials is None or not credentials.credentials:
        raise Unauthorized("Not authorized to access this route")
    try:
        account_id = tokens.verify(credentials.credentials)
    except TokenError:
        raise Unauthorized("Invalid or expired token")

    user = directory.find_by_id(account_id)
    if user is None:
        raise Unauthorized("User not found")

    current = CurrentUser(id=user.id, username=user.username, role=user.role)
    request.state.user = current
    return current


def require_roles(*roles: str) -> Callable[..., CurrentUser]:
    """Dependency factory: allow only authenticated users whose role is in `roles`. Raises 403 otherwise."""
    allowed = frozenset(roles)

    def _require(
        current_user: Annotated[CurrentUser, Depends(get_current_user)],
    ) -> CurrentUser:
        if current_user.role not in allowed:
            raise Forbidden(
                f"User role '{current_user.role}' is not authorized to access this route"
            )
        return current_user

    return _require


require_admin = require_roles(ROLE_ADMIN)
