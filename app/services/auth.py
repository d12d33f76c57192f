"""Authentication flows: register, login, current user, logout."""

import logging

from pydantic import validate_email
from pydantic_core import PydanticCustomError

from app.core.errors import BadRequest, Conflict, Forbidden, InvalidCredentials, NotFound
from app.core.security import PasswordHasher, TokenService
from app.models import DEFAULT_ROLE, User
from app.schemas.auth import LoginRequest, RegisterRequest
from app.services.directory import AccountDirectory, DuplicateRecordError

logger = logging.getLogger(__name__)


def _normalized_email(identifier: str) -> str | None:
    """Stored form of an email-like identifier (domain lowercased), or None."""
    if "@" not in identifier:
        return None
    try:
        return validate_email(identifier)[1]
    except PydanticCustomError:
        return None


def register(
    directory: AccountDirectory,
    hasher: PasswordHasher,
    tokens: TokenService,
    data: RegisterRequest,
) -> tuple[str, User]:
    """
    Create a default-role account and issue its first token.

    Username is checked before email, so a request that collides on both is
    reported as a username conflict. The unique indexes still catch a
    concurrent duplicate that slips past these checks.
    """
    if directory.username_exists(data.username):
        raise Conflict("Username already exists")
    if directory.email_exists(data.email):
        raise Conflict("Email already exists")

    try:
        user = directory.create(
            {
                "username": data.username,
                "email": data.email,
                "password_hash": hasher.hash(data.password),
                "first_name": data.first_name,
                "last_name": data.last_name,
                "role": DEFAULT_ROLE,
            }
        )
    except DuplicateRecordError as e:
        raise Conflict("Username or email already exists") from e

    return tokens.issue(user.id), user


def login(
    directory: AccountDirectory,
    hasher: PasswordHasher,
    tokens: TokenService,
    data: LoginRequest,
) -> tuple[str, User]:
    """
    Verify credentials and issue a token.

    Unknown account and wrong password produce the same InvalidCredentials.
    The disabled-account check runs only after the password has matched.
    """
    if not data.username or not data.password:
        raise BadRequest("Please provide username and password")

    user = directory.find_by_identifier(data.username)
    if user is None:
        email = _normalized_email(data.username)
        if email is not None and email != data.username:
            user = directory.find_by_identifier(email)
    if user is None:
        hasher.dummy_verify(data.password)
        raise InvalidCredentials()
    if not hasher.verify(data.password, user.password_hash):
        raise InvalidCredentials()
    if not user.is_active:
        logger.info("Login refused for disabled account", extra={"account_id": user.id})
        raise Forbidden("Account is disabled")

    return tokens.issue(user.id), user


def get_me(directory: AccountDirectory, account_id: int) -> User:
    """Load the caller's own account; the id always comes from the auth gate."""
    user = directory.find_by_id(account_id)
    if user is None:
        raise NotFound("User not found")
    return user


def logout() -> str:
    """Tokens are stateless; the client discards its copy and it expires on its own."""
    return "Logout successful"
