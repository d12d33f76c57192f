"""Account management: list, fetch, update and delete user records."""

import logging

from app.core.errors import BadRequest, Conflict, Forbidden, NotFound
from app.models import ROLE_ADMIN, User
from app.schemas.auth import CurrentUser
from app.schemas.user import UpdateUserRequest
from app.services.directory import AccountDirectory, DuplicateRecordError

logger = logging.getLogger(__name__)


def ensure_self_or_admin(actor: CurrentUser, account_id: int) -> None:
    """Non-admins may only read or change their own account."""
    if actor.role != ROLE_ADMIN and actor.id != account_id:
        raise Forbidden("Not authorized to access this user")


def list_accounts(directory: AccountDirectory) -> list[User]:
    return directory.find_all()


def get_account(directory: AccountDirectory, actor: CurrentUser, account_id: int) -> User:
    ensure_self_or_admin(actor, account_id)
    user = directory.find_by_id(account_id)
    if user is None:
        raise NotFound("User not found")
    return user


def update_account(
    directory: AccountDirectory,
    actor: CurrentUser,
    account_id: int,
    data: UpdateUserRequest,
) -> User:
    """Apply name/email changes; username and role are never touched here."""
    ensure_self_or_admin(actor, account_id)
    current = directory.find_by_id(account_id)
    if current is None:
        raise NotFound("User not found")

    changes = data.changes()
    if not changes:
        return current
    if "email" in changes and changes["email"] != current.email:
        if directory.email_exists(changes["email"], exclude_id=account_id):
            raise Conflict("Email already exists")

    try:
        user = directory.update(account_id, changes)
    except DuplicateRecordError as e:
        raise Conflict("Email already exists") from e
    if user is None:
        raise NotFound("User not found")
    logger.info(
        "Account updated",
        extra={"account_id": account_id, "actor_id": actor.id, "fields": sorted(changes)},
    )
    return user


def delete_account(directory: AccountDirectory, actor: CurrentUser, account_id: int) -> None:
    if actor.id == account_id:
        raise BadRequest("You cannot delete your own account")
    if not directory.delete(account_id):
        raise NotFound("User not found")
    logger.info("Account removed by admin", extra={"account_id": account_id, "actor_id": actor.id})
