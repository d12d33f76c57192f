"""Account directory: the data-access contract over user records and its SQL adapter."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, Protocol

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError, ProgrammingError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.models import DEFAULT_ROLE, User

logger = logging.getLogger(__name__)

# Fields update() is allowed to touch; username, role and created_at are not among them.
UPDATABLE_FIELDS = frozenset({"email", "first_name", "last_name", "password_hash"})


class StorageError(Exception):
    """Raised when the account store fails (connectivity, constraint, bad query)."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        self.message = message
        self.cause = cause
        super().__init__(message)


class DuplicateRecordError(StorageError):
    """A unique constraint (username or email) rejected the write."""


class StorageQueryError(StorageError):
    """The store rejected the statement itself."""


class AccountDirectory(Protocol):
    """
    Lookup and mutation over account records.

    Not-found is reported as None (or False for delete); every other failure
    raises StorageError.
    """

    def find_by_identifier(self, identifier: str) -> User | None: ...
    def find_by_id(self, account_id: int) -> User | None: ...
    def find_all(self) -> list[User]: ...
    def create(self, fields: dict[str, Any]) -> User: ...
    def update(self, account_id: int, fields: dict[str, Any]) -> User | None: ...
    def delete(self, account_id: int) -> bool: ...
    def username_exists(self, username: str) -> bool: ...
    def email_exists(self, email: str, exclude_id: int | None = None) -> bool: ...


class SqlAccountDirectory:
    """AccountDirectory backed by the `users` table through a SQLAlchemy session."""

    def __init__(self, session: Session) -> None:
        self.session = session

    @contextmanager
    def _translate_errors(self, operation: str) -> Iterator[None]:
        try:
            yield
        except IntegrityError as e:
            self.session.rollback()
            raise DuplicateRecordError(f"{operation}: duplicate value", cause=e) from e
        except ProgrammingError as e:
            self.session.rollback()
            raise StorageQueryError(f"{operation}: query rejected", cause=e) from e
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StorageError(f"{operation}: store unavailable", cause=e) from e

    def find_by_identifier(self, identifier: str) -> User | None:
        with self._translate_errors("find_by_identifier"):
            return (
                self.session.query(User)
                .filter(or_(User.username == identifier, User.email == identifier))
                .order_by(User.id)
                .first()
            )

    def find_by_id(self, account_id: int) -> User | None:
        with self._translate_errors("find_by_id"):
            return self.session.get(User, account_id)

    def find_all(self) -> list[User]:
        with self._translate_errors("find_all"):
            return self.session.query(User).order_by(User.id).all()

    def create(self, fields: dict[str, Any]) -> User:
        user = User(
            username=fields["username"],
            email=fields["email"],
            password_hash=fields["password_hash"],
            first_name=fields.get("first_name") or "",
            last_name=fields.get("last_name") or "",
            role=fields.get("role") or DEFAULT_ROLE,
            is_active=fields.get("is_active", True),
        )
        with self._translate_errors("create"):
            self.session.add(user)
            self.session.commit()
            self.session.refresh(user)
        logger.info("Account created", extra={"account_id": user.id, "role": user.role})
        return user

    def update(self, account_id: int, fields: dict[str, Any]) -> User | None:
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Fields cannot be updated: {', '.join(sorted(unknown))}")
        with self._translate_errors("update"):
            user = self.session.get(User, account_id)
            if user is None:
                return None
            for name, value in fields.items():
                setattr(user, name, value)
            self.session.commit()
            self.session.refresh(user)
        return user

    def delete(self, account_id: int) -> bool:
        with self._translate_errors("delete"):
            user = self.session.get(User, account_id)
            if user is None:
                return False
            self.session.delete(user)
            self.session.commit()
        logger.info("Account deleted", extra={"account_id": account_id})
        return True

    def username_exists(self, username: str) -> bool:
        with self._translate_errors("username_exists"):
            return (
                self.session.query(User.id).filter(User.username == username).first()
                is not None
            )

    def email_exists(self, email: str, exclude_id: int | None = None) -> bool:
        with self._translate_errors("email_exists"):
            query = self.session.query(User.id).filter(User.email == email)
            if exclude_id is not None:
                query = query.filter(User.id != exclude_id)
            return query.first() is not None
