"""Tests for SqlAccountDirectory against an in-memory SQLite database, plus error translation."""

import unittest
from unittest.mock import MagicMock

from sqlalchemy import create_engine
from sqlalchemy.exc import IntegrityError, OperationalError, ProgrammingError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.models import Base, DEFAULT_ROLE, ROLE_ADMIN
from app.services.directory import (
    DuplicateRecordError,
    SqlAccountDirectory,
    StorageError,
    StorageQueryError,
)


def _fields(username: str = "alice", email: str | None = None, **kwargs: object) -> dict:
    fields = {
        "username": username,
        "email": email or f"{username}@x.com",
        "password_hash": "$2b$04$notarealhash",
        "first_name": "A",
        "last_name": "L",
    }
    fields.update(kwargs)
    return fields


class TestSqlAccountDirectory(unittest.TestCase):
    def setUp(self) -> None:
        self.engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        Base.metadata.create_all(self.engine)
        self.session = sessionmaker(bind=self.engine, autoflush=False)()
        self.directory = SqlAccountDirectory(self.session)

    def tearDown(self) -> None:
        self.session.close()
        self.engine.dispose()

    def test_create_assigns_id_defaults_and_timestamp(self) -> None:
        user = self.directory.create(_fields())
        self.assertIsNotNone(user.id)
        self.assertEqual(user.role, DEFAULT_ROLE)
        self.assertTrue(user.is_active)
        self.assertIsNotNone(user.created_at)

    def test_create_keeps_explicit_role(self) -> None:
        user = self.directory.create(_fields(role=ROLE_ADMIN))
        self.assertEqual(user.role, ROLE_ADMIN)

    def test_find_by_identifier_matches_username_or_email(self) -> None:
        created = self.directory.create(_fields())
        self.assertEqual(self.directory.find_by_identifier("alice").id, created.id)
        self.assertEqual(self.directory.find_by_identifier("alice@x.com").id, created.id)
        self.assertIsNone(self.directory.find_by_identifier("nobody"))

    def test_lookups_are_exact_match(self) -> None:
        self.directory.create(_fields())
        self.assertIsNone(self.directory.find_by_identifier("Alice"))
        self.assertFalse(self.directory.username_exists("ALICE"))

    def test_find_by_id_and_find_all(self) -> None:
        a = self.directory.create(_fields("alice"))
        b = self.directory.create(_fields("bob"))
        self.assertEqual(self.directory.find_by_id(b.id).username, "bob")
        self.assertIsNone(self.directory.find_by_id(999))
        self.assertEqual([u.id for u in self.directory.find_all()], [a.id, b.id])

    def test_exists_checks(self) -> None:
        a = self.directory.create(_fields("alice"))
        self.assertTrue(self.directory.username_exists("alice"))
        self.assertFalse(self.directory.username_exists("bob"))
        self.assertTrue(self.directory.email_exists("alice@x.com"))
        self.assertFalse(self.directory.email_exists("alice@x.com", exclude_id=a.id))

    def test_duplicate_username_raises_duplicate_record(self) -> None:
        self.directory.create(_fields("alice"))
        with self.assertRaises(DuplicateRecordError):
            self.directory.create(_fields("alice", email="other@x.com"))
        self.assertEqual(len(self.directory.find_all()), 1)

    def test_duplicate_email_raises_duplicate_record(self) -> None:
        self.directory.create(_fields("alice"))
        with self.assertRaises(DuplicateRecordError):
            self.directory.create(_fields("bob", email="alice@x.com"))

    def test_update_changes_allowed_fields(self) -> None:
        user = self.directory.create(_fields())
        updated = self.directory.update(user.id, {"first_name": "Alicia", "email": "new@x.com"})
        self.assertEqual(updated.first_name, "Alicia")
        self.assertEqual(updated.email, "new@x.com")
        self.assertEqual(updated.username, "alice")

    def test_update_rejects_immutable_fields(self) -> None:
        user = self.directory.create(_fields())
        with self.assertRaises(ValueError):
            self.directory.update(user.id, {"username": "mallory"})
        with self.assertRaises(ValueError):
            self.directory.update(user.id, {"role": ROLE_ADMIN})

    def test_update_missing_returns_none(self) -> None:
        self.assertIsNone(self.directory.update(999, {"first_name": "X"}))

    def test_update_to_taken_email_raises_duplicate_record(self) -> None:
        self.directory.create(_fields("alice"))
        bob = self.directory.create(_fields("bob"))
        with self.assertRaises(DuplicateRecordError):
            self.directory.update(bob.id, {"email": "alice@x.com"})

    def test_delete(self) -> None:
        user = self.directory.create(_fields())
        self.assertTrue(self.directory.delete(user.id))
        self.assertIsNone(self.directory.find_by_id(user.id))
        self.assertFalse(self.directory.delete(user.id))


class TestErrorTranslation(unittest.TestCase):
    """SQLAlchemy failures surface as StorageError subclasses and roll the session back."""

    def _directory_raising(self, exc: Exception) -> tuple[SqlAccountDirectory, MagicMock]:
        session = MagicMock()
        session.query.side_effect = exc
        return SqlAccountDirectory(session), session

    def test_integrity_error(self) -> None:
        directory, session = self._directory_raising(IntegrityError("INSERT", {}, Exception("dup")))
        with self.assertRaises(DuplicateRecordError):
            directory.find_all()
        session.rollback.assert_called_once()

    def test_programming_error(self) -> None:
        directory, _ = self._directory_raising(ProgrammingError("SELECT", {}, Exception("syntax")))
        with self.assertRaises(StorageQueryError):
            directory.find_all()

    def test_operational_error(self) -> None:
        directory, _ = self._directory_raising(OperationalError("SELECT", {}, Exception("down")))
        with self.assertRaises(StorageError) as ctx:
            directory.username_exists("alice")
        self.assertNotIsInstance(ctx.exception, (DuplicateRecordError, StorageQueryError))
        self.assertIsInstance(ctx.exception.cause, OperationalError)


if __name__ == "__main__":
    unittest.main()
