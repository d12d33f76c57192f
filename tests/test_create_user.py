"""CLI tests for app.scripts.create_user (SessionLocal swapped for in-memory SQLite)."""

import unittest
from unittest.mock import patch

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.security import PasswordHasher
from app.models import ROLE_ADMIN, Base
from app.scripts import create_user
from app.services.directory import SqlAccountDirectory


class TestCreateUserScript(unittest.TestCase):
    def setUp(self) -> None:
        self.engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        Base.metadata.create_all(self.engine)
        self.Session = sessionmaker(bind=self.engine, autoflush=False)
        patcher = patch.object(create_user, "SessionLocal", self.Session)
        patcher.start()
        self.addCleanup(patcher.stop)
        hasher_patcher = patch.object(
            create_user, "PasswordHasher", lambda rounds: PasswordHasher(rounds=4)
        )
        hasher_patcher.start()
        self.addCleanup(hasher_patcher.stop)

    def tearDown(self) -> None:
        self.engine.dispose()

    def _lookup(self, username: str):
        db = self.Session()
        try:
            return SqlAccountDirectory(db).find_by_identifier(username)
        finally:
            db.close()

    def test_creates_admin(self) -> None:
        code = create_user.main(["root", "root@x.com", "s3cret-pass", "--role", "admin"])
        self.assertEqual(code, 0)
        user = self._lookup("root")
        self.assertEqual(user.role, ROLE_ADMIN)
        self.assertTrue(PasswordHasher(rounds=4).verify("s3cret-pass", user.password_hash))

    def test_defaults_to_student(self) -> None:
        self.assertEqual(create_user.main(["bob", "bob@x.com", "pw"]), 0)
        self.assertEqual(self._lookup("bob").role, "student")

    def test_refuses_duplicate_username(self) -> None:
        self.assertEqual(create_user.main(["bob", "bob@x.com", "pw"]), 0)
        self.assertEqual(create_user.main(["bob", "other@x.com", "pw"]), 1)

    def test_refuses_duplicate_email(self) -> None:
        self.assertEqual(create_user.main(["bob", "bob@x.com", "pw"]), 0)
        self.assertEqual(create_user.main(["bobby", "bob@x.com", "pw"]), 1)

    def test_rejects_bad_email(self) -> None:
        self.assertEqual(create_user.main(["bob", "not-an-email", "pw"]), 1)
        self.assertIsNone(self._lookup("bob"))


if __name__ == "__main__":
    unittest.main()
