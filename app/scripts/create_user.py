"""
Create an account with any role (e.g. the first admin). Run from project root:
  python -m app.scripts.create_user USERNAME EMAIL PASSWORD [--role admin] [--first-name A] [--last-name B]
Example:
  python -m app.scripts.create_user admin admin@example.com your-secure-password --role admin
"""
import argparse
import logging
import sys

from app.core.config import get_settings
from app.core.database import SessionLocal
from app.core.logging import configure_logging
from app.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    PasswordHasher,
)
from app.models import DEFAULT_ROLE, ROLES
from app.services.directory import SqlAccountDirectory, StorageError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Create an account (registration only makes students).")
    parser.add_argument("username", help=f"Username (1-{USERNAME_MAX_LEN} chars)")
    parser.add_argument("email", help="Email address")
    parser.add_argument("password", help=f"Password ({PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} chars)")
    parser.add_argument("--role", default=DEFAULT_ROLE, choices=list(ROLES))
    parser.add_argument("--first-name", default="")
    parser.add_argument("--last-name", default="")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(get_settings().LOG_LEVEL)

    username = args.username.strip()
    email = args.email.strip()
    if not username or len(username) > USERNAME_MAX_LEN:
        print("Invalid username length.", file=sys.stderr)
        return 1
    if "@" not in email:
        print("Invalid email address.", file=sys.stderr)
        return 1
    if not (PASSWORD_MIN_LEN <= len(args.password) <= PASSWORD_MAX_LEN):
        print(f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters.", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        directory = SqlAccountDirectory(db)
        if directory.username_exists(username):
            print(f"User '{username}' already exists.", file=sys.stderr)
            return 1
        if directory.email_exists(email):
            print(f"Email '{email}' is already in use.", file=sys.stderr)
            return 1
        hasher = PasswordHasher(rounds=get_settings().BCRYPT_ROUNDS)
        directory.create(
            {
                "username": username,
                "email": email,
                "password_hash": hasher.hash(args.password),
                "first_name": args.first_name,
                "last_name": args.last_name,
                "role": args.role,
            }
        )
        print(f"Created user '{username}' with role '{args.role}'.")
        return 0
    except StorageError as e:
        logger.exception("Could not create user: %s", e.message)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
