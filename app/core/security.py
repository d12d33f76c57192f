"""Password hashing and JWT issuance/verification for authentication."""

import math
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from functools import lru_cache
from typing import Any

import bcrypt
import jwt

from app.core.config import get_settings

# Bcrypt cost (rounds); 12 is a good default for security vs speed.
BCRYPT_ROUNDS = 12

# bcrypt only looks at the first 72 bytes of a password.
BCRYPT_MAX_BYTES = 72

# Min/max lengths for username and password validation.
USERNAME_MIN_LEN = 1
USERNAME_MAX_LEN = 255
PASSWORD_MIN_LEN = 1
PASSWORD_MAX_LEN = 128


def _password_bytes(plain_password: str) -> bytes:
    if not isinstance(plain_password, str) or not plain_password:
        raise ValueError("Password must be a non-empty string")
    return plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]


class PasswordHasher:
    """Salted bcrypt hashing with a tunable work factor."""

    def __init__(self, rounds: int = BCRYPT_ROUNDS) -> None:
        self.rounds = rounds
        # Reference digest used to spend the same work when there is nothing real to check.
        self._dummy_hash = bcrypt.hashpw(b"dummy-password", bcrypt.gensalt(rounds=rounds))

    def hash(self, plain_password: str) -> str:
        """Hash a plain-text password for storage. Do not store plain passwords."""
        pw_bytes = _password_bytes(plain_password)
        return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=self.rounds)).decode("utf-8")

    def verify(self, plain_password: str, hashed: str) -> bool:
        """Verify a plain password against a stored hash."""
        try:
            pw_bytes = _password_bytes(plain_password)
        except ValueError:
            self.dummy_verify()
            return False
        if not isinstance(hashed, str):
            self.dummy_verify(plain_password)
            return False
        try:
            return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
        except (ValueError, TypeError):
            # Unknown digest format: burn equivalent time before answering.
            self.dummy_verify(plain_password)
            return False

    def dummy_verify(self, plain_password: str = "") -> None:
        """Spend one verification's worth of work and discard the result."""
        pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
        bcrypt.checkpw(pw_bytes or b"x", self._dummy_hash)


class TokenError(Exception):
    """Base for token verification failures."""


class InvalidSignature(TokenError):
    """Token is malformed, tampered with, or signed with another secret."""


class TokenExpired(TokenError):
    """Token signature is valid but its exp claim has passed."""


@dataclass(frozen=True)
class TokenConfig:
    """Signing material and default lifetime, fixed at process start."""

    secret: str
    algorithm: str = "HS256"
    ttl: timedelta = timedelta(days=7)

    @classmethod
    def from_settings(cls, settings: Any) -> "TokenConfig":
        return cls(
            secret=settings.JWT_SECRET.get_secret_value(),
            algorithm=settings.JWT_ALGORITHM,
            ttl=timedelta(minutes=settings.JWT_EXPIRE_MINUTES),
        )


def _utcnow() -> datetime:
    return datetime.now(UTC)


class TokenService:
    """Issues and verifies signed, time-limited identity tokens (no revocation)."""

    def __init__(
        self, config: TokenConfig, clock: Callable[[], datetime] = _utcnow
    ) -> None:
        if not config.secret:
            raise ValueError("TokenService requires a non-empty secret")
        self.config = config
        self._clock = clock

    def issue(self, account_id: int, ttl: timedelta | None = None) -> str:
        """Create a JWT carrying the account id (sub), iat and exp."""
        now = self._clock()
        expire = now + (ttl if ttl is not None else self.config.ttl)
        payload: dict[str, Any] = {
            "sub": str(account_id),
            # Fractional NumericDates keep the full TTL.
            "iat": now.timestamp(),
            "exp": expire.timestamp(),
        }
        return jwt.encode(payload, self.config.secret, algorithm=self.config.algorithm)

    def verify(self, token: str) -> int:
        """
        Return the account id embedded in a token.

        Signature and structure are checked first (InvalidSignature), then exp
        against this service's clock (TokenExpired).
        """
        try:
            payload = jwt.decode(
                token,
                self.config.secret,
                algorithms=[self.config.algorithm],
                options={
                    "require": ["sub", "iat", "exp"],
                    "verify_exp": False,
                    "verify_iat": False,
                },
            )
        except jwt.PyJWTError as e:
            raise InvalidSignature("Invalid token") from e

        try:
            account_id = int(payload["sub"])
        except (TypeError, ValueError) as e:
            raise InvalidSignature("Invalid token payload") from e
        expires_at = payload["exp"]
        if (
            isinstance(expires_at, bool)
            or not isinstance(expires_at, (int, float))
            or not math.isfinite(expires_at)
        ):
            raise InvalidSignature("Invalid token payload")

        if self._clock().timestamp() >= expires_at:
            raise TokenExpired("Token expired")
        return account_id


@lru_cache
def get_password_hasher() -> PasswordHasher:
    """Process-wide hasher built from settings (FastAPI dependency)."""
    return PasswordHasher(rounds=get_settings().BCRYPT_ROUNDS)


@lru_cache
def get_token_service() -> TokenService:
    """Process-wide token service built from settings (FastAPI dependency)."""
    return TokenService(TokenConfig.from_settings(get_settings()))
