"""ORM model for user accounts (auth and RBAC)."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String, func, true

from app.models.base import Base

ROLE_STUDENT = "student"
ROLE_ADMIN = "admin"
ROLES = (ROLE_STUDENT, ROLE_ADMIN)
DEFAULT_ROLE = ROLE_STUDENT


class User(Base):
    """
    User account for JWT authentication and role-based access control.

    role: 'student' (default) or 'admin'. username is immutable once created;
    password_hash is never serialized into an API response.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), nullable=False, unique=True, index=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    first_name = Column(String(100), nullable=False, default="")
    last_name = Column(String(100), nullable=False, default="")
    role = Column(String(32), nullable=False, default=DEFAULT_ROLE, server_default=DEFAULT_ROLE)
    is_active = Column(Boolean, nullable=False, default=True, server_default=true())
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
