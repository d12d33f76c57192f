"""SQLAlchemy ORM models."""

from app.models.base import Base
from app.models.user import DEFAULT_ROLE, ROLE_ADMIN, ROLE_STUDENT, ROLES, User

__all__ = ["Base", "DEFAULT_ROLE", "ROLE_ADMIN", "ROLE_STUDENT", "ROLES", "User"]
