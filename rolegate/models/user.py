"""ORM model for user accounts (authentication and roles)."""

import enum
from datetime import UTC, datetime

from sqlalchemy import Boolean, Column, DateTime, Enum, Integer, String, func, true

from rolegate.models.base import Base

USERNAME_MAX_LEN = 50
EMAIL_MAX_LEN = 320


class UserRole(str, enum.Enum):
    """Account role. Returned to clients for UI gating; not enforced server-side."""

    ADMIN = "admin"
    RESELLER = "reseller"
    USER = "user"


def utcnow() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(UTC)


class User(Base):
    """
    User account.

    username and email are each unique; password_hash never leaves the
    repository/hasher boundary (see schemas.user.to_safe_user).
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(USERNAME_MAX_LEN), nullable=False, unique=True, index=True)
    email = Column(String(EMAIL_MAX_LEN), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(
        Enum(
            UserRole,
            name="user_role",
            values_callable=lambda roles: [r.value for r in roles],
        ),
        nullable=False,
        default=UserRole.USER,
    )
    is_active = Column(Boolean, nullable=False, default=True, server_default=true())
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )
