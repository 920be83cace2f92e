"""Idempotent provisioning of one demo account per role."""

import logging

from sqlalchemy.orm import Session

from rolegate.core.security import hash_password
from rolegate.models import UserRole
from rolegate.models.user import utcnow
from rolegate.schemas.user import SafeUser, SeedUser, to_safe_user
from rolegate.services import user_repository
from rolegate.services.user_repository import ConflictError

logger = logging.getLogger(__name__)

DEMO_USERS: tuple[SeedUser, ...] = (
    SeedUser(
        username="admin_demo",
        email="admin@demo.com",
        password="admin123",
        role=UserRole.ADMIN,
    ),
    SeedUser(
        username="reseller_demo",
        email="reseller@demo.com",
        password="reseller123",
        role=UserRole.RESELLER,
    ),
    SeedUser(
        username="user_demo",
        email="user@demo.com",
        password="user123",
        role=UserRole.USER,
    ),
)


def _ensure_demo_user(session: Session, demo: SeedUser) -> SafeUser:
    """
    Insert the demo user, or return the existing account with the same email.

    An existing account is left untouched even if it differs from the demo entry. A
    conflict that is not on email (e.g. demo username taken by another
    address) propagates.
    """
    now = utcnow()
    try:
        user = user_repository.insert(
            session,
            username=demo.username,
            email=demo.email,
            password_hash=hash_password(demo.password),
            role=demo.role,
            is_active=True,
            created_at=now,
            updated_at=now,
        )
        logger.info("Seeded demo user %s (id=%s)", demo.username, user.id)
        return to_safe_user(user)
    except ConflictError:
        existing = user_repository.find_by_email(session, demo.email)
        if existing is None:
            raise
        logger.info("Demo user %s already present (id=%s)", demo.email, existing.id)
        return to_safe_user(existing)


def seed_demo_users(session: Session) -> list[SafeUser]:
    """Ensure every demo account exists; returns them in DEMO_USERS order."""
    return [_ensure_demo_user(session, demo) for demo in DEMO_USERS]


def get_demo_users() -> list[SeedUser]:
    """Demo credentials for documentation. Never merged with stored users."""
    return list(DEMO_USERS)
