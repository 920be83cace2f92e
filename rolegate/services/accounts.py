"""Account lifecycle: create, read, partial update, and delete users."""

import logging
from typing import Any

from sqlalchemy.orm import Session

from rolegate.core.security import hash_password
from rolegate.models import UserRole
from rolegate.models.user import utcnow
from rolegate.schemas.user import (
    CreateUserInput,
    SafeUser,
    UpdateUserInput,
    UserFilter,
    to_safe_user,
)
from rolegate.services import user_repository

logger = logging.getLogger(__name__)


def create_user(session: Session, data: CreateUserInput) -> SafeUser:
    """
    Create an active account with a hashed password.

    Raises ConflictError if the username or email is taken.
    """
    now = utcnow()
    user = user_repository.insert(
        session,
        username=data.username,
        email=data.email,
        password_hash=hash_password(data.password),
        role=data.role,
        is_active=True,
        created_at=now,
        updated_at=now,
    )
    logger.info("Created user id=%s role=%s", user.id, user.role.value)
    return to_safe_user(user)


def get_user_by_id(session: Session, user_id: int) -> SafeUser | None:
    user = user_repository.find_by_id(session, user_id)
    return to_safe_user(user) if user is not None else None


def get_users(session: Session, user_filter: UserFilter | None = None) -> list[SafeUser]:
    return [to_safe_user(u) for u in user_repository.find_all(session, user_filter)]


def get_users_by_role(session: Session, role: UserRole) -> list[SafeUser]:
    """All users with exactly this role, active or not."""
    return [to_safe_user(u) for u in user_repository.find_by_role(session, role)]


def update_user(session: Session, data: UpdateUserInput) -> SafeUser | None:
    """
    Apply the fields present in data to an existing user.

    Returns None, without touching the store, when the user does not exist.
    A new password is hashed before it is stored. Raises ConflictError if the
    new username or email belongs to another user.
    """
    if user_repository.find_by_id(session, data.id) is None:
        return None

    changes = data.model_dump(exclude_unset=True, exclude_none=True, exclude={"id"})
    staged: dict[str, Any] = {}
    for key, value in changes.items():
        if key == "password":
            staged["password_hash"] = hash_password(value)
        else:
            staged[key] = value
    staged["updated_at"] = utcnow()

    user = user_repository.update(session, data.id, staged)
    if user is None:
        # Deleted between lookup and update.
        return None
    logger.info("Updated user id=%s fields=%s", user.id, sorted(changes))
    return to_safe_user(user)


def delete_user(session: Session, user_id: int) -> bool:
    deleted = user_repository.delete(session, user_id)
    if deleted:
        logger.info("Deleted user id=%s", user_id)
    return deleted
