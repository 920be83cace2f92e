"""
Store access for user accounts.

Each function is one atomic interaction with the database (writes commit
immediately). Not-found is reported as None/False; uniqueness violations on
username or email raise ConflictError after the transaction is rolled back.
"""

import logging
from typing import Any

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from rolegate.models import User, UserRole
from rolegate.models.user import utcnow
from rolegate.schemas.user import UserFilter

logger = logging.getLogger(__name__)


class ConflictError(Exception):
    """Raised when an insert or update would duplicate a username or email."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        self.message = message
        self.cause = cause
        super().__init__(message)


def _commit_or_conflict(session: Session, action: str) -> None:
    try:
        session.commit()
    except IntegrityError as e:
        session.rollback()
        logger.warning("User %s rejected by unique constraint: %s", action, e.orig)
        raise ConflictError("A user with this username or email already exists", cause=e) from e


def find_by_email(session: Session, email: str) -> User | None:
    """Exact, case-sensitive email match."""
    return session.query(User).filter(User.email == email).first()


def find_by_id(session: Session, user_id: int) -> User | None:
    return session.query(User).filter(User.id == user_id).first()


def find_by_role(session: Session, role: UserRole) -> list[User]:
    return session.query(User).filter(User.role == role).order_by(User.id).all()


def find_all(session: Session, user_filter: UserFilter | None = None) -> list[User]:
    """Return users matching every present filter field; all users when no filter is given."""
    query = session.query(User)
    if user_filter is not None:
        if user_filter.role is not None:
            query = query.filter(User.role == user_filter.role)
        if user_filter.is_active is not None:
            query = query.filter(User.is_active.is_(user_filter.is_active))
        if user_filter.search:
            # Escape LIKE metacharacters so search is a literal substring match
            safe_search = (
                user_filter.search.replace("\\", "\\\\")
                .replace("%", r"\%")
                .replace("_", r"\_")
            )
            pattern = f"%{safe_search}%"
            query = query.filter(
                or_(
                    User.username.ilike(pattern, escape="\\"),
                    User.email.ilike(pattern, escape="\\"),
                )
            )
    return query.order_by(User.id).all()


def insert(session: Session, **fields: Any) -> User:
    """Insert a new user row and return it with id and timestamps populated."""
    user = User(**fields)
    session.add(user)
    _commit_or_conflict(session, "insert")
    session.refresh(user)
    return user


def update(session: Session, user_id: int, fields: dict[str, Any]) -> User | None:
    """
    Apply only the given fields to the user, always refreshing updated_at.

    Returns None when no user has this id.
    """
    user = find_by_id(session, user_id)
    if user is None:
        return None
    staged = dict(fields)
    staged.setdefault("updated_at", utcnow())
    for key, value in staged.items():
        setattr(user, key, value)
    _commit_or_conflict(session, "update")
    session.refresh(user)
    return user


def delete(session: Session, user_id: int) -> bool:
    """Hard-delete a user. Returns True if a row was removed."""
    deleted_count = (
        session.query(User)
        .filter(User.id == user_id)
        .delete(synchronize_session=False)
    )
    session.commit()
    return deleted_count > 0
