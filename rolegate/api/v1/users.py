"""User management endpoints: create, list, fetch, update, delete."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from rolegate.core.database import get_db
from rolegate.models import UserRole
from rolegate.schemas.user import (
    CreateUserInput,
    SafeUser,
    UpdateUserInput,
    UserFilter,
    UserUpdate,
)
from rolegate.services import accounts
from rolegate.services.user_repository import ConflictError

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("", response_model=SafeUser, status_code=status.HTTP_201_CREATED)
def create_user(
    body: CreateUserInput,
    db: Annotated[Session, Depends(get_db)],
) -> SafeUser:
    """Create an active account. Returns 409 if the username or email is already taken."""
    try:
        return accounts.create_user(db, body)
    except ConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message) from e


@router.get("", response_model=list[SafeUser])
def list_users(
    db: Annotated[Session, Depends(get_db)],
    role: Annotated[UserRole | None, Query()] = None,
    is_active: Annotated[bool | None, Query()] = None,
    search: Annotated[str | None, Query(max_length=320)] = None,
) -> list[SafeUser]:
    """
    List users, optionally filtered.

    search matches username or email as a case-insensitive substring;
    all given filters must match.
    """
    user_filter = None
    if role is not None or is_active is not None or search is not None:
        user_filter = UserFilter(role=role, is_active=is_active, search=search)
    return accounts.get_users(db, user_filter)


@router.get("/role/{role}", response_model=list[SafeUser])
def list_users_by_role(
    role: UserRole,
    db: Annotated[Session, Depends(get_db)],
) -> list[SafeUser]:
    """All users with the given role, active or not."""
    return accounts.get_users_by_role(db, role)


@router.get("/{user_id}", response_model=SafeUser | None)
def get_user(
    user_id: int,
    db: Annotated[Session, Depends(get_db)],
) -> SafeUser | None:
    """Fetch one user; the body is null when no user has this id."""
    return accounts.get_user_by_id(db, user_id)


@router.patch("/{user_id}", response_model=SafeUser | None)
def update_user(
    user_id: int,
    body: UserUpdate,
    db: Annotated[Session, Depends(get_db)],
) -> SafeUser | None:
    """
    Apply a partial update. Only the fields present in the body change.

    Returns null when no user has this id, 409 if the new username or email is taken.
    """
    data = UpdateUserInput(id=user_id, **body.model_dump(exclude_unset=True))
    try:
        return accounts.update_user(db, data)
    except ConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message) from e


@router.delete("/{user_id}", response_model=bool)
def delete_user(
    user_id: int,
    db: Annotated[Session, Depends(get_db)],
) -> bool:
    """Permanently delete a user. Returns false when no user has this id."""
    return accounts.delete_user(db, user_id)
