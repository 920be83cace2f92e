"""Demo account endpoints: seed one account per role and list their credentials."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from rolegate.core.database import get_db
from rolegate.schemas.user import SafeUser, SeedUser
from rolegate.services.demo_seed import get_demo_users, seed_demo_users
from rolegate.services.user_repository import ConflictError

router = APIRouter()


@router.post("/seed", response_model=list[SafeUser])
def post_seed(db: Annotated[Session, Depends(get_db)]) -> list[SafeUser]:
    """Create the demo accounts that are missing; safe to call repeatedly."""
    try:
        return seed_demo_users(db)
    except ConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message) from e


@router.get("", response_model=list[SeedUser])
def list_demo_credentials() -> list[SeedUser]:
    """Demo usernames, emails, plaintext passwords, and roles (for documentation)."""
    return get_demo_users()
