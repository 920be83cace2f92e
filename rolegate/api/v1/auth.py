"""Login endpoint. Failed logins are reported in the body with status 200."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from rolegate.core.database import get_db
from rolegate.schemas.user import LoginRequest, LoginResponse
from rolegate.services.authentication import login as authenticate

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
) -> LoginResponse:
    """
    Check email and password.

    success is false for an unknown email or wrong password (same message),
    for a deactivated account, and for server errors.
    """
    return authenticate(db, body)
