"""Email/password login. Every outcome, including server errors, is a LoginResponse."""

import logging

from sqlalchemy.orm import Session

from rolegate.core.security import verify_password
from rolegate.schemas.user import LoginRequest, LoginResponse, to_safe_user
from rolegate.services import user_repository

logger = logging.getLogger(__name__)

# Unknown email and wrong password share one message so callers cannot tell them apart.
INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"
ACCOUNT_DEACTIVATED_MESSAGE = "Account is deactivated"
LOGIN_SUCCESS_MESSAGE = "Login successful"
SERVER_ERROR_MESSAGE = "Login failed due to server error"


def login(session: Session, credentials: LoginRequest) -> LoginResponse:
    """
    Authenticate by exact email match and password.

    Order of checks: account exists, account is active, password matches.
    Unexpected store or hasher failures are logged and reported as a failed
    login rather than raised.
    """
    try:
        user = user_repository.find_by_email(session, credentials.email)
        if user is None:
            logger.info("Login rejected: unknown email")
            return LoginResponse(success=False, message=INVALID_CREDENTIALS_MESSAGE)

        if not user.is_active:
            logger.info("Login rejected: user id=%s is deactivated", user.id)
            return LoginResponse(success=False, message=ACCOUNT_DEACTIVATED_MESSAGE)

        if not verify_password(credentials.password, user.password_hash):
            logger.info("Login rejected: wrong password for user id=%s", user.id)
            return LoginResponse(success=False, message=INVALID_CREDENTIALS_MESSAGE)

        return LoginResponse(
            success=True,
            user=to_safe_user(user),
            message=LOGIN_SUCCESS_MESSAGE,
        )
    except Exception as e:
        logger.exception("Login failed: %s", e)
        return LoginResponse(success=False, message=SERVER_ERROR_MESSAGE)
