"""Pydantic request/response schemas."""

from rolegate.schemas.health import HealthResponse
from rolegate.schemas.user import (
    CreateUserInput,
    LoginRequest,
    LoginResponse,
    SafeUser,
    SeedUser,
    UpdateUserInput,
    UserFilter,
    UserUpdate,
    to_safe_user,
)

__all__ = [
    "CreateUserInput",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "SafeUser",
    "SeedUser",
    "UpdateUserInput",
    "UserFilter",
    "UserUpdate",
    "to_safe_user",
]
