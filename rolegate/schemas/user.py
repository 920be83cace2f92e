"""Request/response schemas for user accounts, login, and demo seeding."""

from datetime import datetime

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, Field, field_validator

from rolegate.models.user import EMAIL_MAX_LEN, USERNAME_MAX_LEN, User, UserRole

USERNAME_MIN_LEN = 3
PASSWORD_MIN_LEN = 6


def _check_email_syntax(value: str) -> str:
    """
    Reject syntactically invalid addresses; return the value unchanged.

    Emails are compared case-sensitively, so the normalized form from
    email-validator is deliberately not stored.
    """
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError as e:
        raise ValueError(f"Invalid email address: {e}") from e
    return value


class SafeUser(BaseModel):
    """User as returned to callers: every column except password_hash."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
    role: UserRole
    is_active: bool
    created_at: datetime
    updated_at: datetime


def to_safe_user(user: User) -> SafeUser:
    """Project an ORM user onto SafeUser, dropping password_hash."""
    return SafeUser.model_validate(user)


class CreateUserInput(BaseModel):
    """New account: all fields required."""

    username: str = Field(..., min_length=USERNAME_MIN_LEN, max_length=USERNAME_MAX_LEN)
    email: str = Field(..., max_length=EMAIL_MAX_LEN)
    password: str = Field(..., min_length=PASSWORD_MIN_LEN)
    role: UserRole

    @field_validator("email")
    @classmethod
    def validate_email_syntax(cls, v: str) -> str:
        return _check_email_syntax(v)


class UserUpdate(BaseModel):
    """Partial update body; only the fields that are sent are applied."""

    username: str | None = Field(
        default=None, min_length=USERNAME_MIN_LEN, max_length=USERNAME_MAX_LEN
    )
    email: str | None = Field(default=None, max_length=EMAIL_MAX_LEN)
    password: str | None = Field(default=None, min_length=PASSWORD_MIN_LEN)
    role: UserRole | None = None
    is_active: bool | None = None

    @field_validator("email")
    @classmethod
    def validate_email_syntax(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return _check_email_syntax(v)


class UpdateUserInput(UserUpdate):
    """Partial update addressed to one user id."""

    id: int


class UserFilter(BaseModel):
    """Optional filters for listing users. Present fields are combined with AND."""

    role: UserRole | None = None
    is_active: bool | None = None
    search: str | None = Field(
        default=None,
        description="Case-insensitive substring matched against username or email",
    )


class LoginRequest(BaseModel):
    """
    Credentials for login.

    email is not syntax-checked: lookup is an exact match, so an address no
    account can have simply fails as invalid credentials.
    """

    email: str = Field(..., max_length=EMAIL_MAX_LEN, description="Account email")
    password: str = Field(..., description="Password")


class LoginResponse(BaseModel):
    """Outcome of a login attempt. Failures are reported here, not raised."""

    success: bool
    user: SafeUser | None = None
    message: str


class SeedUser(BaseModel):
    """Demo account specification (plaintext password, reference only)."""

    model_config = ConfigDict(frozen=True)

    username: str
    email: str
    password: str
    role: UserRole
