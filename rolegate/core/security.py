"""Password hashing and verification (bcrypt)."""

import bcrypt

from rolegate.core.config import get_settings

# bcrypt only looks at the first 72 bytes of the password.
BCRYPT_MAX_BYTES = 72


def _to_bcrypt_bytes(plain_password: str) -> bytes:
    return plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage with a fresh salt. Do not store plain passwords."""
    rounds = get_settings().BCRYPT_ROUNDS
    return bcrypt.hashpw(
        _to_bcrypt_bytes(plain_password), bcrypt.gensalt(rounds=rounds)
    ).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """
    Verify a plain password against a stored hash.

    Returns False for a mismatch, an empty password, or an empty/malformed hash; never raises.
    """
    if not plain_password or not hashed:
        return False
    try:
        return bcrypt.checkpw(_to_bcrypt_bytes(plain_password), hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False
