"""Password hashing for user accounts."""

from __future__ import annotations

import bcrypt

DEFAULT_COST = 10
_MAX_PASSWORD_BYTES = 72


def hash_password(password: str) -> str:
    """Return a bcrypt hash of the password.

    Raises ValueError for passwords longer than bcrypt's 72-byte limit.
    """
    raw = password.encode("utf-8")
    if len(raw) > _MAX_PASSWORD_BYTES:
        raise ValueError("password length exceeds 72 bytes")
    return bcrypt.hashpw(raw, bcrypt.gensalt(rounds=DEFAULT_COST)).decode("ascii")


def check_password(password: str, password_hash: str) -> bool:
    """Whether the password matches the stored hash; malformed hashes never match."""
    raw = password.encode("utf-8")[:_MAX_PASSWORD_BYTES]
    try:
        return bcrypt.checkpw(raw, password_hash.encode("utf-8"))
    except ValueError:
        return False