"""Password hashing, stored password credentials and JWT creation/verification."""

import hmac
from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt
from pydantic import ValidationError as PydanticValidationError

from app.core.config import settings
from app.schemas.auth import Principal

# Bcrypt cost (rounds); 12 is a good default for security vs speed.
BCRYPT_ROUNDS = 12

# Stored values starting with this prefix are bcrypt hashes ($2a$, $2b$, $2y$).
BCRYPT_PREFIX = "$2"

# Min/max lengths for registration input validation.
USERNAME_MIN_LEN = 3
USERNAME_MAX_LEN = 50
PASSWORD_MIN_LEN = 8
PASSWORD_MAX_LEN = 128


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


class HashedPassword:
    """Stored bcrypt hash."""

    kind = "hashed"

    def __init__(self, value: str) -> None:
        self.value = value

    def verify(self, candidate: str) -> bool:
        return verify_password(candidate, self.value)


class PlaintextPassword:
    """
    Legacy account whose password was stored unhashed.

    Kept only so old rows can still log in; new accounts are always hashed.
    """

    kind = "plaintext"

    def __init__(self, value: str) -> None:
        self.value = value

    def verify(self, candidate: str) -> bool:
        return hmac.compare_digest(candidate.encode("utf-8"), self.value.encode("utf-8"))


def stored_credential(value: str | None) -> HashedPassword | PlaintextPassword:
    """Classify a stored password column value."""
    value = value or ""
    if value.startswith(BCRYPT_PREFIX):
        return HashedPassword(value)
    return PlaintextPassword(value)


def create_access_token(
    subject_id: int,
    role: str,
    secret: str | None = None,
    expires_delta: timedelta | None = None,
) -> str:
    """Create a JWT access token with id, role, iat and exp."""
    now = datetime.now(UTC)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.JWT_EXPIRE_MINUTES)
    payload: dict[str, Any] = {
        "id": subject_id,
        "role": role,
        "iat": now,
        "exp": now + expires_delta,
    }
    if secret is None:
        secret = settings.JWT_SECRET.get_secret_value()
    return jwt.encode(payload, secret, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str, secret: str | None = None) -> Principal | None:
    """
    Decode and validate a JWT and return the principal it carries.

    Returns None on any failure (malformed, bad signature, expired, unexpected
    payload); callers cannot tell which check failed.
    """
    if secret is None:
        secret = settings.JWT_SECRET.get_secret_value()
    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[settings.JWT_ALGORITHM],
            options={"require": ["exp", "iat"]},
        )
    except jwt.PyJWTError:
        return None
    subject_id = payload.get("id")
    if not isinstance(subject_id, int) or isinstance(subject_id, bool):
        return None
    try:
        return Principal(id=subject_id, role=payload.get("role"))
    except PydanticValidationError:
        return None
