"""Authentication boundary: credential verification, admin gate, login and registration."""

import hmac
import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    ValidationError,
)
from app.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
    create_access_token,
    decode_access_token,
    hash_password,
    stored_credential,
)
from app.models import User
from app.schemas.auth import LoginUser, Principal, RegisterRequest

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)

BOOTSTRAP_ADMIN_ID = 0
INVALID_CREDENTIALS = "Invalid credentials"
AUTH_REQUIRED = "Authentication required"
ADMIN_REQUIRED = "Admin access required"

USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")
EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def verify_credentials(headers: Mapping[str, str]) -> Principal | None:
    """
    Extract `Authorization: Bearer <token>` and return the verified principal.

    Header name and scheme are matched case-insensitively. Returns None when the
    header is absent, malformed, or the token does not verify.
    """
    value = next(
        (v for k, v in headers.items() if k.lower() == "authorization"),
        None,
    )
    if not value:
        return None
    parts = value.strip().split(None, 1)
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    return decode_access_token(parts[1].strip())


@dataclass(frozen=True)
class AdminGateResult:
    """Outcome of the admin gate: either ok with a principal, or a status and message."""

    ok: bool
    principal: Principal | None = None
    status: int | None = None
    message: str | None = None


def check_admin(headers: Mapping[str, str]) -> AdminGateResult:
    """The only authorization policy: the caller must hold a valid token with role 'admin'."""
    principal = verify_credentials(headers)
    if principal is None:
        return AdminGateResult(ok=False, status=401, message=AUTH_REQUIRED)
    if not principal.is_admin:
        return AdminGateResult(ok=False, principal=principal, status=403, message=ADMIN_REQUIRED)
    return AdminGateResult(ok=True, principal=principal)


@dataclass(frozen=True)
class LoginResult:
    message: str
    user: LoginUser
    token: str


def _is_bootstrap_admin(identifier: str, password: str, settings: "Settings") -> bool:
    if not settings.ADMIN_BYPASS_ENABLED:
        return False
    if identifier not in (settings.ADMIN_USERNAME, settings.ADMIN_EMAIL):
        return False
    expected = settings.ADMIN_PASSWORD.get_secret_value()
    return hmac.compare_digest(password.encode("utf-8"), expected.encode("utf-8"))


def authenticate(
    db: Session,
    identifier: str | None,
    password: str | None,
    settings: "Settings",
) -> LoginResult:
    """
    Run the login sequence and issue a token.

    Order: bootstrap admin, account lookup by username or email, password check
    (bcrypt or legacy plaintext), active flag. Unknown account and wrong
    password raise the same AuthenticationError.
    """
    identifier = (identifier or "").strip()
    if not identifier or not password:
        raise ValidationError("Username and password required")

    if _is_bootstrap_admin(identifier, password, settings):
        user = LoginUser(
            id=BOOTSTRAP_ADMIN_ID,
            username=settings.ADMIN_USERNAME,
            email=settings.ADMIN_EMAIL,
            role="admin",
            is_admin=True,
        )
        token = create_access_token(subject_id=BOOTSTRAP_ADMIN_ID, role="admin")
        logger.info("Bootstrap admin login")
        return LoginResult(message="Admin login successful", user=user, token=token)

    account = (
        db.query(User)
        .filter(or_(User.username == identifier, User.email == identifier.lower()))
        .first()
    )
    if account is None:
        raise AuthenticationError(INVALID_CREDENTIALS)

    credential = stored_credential(account.password_hash)
    if not credential.verify(password):
        raise AuthenticationError(INVALID_CREDENTIALS)
    if credential.kind == "plaintext":
        logger.warning("Legacy plaintext password used for user id=%s", account.id)

    if account.is_active is False:
        raise AuthorizationError("Account inactive")

    role = account.role or "user"
    account.last_login = datetime.now(UTC)
    db.commit()

    user = LoginUser(
        id=account.id,
        username=account.username,
        email=account.email,
        role=role,
        is_admin=role == "admin",
    )
    token = create_access_token(subject_id=account.id, role=role)
    logger.info("User login", extra={"user_id": account.id, "role": role})
    return LoginResult(message="Login successful", user=user, token=token)


def _validate_registration(body: RegisterRequest) -> tuple[str, str, str]:
    username = (body.username or "").strip()
    email = (body.email or "").strip().lower()
    password = body.password or ""
    if not username or not email or not password or not body.confirm_password:
        raise ValidationError("Username, email, password and confirmPassword are required")
    if not (USERNAME_MIN_LEN <= len(username) <= USERNAME_MAX_LEN) or not USERNAME_PATTERN.match(
        username
    ):
        raise ValidationError(
            f"Username must be {USERNAME_MIN_LEN}-{USERNAME_MAX_LEN} characters "
            "(letters, digits, '.', '_' or '-')"
        )
    if len(email) > 255 or not EMAIL_PATTERN.match(email):
        raise ValidationError("Invalid email address")
    if not (PASSWORD_MIN_LEN <= len(password) <= PASSWORD_MAX_LEN):
        raise ValidationError(
            f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters"
        )
    if password != body.confirm_password:
        raise ValidationError("Passwords do not match")
    return username, email, password


def register_user(db: Session, body: RegisterRequest, settings: "Settings") -> User:
    """Create a regular ('user' role) account with a bcrypt-hashed password."""
    username, email, password = _validate_registration(body)

    reserved = {settings.ADMIN_USERNAME.lower(), settings.ADMIN_EMAIL.lower()}
    if username.lower() in reserved or email in reserved:
        raise ConflictError("Username or email already registered")

    existing = (
        db.query(User.id)
        .filter(or_(func.lower(User.username) == username.lower(), User.email == email))
        .first()
    )
    if existing is not None:
        raise ConflictError("Username or email already registered")

    user = User(
        username=username,
        email=email,
        password_hash=hash_password(password),
        role="user",
        is_active=True,
        email_verified=False,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ConflictError("Username or email already registered") from e
    db.refresh(user)
    logger.info("User registered", extra={"user_id": user.id})
    return user
