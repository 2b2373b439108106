"""Application error taxonomy. Each error maps to one HTTP status and a client-safe message."""


class AppError(Exception):
    """Base class for errors rendered as {success: false, message} by the API."""

    status_code = 500

    def __init__(self, message: str, headers: dict[str, str] | None = None) -> None:
        self.message = message
        self.headers = headers
        super().__init__(message)


class ValidationError(AppError):
    """Missing or malformed input."""

    status_code = 400


class AuthenticationError(AppError):
    """Missing, invalid or expired token; or bad login credentials."""

    status_code = 401

    def __init__(self, message: str, headers: dict[str, str] | None = None) -> None:
        super().__init__(message, headers={"WWW-Authenticate": "Bearer", **(headers or {})})


class AuthorizationError(AppError):
    """Authenticated, but not allowed (non-admin role, inactive account)."""

    status_code = 403


class NotFoundError(AppError):
    status_code = 404


class ConflictError(AppError):
    """Duplicate registration (username or email already taken)."""

    status_code = 409


class DependencyError(AppError):
    """Persistence layer unreachable or a query failed. Message stays generic."""

    status_code = 500


class RateLimitError(AppError):
    """Per-IP request ceiling reached; headers carry Retry-After."""

    status_code = 429
