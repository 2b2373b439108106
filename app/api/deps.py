"""Shared route dependencies: the admin gate."""

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.errors import AuthenticationError, AuthorizationError
from app.schemas.auth import Principal
from app.services.auth import check_admin

# Declares the bearer scheme in OpenAPI; the gate itself reads the raw headers.
security = HTTPBearer(auto_error=False)


def require_admin(
    request: Request,
    _credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> Principal:
    """Dependency: require a valid Bearer JWT with role 'admin'. 401 if missing/invalid, 403 otherwise."""
    result = check_admin(request.headers)
    if not result.ok:
        if result.status == 401:
            raise AuthenticationError(result.message)
        raise AuthorizationError(result.message)
    return result.principal
