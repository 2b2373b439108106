"""Login and registration endpoints."""

from typing import Annotated

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.orm import Session

from app.core.config import Settings, get_settings
from app.core.database import get_db
from app.schemas.auth import LoginRequest, LoginResponse, RegisterRequest, RegisterResponse
from app.services.auth import authenticate, register_user

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
def login(
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
    body: Annotated[LoginRequest | None, Body()] = None,
) -> LoginResponse:
    """
    Authenticate with username (or email) and password; returns a JWT access token.
    Include the token in the Authorization header as: Bearer <token>
    """
    body = body or LoginRequest()
    result = authenticate(db, body.username, body.password, settings)
    return LoginResponse(message=result.message, user=result.user, token=result.token)


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
    body: Annotated[RegisterRequest | None, Body()] = None,
) -> RegisterResponse:
    """Create a regular user account. Returns the new account id."""
    user = register_user(db, body or RegisterRequest(), settings)
    return RegisterResponse(message="Registration successful", id=user.id)
