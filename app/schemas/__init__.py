"""Pydantic request/response schemas."""

from app.schemas.auth import (
    LoginRequest,
    LoginResponse,
    LoginUser,
    Principal,
    RegisterRequest,
    RegisterResponse,
)
from app.schemas.health import DbCheckResponse, HealthResponse
from app.schemas.property import (
    AdminStatsResponse,
    MessageResponse,
    PropertyCreatedResponse,
    PropertyDetailResponse,
    PropertyInput,
    PropertyListResponse,
    PropertyOut,
)

__all__ = [
    "AdminStatsResponse",
    "DbCheckResponse",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "LoginUser",
    "MessageResponse",
    "Principal",
    "PropertyCreatedResponse",
    "PropertyDetailResponse",
    "PropertyInput",
    "PropertyListResponse",
    "PropertyOut",
    "RegisterRequest",
    "RegisterResponse",
]
