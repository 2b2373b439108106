"""Request/response schemas for auth endpoints and the request principal."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Role = Literal["user", "admin"]


class Principal(BaseModel):
    """Identity derived from a verified token; lives for one request."""

    model_config = ConfigDict(frozen=True)

    id: int
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


class LoginRequest(BaseModel):
    """Credentials for login. `username` may also be the account email."""

    username: str | None = Field(default=None, description="Username or email")
    password: str | None = Field(default=None, description="Password")


class LoginUser(BaseModel):
    """Public view of the authenticated account."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    username: str
    email: str | None = None
    role: Role
    is_admin: bool = Field(alias="isAdmin")


class LoginResponse(BaseModel):
    success: bool = True
    message: str
    user: LoginUser
    token: str = Field(..., description="JWT access token; send as 'Authorization: Bearer <token>'")


class RegisterRequest(BaseModel):
    """Self-service registration. All fields are validated in the auth service."""

    model_config = ConfigDict(populate_by_name=True)

    username: str | None = None
    email: str | None = None
    password: str | None = None
    confirm_password: str | None = Field(default=None, alias="confirmPassword")


class RegisterResponse(BaseModel):
    success: bool = True
    message: str
    id: int
