"""Pydantic schemas for registration and login.

Request fields are optional at the schema level: absent fields are reported
by the service as a ValidationError (400) or, for login, the uniform
AuthError (401).
"""

from pydantic import BaseModel, Field

from coursely.core.schemas import CamelModel


class RegisterRequest(BaseModel):
    """User registration request."""

    name: str | None = Field(None, description="Full name")
    email: str | None = Field(None, description="Email address")
    password: str | None = Field(None, description="Password")


class RegisterResponse(CamelModel):
    """Registration result."""

    message: str
    user_id: int


class LoginRequest(BaseModel):
    """User login request."""

    email: str | None = Field(None, description="Email address")
    password: str | None = Field(None, description="Password")


class UserIdentity(BaseModel):
    """Minimal identity returned by login."""

    id: int
    name: str


class LoginResponse(BaseModel):
    """Login result. No token is issued; the client keeps the user id."""

    message: str
    user: UserIdentity
