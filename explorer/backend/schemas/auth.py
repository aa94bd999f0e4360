"""
Auth Schemas.

Request and response bodies for registration, login and identity.
"""

from pydantic import Field, model_validator

from explorer.backend.schemas.base import CamelModel


class RegisterRequest(CamelModel):
    """Body for POST /auth/register."""

    username: str = Field(..., max_length=150, examples=["alice"])
    email: str = Field(..., max_length=255, examples=["a@x.com"])
    password: str = Field(..., examples=["secret1"])


class LoginRequest(CamelModel):
    """Body for POST /auth/login. Either username or email identifies the account."""

    username: str | None = Field(default=None, examples=["alice"])
    email: str | None = Field(default=None, examples=["a@x.com"])
    password: str

    @model_validator(mode="after")
    def _require_identifier(self) -> "LoginRequest":
        if not (self.username or self.email):
            raise ValueError("username or email is required")
        return self


class UserIdentity(CamelModel):
    """Public identity of an account."""

    id: str
    username: str
    email: str


class TokenResponse(CamelModel):
    """Token issued on register and login."""

    token: str
    user: UserIdentity
