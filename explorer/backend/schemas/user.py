"""
User Schemas.

Profile, password and recently-viewed bodies.
"""

from datetime import datetime

from pydantic import Field

from explorer.backend.schemas.base import CamelModel


class ProfileUpdate(CamelModel):
    """Body for PUT /users/profile."""

    username: str = Field(..., max_length=150)
    email: str = Field(..., max_length=255)
    phone: str | None = Field(default=None, max_length=50)


class ProfileResponse(CamelModel):
    """Profile of the signed-in user, never including the password hash."""

    id: str
    username: str
    email: str
    phone: str | None = None
    created_at: datetime
    updated_at: datetime


class PasswordReset(CamelModel):
    """Body for PUT /users/reset-password. Length is checked by the service."""

    current_password: str
    new_password: str


class RecentlyViewedItem(CamelModel):
    """One recently viewed country with details resolved from the provider."""

    country_code: str
    viewed_at: datetime
    rating: int | None = None
    name: str | None = None
    flag: str | None = None
    region: str | None = None
