"""
Favorite Schemas.
"""

from pydantic import Field

from explorer.backend.schemas.base import CamelModel


class FavoriteCreate(CamelModel):
    """Body for POST /favorites."""

    code: str = Field(..., max_length=3, examples=["EE"])
    name: str | None = Field(default=None, examples=["Estonia"])
    flag: str | None = Field(default=None, examples=["https://flagcdn.com/w320/ee.png"])


class FavoriteItem(CamelModel):
    """A stored favorite."""

    code: str
    name: str | None = None
    flag: str | None = None
