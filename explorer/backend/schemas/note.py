"""
Note Schemas.

Bodies for country notes. Blank values reach the service, which rejects
them with a 400 before touching storage.
"""

from datetime import datetime

from explorer.backend.schemas.base import CamelModel


class NoteUpsert(CamelModel):
    """Body for POST /users/note."""

    country_code: str = ""
    note: str = ""


class NoteResponse(CamelModel):
    """Full review record returned after saving a note."""

    id: str
    country_code: str
    note: str | None = None
    rating: int | None = None
    review: str | None = None
    created_at: datetime
    updated_at: datetime


class NoteListItem(CamelModel):
    """Projection used when listing notes."""

    country_code: str
    note: str
    created_at: datetime
