"""
User Model.

A user row is the activity aggregate: identity fields plus the embedded
favorites and recently-viewed arrays, written back as one unit.
"""

from typing import Any

from sqlalchemy import JSON, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from explorer.backend.models.base import Base, TimestampMixin, UUIDMixin


class User(UUIDMixin, TimestampMixin, Base):
    """
    User account and embedded activity.

    favorites:        [{"code", "name", "flag"}], insertion order, unique code
    recently_viewed:  [{"country_code", "viewed_at"}], newest first, max 10

    The JSON columns are only ever replaced with new lists, never mutated in
    place, so the ORM sees every change. version_id turns each flush into a
    compare-and-swap against the version that was read.
    """

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(150), unique=True, nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    favorites: Mapped[list[dict[str, Any]]] = mapped_column(
        JSON,
        default=list,
        nullable=False,
    )
    recently_viewed: Mapped[list[dict[str, Any]]] = mapped_column(
        JSON,
        default=list,
        nullable=False,
    )
    version_id: Mapped[int] = mapped_column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version_id}

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username={self.username!r})>"
