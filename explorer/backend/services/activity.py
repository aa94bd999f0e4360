"""
Activity Sequence Operations.

Pure functions over the embedded favorites and recently-viewed lists. Each
takes the stored list and returns a new one; the input is never modified.
Services assign the result back onto the user and persist the aggregate.
"""

from datetime import datetime
from typing import Any

from explorer.backend.core.exceptions import ConflictError

RECENTLY_VIEWED_LIMIT = 10

Favorite = dict[str, Any]
RecentView = dict[str, Any]


def add_favorite(favorites: list[Favorite], code: str, name: str | None, flag: str | None) -> list[Favorite]:
    """
    Append a favorite, keeping codes unique.

    Raises:
        ConflictError: If code is already in favorites
    """
    if any(entry.get("code") == code for entry in favorites):
        raise ConflictError("Country already in favorites")
    return [*favorites, {"code": code, "name": name, "flag": flag}]


def remove_favorite(favorites: list[Favorite], code: str) -> list[Favorite]:
    """Drop every entry with the given code. Absent codes are a no-op."""
    return [entry for entry in favorites if entry.get("code") != code]


def record_view(
    recently_viewed: list[RecentView],
    country_code: str,
    viewed_at: datetime,
    limit: int = RECENTLY_VIEWED_LIMIT,
) -> list[RecentView]:
    """
    Move country_code to the front with a fresh timestamp.

    Any older entry for the same code is removed first, then the list is
    cut to the `limit` most recent entries.
    """
    remaining = [
        entry for entry in recently_viewed
        if entry.get("country_code") != country_code
    ]
    latest = {"country_code": country_code, "viewed_at": viewed_at.isoformat()}
    return [latest, *remaining][:limit]
