"""
Core Utilities.

Shared helpers used across the backend.
"""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """
    Return current UTC time as timezone-naive datetime.

    All datetimes in the application are naive and assumed to be UTC,
    which keeps comparisons and database storage consistent.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def normalize_country_code(code: str | None) -> str:
    """Strip and upper-case a 2/3-letter country code. None becomes ''."""
    return (code or "").strip().upper()
