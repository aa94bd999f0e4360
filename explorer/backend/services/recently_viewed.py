"""
Recently Viewed Service.

Tracks the last countries a user looked up and renders them enriched with
country details and the user's own rating.
"""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from explorer.backend.clients.rest_countries import Country, RestCountriesClient
from explorer.backend.core.exceptions import ApplicationError, DatabaseError, NotFoundError
from explorer.backend.core.security import CurrentUser
from explorer.backend.core.utils import normalize_country_code, utc_now
from explorer.backend.repositories.review import ReviewRepository
from explorer.backend.repositories.user import UserRepository
from explorer.backend.services import activity
from explorer.backend.services.base import BaseService


class RecentlyViewedService(BaseService):
    """Service for the per-user recently-viewed history."""

    def __init__(self, session: AsyncSession, countries: RestCountriesClient) -> None:
        super().__init__(session)
        self.users = UserRepository(session)
        self.reviews = ReviewRepository(session)
        self.countries = countries

    async def record_view(self, user: CurrentUser, country_code: str) -> list[activity.RecentView]:
        """
        Move a country to the front of the user's history.

        Returns:
            The updated history, newest first, at most 10 entries
        """
        code = normalize_country_code(country_code)
        self._validate_required({"country_code": code}, "Country code is required")

        record = await self.users.get_by_id(user.id)
        record.recently_viewed = activity.record_view(record.recently_viewed, code, utc_now())

        self._log_debug("Recording view", user_id=user.id, country_code=code)
        record = await self._execute_db_operation("record_view", self.users.save(record))
        return list(record.recently_viewed)

    async def record_view_best_effort(self, user: CurrentUser, country_code: str) -> bool:
        """
        Record a view without letting a failure escape.

        Used as a side effect of a country lookup: the lookup already
        succeeded and is answered regardless. On failure the pending
        write is rolled back.

        Returns:
            True if the view was stored
        """
        try:
            await self.record_view(user, country_code)
        except ApplicationError as e:
            # a failed flush leaves the session unusable for the request's commit
            await self.session.rollback()
            self._logger.warning(
                "Failed to record recently viewed country",
                extra={
                    "user_id": user.id,
                    "country_code": country_code,
                    "code": e.code,
                    "error": e.message,
                },
            )
            return False
        return True

    async def list_recently_viewed(self, user: CurrentUser) -> list[dict[str, Any]]:
        """
        Return the history enriched with name, flag, region and rating.

        One batch country lookup and one ratings query cover all entries.
        Codes the provider cannot resolve keep null details; a failed ratings
        query leaves every rating null. Order is the stored order.

        Raises:
            ExternalServiceError: If the country provider fails
        """
        record = await self.users.get_by_id(user.id)
        history = list(record.recently_viewed)
        if not history:
            return []

        codes = [entry["country_code"] for entry in history]
        countries = await self._lookup_countries(codes)
        ratings = await self._lookup_ratings(user, codes)

        return [
            _enrich(entry, _match_country(countries, entry["country_code"]), ratings)
            for entry in history
        ]

    async def _lookup_countries(self, codes: list[str]) -> list[Country]:
        try:
            return await self.countries.by_codes(codes)
        except NotFoundError:
            self._log_debug("No recently viewed codes resolved", codes=codes)
            return []

    async def _lookup_ratings(self, user: CurrentUser, codes: list[str]) -> dict[str, int]:
        try:
            return await self._execute_db_operation(
                "get_ratings",
                self.reviews.get_ratings(user.id, codes),
            )
        except DatabaseError as e:
            self._logger.warning(
                "Ratings lookup failed, returning history without ratings",
                extra={"user_id": user.id, "error": e.message},
            )
            return {}


def _match_country(countries: list[Country], code: str) -> Country | None:
    """Find a country by its 3-letter or 2-letter code."""
    for country in countries:
        if code in (country.get("cca3"), country.get("cca2")):
            return country
    return None


def _enrich(
    entry: activity.RecentView,
    country: Country | None,
    ratings: dict[str, int],
) -> dict[str, Any]:
    country = country or {}
    return {
        "country_code": entry["country_code"],
        "viewed_at": entry["viewed_at"],
        "rating": ratings.get(entry["country_code"]),
        "name": country.get("name", {}).get("common"),
        "flag": country.get("flags", {}).get("png"),
        "region": country.get("region"),
    }
