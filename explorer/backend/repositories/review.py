"""
Review Repository.

Data access for per-country notes and ratings.
"""

from sqlalchemy import select

from explorer.backend.models.review import Review
from explorer.backend.repositories.base import BaseRepository


class ReviewRepository(BaseRepository[Review]):
    """Repository for Review model."""

    model = Review

    async def get_for_country(self, user_id: str, country_code: str) -> Review | None:
        """Get the user's review for one country, if any."""
        result = await self.session.execute(
            select(Review)
            .where(Review.user_id == user_id)
            .where(Review.country_code == country_code)
        )
        return result.scalar_one_or_none()

    async def list_with_notes(self, user_id: str) -> list[Review]:
        """Get the user's reviews that carry a non-empty note, oldest first."""
        result = await self.session.execute(
            select(Review)
            .where(Review.user_id == user_id)
            .where(Review.note.is_not(None))
            .where(Review.note != "")
            .order_by(Review.created_at.asc())
        )
        return list(result.scalars().all())

    async def get_ratings(self, user_id: str, country_codes: list[str]) -> dict[str, int]:
        """
        Map country code to rating for the given codes.

        Codes without a review or without a rating are absent from the map.
        """
        if not country_codes:
            return {}

        result = await self.session.execute(
            select(Review.country_code, Review.rating)
            .where(Review.user_id == user_id)
            .where(Review.country_code.in_(country_codes))
            .where(Review.rating.is_not(None))
        )
        return {code.upper(): rating for code, rating in result.all()}
