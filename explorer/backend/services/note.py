"""
Note Service.

Free-text notes on countries, one per user and country.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from explorer.backend.core.exceptions import ValidationError
from explorer.backend.core.security import CurrentUser
from explorer.backend.core.utils import normalize_country_code
from explorer.backend.models.review import Review
from explorer.backend.repositories.review import ReviewRepository
from explorer.backend.services.base import BaseService


class NoteService(BaseService):
    """
    Service for country notes.

    Notes are stored on the user's Review row for the country, created on
    the first note and updated in place afterwards.
    """

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = ReviewRepository(session)

    async def upsert_note(self, user: CurrentUser, country_code: str, note: str) -> Review:
        """
        Create or overwrite the user's note for a country.

        Args:
            user: Acting user
            country_code: 2/3-letter country code, case-insensitive
            note: Note text

        Returns:
            The saved review record

        Raises:
            ValidationError: If country_code or note is empty, or the code is not 2 or 3 letters
        """
        self._validate_required(
            {"country_code": country_code, "note": note},
            "Country code and note are required",
        )
        code = normalize_country_code(country_code)
        if len(code) not in (2, 3):
            raise ValidationError("Country code must be 2 or 3 letters")

        review = await self.repo.get_for_country(user.id, code)
        if review is not None:
            review.note = note
            self._log_operation("Updating note", user_id=user.id, country_code=code)
            return await self._execute_db_operation("update_note", self.repo.save(review))

        self._log_operation("Creating note", user_id=user.id, country_code=code)
        return await self._execute_db_operation(
            "create_note",
            self.repo.create(user_id=user.id, country_code=code, note=note),
        )

    async def list_notes(self, user: CurrentUser) -> list[Review]:
        """Return the user's reviews that have a non-empty note."""
        return await self.repo.list_with_notes(user.id)
