"""
Favorite Service.

Manages a user's ordered list of favorite countries.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from explorer.backend.core.security import CurrentUser
from explorer.backend.repositories.user import UserRepository
from explorer.backend.services import activity
from explorer.backend.services.base import BaseService


class FavoriteService(BaseService):
    """
    Service for favorites.

    Every mutation reads the user, computes a new list, and writes the whole
    aggregate back. The version check on the user row rejects a write that
    raced with another one.
    """

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.users = UserRepository(session)

    async def list_favorites(self, user: CurrentUser) -> list[activity.Favorite]:
        """Return favorites in insertion order."""
        record = await self.users.get_by_id(user.id)
        return list(record.favorites)

    async def add_favorite(
        self,
        user: CurrentUser,
        code: str,
        name: str | None = None,
        flag: str | None = None,
    ) -> list[activity.Favorite]:
        """
        Append a country to the user's favorites.

        Returns:
            The full updated list

        Raises:
            ValidationError: If code is blank
            ConflictError: If code is already a favorite
        """
        self._validate_required({"code": code}, "Country code is required")
        code = code.strip()

        record = await self.users.get_by_id(user.id)
        record.favorites = activity.add_favorite(record.favorites, code, name, flag)

        self._log_operation("Adding favorite", user_id=user.id, code=code)
        record = await self._execute_db_operation("add_favorite", self.users.save(record))
        return list(record.favorites)

    async def remove_favorite(self, user: CurrentUser, code: str) -> list[activity.Favorite]:
        """
        Remove a country from favorites. Removing an absent code succeeds.

        Returns:
            The full updated list
        """
        code = code.strip()
        record = await self.users.get_by_id(user.id)
        updated = activity.remove_favorite(record.favorites, code)

        if len(updated) == len(record.favorites):
            self._log_debug("Favorite not present, nothing to remove", code=code)
            return updated

        record.favorites = updated
        self._log_operation("Removing favorite", user_id=user.id, code=code)
        record = await self._execute_db_operation("remove_favorite", self.users.save(record))
        return list(record.favorites)
