"""
User Repository.

Data access for user accounts and their embedded activity lists.
"""

from sqlalchemy import or_, select

from explorer.backend.models.user import User
from explorer.backend.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for the User aggregate."""

    model = User

    async def find_by_username_or_email(
        self,
        username: str | None,
        email: str | None,
        exclude_id: str | None = None,
    ) -> User | None:
        """
        Find the first user holding either the username or the email.

        Args:
            username: Username to match (ignored when empty)
            email: Email to match (ignored when empty)
            exclude_id: User ID to leave out, for "someone else has it" checks

        Returns:
            Matching user or None
        """
        conditions = []
        if username:
            conditions.append(User.username == username)
        if email:
            conditions.append(User.email == email)
        if not conditions:
            return None

        query = select(User).where(or_(*conditions))
        if exclude_id is not None:
            query = query.where(User.id != exclude_id)

        result = await self.session.execute(query.limit(1))
        return result.scalar_one_or_none()
