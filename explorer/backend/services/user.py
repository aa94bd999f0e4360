"""
User Service.

Profile and password management for the signed-in user.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from explorer.backend.core.config import get_app_config
from explorer.backend.core.exceptions import AuthenticationError, ConflictError, ValidationError
from explorer.backend.core.security import CurrentUser, hash_password, verify_password
from explorer.backend.models.user import User
from explorer.backend.repositories.user import UserRepository
from explorer.backend.services.base import BaseService


class UserService(BaseService):
    """Service for account management."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.users = UserRepository(session)

    async def update_profile(
        self,
        user: CurrentUser,
        username: str,
        email: str,
        phone: str | None = None,
    ) -> User:
        """
        Change username, email and optionally phone.

        Raises:
            ValidationError: If username or email is blank
            ConflictError: If another account already uses either value
        """
        self._validate_required(
            {"username": username, "email": email},
            "Username and email are required",
        )

        taken = await self.users.find_by_username_or_email(username, email, exclude_id=user.id)
        if taken is not None:
            raise ConflictError(
                "Username already in use" if taken.username == username
                else "Email already in use"
            )

        record = await self.users.get_by_id(user.id)
        record.username = username
        record.email = email
        if phone is not None:
            record.phone = phone

        self._log_operation("Updating profile", user_id=user.id)
        return await self._execute_db_operation("update_profile", self.users.save(record))

    async def reset_password(
        self,
        user: CurrentUser,
        current_password: str,
        new_password: str,
    ) -> None:
        """
        Replace the password after checking the current one.

        Raises:
            ValidationError: If the new password is shorter than the policy minimum
            AuthenticationError: If current_password does not match
        """
        min_length = get_app_config().security.passwords.min_length
        if len(new_password or "") < min_length:
            raise ValidationError(f"Password must be at least {min_length} characters")

        record = await self.users.get_by_id(user.id)
        if not verify_password(current_password or "", record.hashed_password):
            raise AuthenticationError("Current password is incorrect")

        record.hashed_password = hash_password(new_password)
        self._log_operation("Password changed", user_id=user.id)
        await self._execute_db_operation("reset_password", self.users.save(record))
