"""
Auth Service.

Registration, login and token-to-identity resolution.
"""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from explorer.backend.core.exceptions import AuthenticationError, ConflictError, ValidationError
from explorer.backend.core.security import (
    CurrentUser,
    create_access_token,
    decode_token,
    hash_password,
    verify_password,
)
from explorer.backend.models.user import User
from explorer.backend.repositories.user import UserRepository
from explorer.backend.services.base import BaseService


class AuthService(BaseService):
    """Service for account creation and credential checks."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.users = UserRepository(session)

    async def register(self, username: str, email: str, password: str) -> dict[str, Any]:
        """
        Create an account and issue a token for it.

        Returns:
            {"token": str, "user": User}

        Raises:
            ValidationError: If any field is blank
            ConflictError: If the username or email is taken
        """
        self._validate_required(
            {"username": username, "email": email, "password": password},
            "Username, email and password are required",
        )

        existing = await self.users.find_by_username_or_email(username, email)
        if existing is not None:
            raise ConflictError(
                "Username already exists" if existing.username == username
                else "Email already exists"
            )

        self._log_operation("Registering user", username=username)
        user = await self._execute_db_operation(
            "register",
            self.users.create(
                username=username,
                email=email,
                hashed_password=hash_password(password),
            ),
        )
        return {"token": issue_token(user), "user": user}

    async def login(
        self,
        password: str,
        username: str | None = None,
        email: str | None = None,
    ) -> dict[str, Any]:
        """
        Check credentials given either a username or an email.

        Raises:
            ValidationError: Unknown account or wrong password
        """
        user = await self.users.find_by_username_or_email(username, email)
        if user is None or not verify_password(password, user.hashed_password):
            self._logger.warning(
                "Login failed",
                extra={"username": username, "email": email},
            )
            raise ValidationError("Invalid credentials")

        self._log_operation("User logged in", user_id=user.id)
        return {"token": issue_token(user), "user": user}

    async def authenticate(self, token: str) -> CurrentUser:
        """
        Resolve a bearer token to the identity it names.

        Raises:
            AuthenticationError: Invalid token, or the user no longer exists
        """
        payload = decode_token(token)
        user = await self.users.get_by_id_or_none(payload["sub"])
        if user is None:
            raise AuthenticationError("User not found")
        return CurrentUser(id=user.id, username=user.username, email=user.email)


def issue_token(user: User) -> str:
    """Mint an access token whose subject is the user ID."""
    return create_access_token({"sub": user.id})
