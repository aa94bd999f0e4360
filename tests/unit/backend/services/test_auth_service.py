"""
Unit Tests for Auth Service.

Password hashing and JWT run for real; the repository is patched.
"""

from unittest.mock import AsyncMock, patch

import pytest

from explorer.backend.core.exceptions import AuthenticationError, ConflictError, ValidationError
from explorer.backend.core.security import create_access_token, decode_token, hash_password
from explorer.backend.models.user import User
from explorer.backend.services.auth import AuthService


@pytest.fixture
def service(mock_db_session):
    return AuthService(mock_db_session)


@pytest.fixture
def alice():
    return User(
        id="user-1",
        username="alice",
        email="alice@example.com",
        hashed_password=hash_password("secret1"),
        favorites=[],
        recently_viewed=[],
    )


class TestRegister:
    """Tests for register."""

    @pytest.mark.asyncio
    async def test_creates_user_with_hashed_password(self, service, alice):
        with (
            patch.object(service.users, "find_by_username_or_email", new=AsyncMock(return_value=None)),
            patch.object(service.users, "create", new=AsyncMock(return_value=alice)) as create,
        ):
            result = await service.register("alice", "alice@example.com", "secret1")

        kwargs = create.call_args.kwargs
        assert kwargs["username"] == "alice"
        assert kwargs["hashed_password"] != "secret1"
        assert result["user"] is alice
        assert decode_token(result["token"])["sub"] == "user-1"

    @pytest.mark.asyncio
    async def test_taken_username(self, service, alice):
        with patch.object(service.users, "find_by_username_or_email", new=AsyncMock(return_value=alice)):
            with pytest.raises(ConflictError) as exc_info:
                await service.register("alice", "other@example.com", "secret1")

        assert exc_info.value.message == "Username already exists"

    @pytest.mark.asyncio
    async def test_taken_email(self, service, alice):
        with patch.object(service.users, "find_by_username_or_email", new=AsyncMock(return_value=alice)):
            with pytest.raises(ConflictError) as exc_info:
                await service.register("bob", "alice@example.com", "secret1")

        assert exc_info.value.message == "Email already exists"

    @pytest.mark.asyncio
    async def test_blank_fields_rejected(self, service):
        with pytest.raises(ValidationError) as exc_info:
            await service.register("alice", "", "secret1")

        assert exc_info.value.details == {"missing_fields": ["email"]}


class TestLogin:
    """Tests for login."""

    @pytest.mark.asyncio
    async def test_valid_credentials_return_token(self, service, alice):
        with patch.object(service.users, "find_by_username_or_email", new=AsyncMock(return_value=alice)):
            result = await service.login("secret1", username="alice")

        assert result["user"] is alice
        assert decode_token(result["token"])["sub"] == "user-1"

    @pytest.mark.asyncio
    async def test_wrong_password(self, service, alice):
        with patch.object(service.users, "find_by_username_or_email", new=AsyncMock(return_value=alice)):
            with pytest.raises(ValidationError) as exc_info:
                await service.login("wrong", email="alice@example.com")

        assert exc_info.value.message == "Invalid credentials"

    @pytest.mark.asyncio
    async def test_unknown_user(self, service):
        with patch.object(service.users, "find_by_username_or_email", new=AsyncMock(return_value=None)):
            with pytest.raises(ValidationError) as exc_info:
                await service.login("secret1", username="nobody")

        assert exc_info.value.message == "Invalid credentials"


class TestAuthenticate:
    """Tests for authenticate."""

    @pytest.mark.asyncio
    async def test_resolves_identity(self, service, alice):
        token = create_access_token({"sub": "user-1"})

        with patch.object(service.users, "get_by_id_or_none", new=AsyncMock(return_value=alice)):
            user = await service.authenticate(token)

        assert (user.id, user.username, user.email) == ("user-1", "alice", "alice@example.com")

    @pytest.mark.asyncio
    async def test_deleted_user(self, service):
        token = create_access_token({"sub": "gone"})

        with patch.object(service.users, "get_by_id_or_none", new=AsyncMock(return_value=None)):
            with pytest.raises(AuthenticationError) as exc_info:
                await service.authenticate(token)

        assert exc_info.value.message == "User not found"

    @pytest.mark.asyncio
    async def test_garbage_token(self, service):
        with pytest.raises(AuthenticationError):
            await service.authenticate("not-a-jwt")
