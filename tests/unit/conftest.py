"""
Unit Test Fixtures.

Fixtures for unit tests - all external dependencies are mocked.
Unit tests should be fast and isolated, never touching real databases.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from explorer.backend.clients.rest_countries import RestCountriesClient
from explorer.backend.core.security import CurrentUser
from explorer.backend.models.user import User


# =============================================================================
# Database Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_db_session() -> AsyncMock:
    """
    Mock database session for unit tests.

    Usage:
        def test_service(mock_db_session: AsyncMock):
            service = FavoriteService(mock_db_session)
    """
    session = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.flush = AsyncMock()
    session.refresh = AsyncMock()
    session.execute = AsyncMock()
    session.add = MagicMock()
    session.get = AsyncMock()
    return session


@pytest.fixture
def mock_db_result() -> MagicMock:
    """
    Mock database query result.

    Usage:
        def test_query(mock_db_session, mock_db_result):
            mock_db_result.scalar_one_or_none.return_value = user
            mock_db_session.execute.return_value = mock_db_result
    """
    result = MagicMock()
    result.scalar_one_or_none = MagicMock(return_value=None)
    result.scalars = MagicMock()
    result.scalars.return_value.all = MagicMock(return_value=[])
    result.all = MagicMock(return_value=[])
    return result


# =============================================================================
# Domain Fixtures
# =============================================================================


@pytest.fixture
def current_user() -> CurrentUser:
    return CurrentUser(id="user-1", username="alice", email="alice@example.com")


@pytest.fixture
def user_record() -> User:
    """Detached User row matching current_user, with empty activity."""
    return User(
        id="user-1",
        username="alice",
        email="alice@example.com",
        hashed_password="hashed",
        favorites=[],
        recently_viewed=[],
    )


@pytest.fixture
def mock_country_client() -> AsyncMock:
    """Country gateway double; every lookup method is an AsyncMock."""
    return AsyncMock(spec=RestCountriesClient)


@pytest.fixture
def mock_logger() -> MagicMock:
    """
    Mock logger for testing logging calls.

    Usage:
        def test_logging(mock_logger):
            service._logger = mock_logger
            mock_logger.warning.assert_called_once()
    """
    logger = MagicMock()
    logger.debug = MagicMock()
    logger.info = MagicMock()
    logger.warning = MagicMock()
    logger.error = MagicMock()
    return logger
