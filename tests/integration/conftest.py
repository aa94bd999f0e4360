"""
Integration Test Fixtures.

Fixtures for integration tests - real database, real app, real auth.
Only the REST Countries provider is replaced with an in-memory double.
"""

from collections.abc import AsyncGenerator
from typing import Any
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from explorer.backend.clients.rest_countries import RestCountriesClient, get_country_client
from explorer.backend.core.database import get_db_session
from explorer.backend.core.exceptions import NotFoundError


# =============================================================================
# Country Provider Double
# =============================================================================


@pytest.fixture
def countries(estonia, finland, japan) -> AsyncMock:
    """
    Country gateway backed by three known countries.

    by_code and by_codes resolve 2 or 3 letter codes; unknown codes behave
    like the real provider (NotFoundError). Other lookups can be configured
    per test through return_value or side_effect.
    """
    known = [estonia, finland, japan]

    def find(code: str) -> dict[str, Any] | None:
        for country in known:
            if code.upper() in (country["cca3"], country["cca2"]):
                return country
        return None

    async def by_code(code: str) -> dict[str, Any]:
        country = find(code)
        if country is None:
            raise NotFoundError("Country not found")
        return country

    async def by_codes(codes: list[str]) -> list[dict[str, Any]]:
        found = [c for c in (find(code) for code in codes) if c is not None]
        if not found:
            raise NotFoundError("No countries found for the given codes")
        return found

    gateway = AsyncMock(spec=RestCountriesClient)
    gateway.by_code.side_effect = by_code
    gateway.by_codes.side_effect = by_codes
    gateway.list_independent.return_value = known
    return gateway


# =============================================================================
# API Client Fixtures
# =============================================================================


@pytest.fixture
async def client(
    db_session: AsyncSession,
    countries: AsyncMock,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client with database and country provider overrides.

    Every request shares the test session, which is rolled back after the test.

    Usage:
        async def test_health_endpoint(client: AsyncClient):
            response = await client.get("/health")
            assert response.status_code == 200
    """
    async def override_get_db_session() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    from explorer.backend.main import create_app

    app = create_app()
    app.dependency_overrides[get_db_session] = override_get_db_session
    app.dependency_overrides[get_country_client] = lambda: countries

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# Authentication Fixtures
# =============================================================================


async def register_user(
    client: AsyncClient,
    username: str = "alice",
    password: str = "secret1",
) -> dict[str, str]:
    """Register through the API and return bearer headers for the new account."""
    response = await client.post(
        "/api/auth/register",
        json={"username": username, "email": f"{username}@example.com", "password": password},
    )
    assert response.status_code == 201, response.text
    token = response.json()["data"]["token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def auth_headers(client: AsyncClient) -> dict[str, str]:
    """
    Bearer headers for a freshly registered user "alice".

    Usage:
        async def test_protected_endpoint(client: AsyncClient, auth_headers: dict):
            response = await client.get("/api/auth/me", headers=auth_headers)
            assert response.status_code == 200
    """
    return await register_user(client)


@pytest.fixture
def register():
    """
    Register additional accounts.

    Usage:
        async def test_two_users(client, register):
            bob = await register(client, "bob")
    """
    return register_user


# =============================================================================
# API Response Assertion Helpers
# =============================================================================


class ApiAssertions:
    """Helper class for API response assertions."""

    @staticmethod
    def assert_success(response: Any, expected_status: int = 200) -> dict[str, Any]:
        """
        Assert API response is successful.

        Returns:
            Response JSON data
        """
        assert response.status_code == expected_status, (
            f"Expected status {expected_status}, got {response.status_code}: "
            f"{response.text}"
        )
        data = response.json()
        assert data.get("success") is True, f"Response not successful: {data}"
        return data

    @staticmethod
    def assert_error(
        response: Any,
        expected_status: int,
        expected_code: str | None = None,
        expected_message: str | None = None,
    ) -> dict[str, Any]:
        """
        Assert API response is an error.

        Returns:
            Response JSON data
        """
        assert response.status_code == expected_status, (
            f"Expected status {expected_status}, got {response.status_code}: "
            f"{response.text}"
        )
        data = response.json()
        assert data.get("success") is False, f"Response should be error: {data}"
        assert data.get("error") is not None, f"Missing error details: {data}"

        if expected_code:
            actual_code = data["error"].get("code")
            assert actual_code == expected_code, (
                f"Expected error code {expected_code}, got {actual_code}"
            )
        if expected_message:
            assert data["error"]["message"] == expected_message

        return data

    @staticmethod
    def assert_validation_error(
        response: Any,
        field: str | None = None,
    ) -> dict[str, Any]:
        """Assert API response is a request validation error (422)."""
        data = ApiAssertions.assert_error(response, 422, "VAL_REQUEST_INVALID")

        if field:
            errors = data["error"].get("details", {}).get("validation_errors", [])
            fields = [e.get("field", "") for e in errors]
            assert any(field in f for f in fields), (
                f"Expected validation error for field '{field}', "
                f"got errors for: {fields}"
            )

        return data


@pytest.fixture
def api() -> ApiAssertions:
    """Provide API assertion helpers."""
    return ApiAssertions()
