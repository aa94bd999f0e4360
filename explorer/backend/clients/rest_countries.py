"""
REST Countries Client.

Async HTTP client for the public REST Countries API (v3.1). Each call is a
single attempt with the configured timeout. Upstream failures are mapped to
NotFoundError (404 or empty result) or ExternalServiceError (anything else).

Usage:
    client = get_country_client()
    countries = await client.by_region("europe")
"""

from functools import lru_cache
from typing import Any
from urllib.parse import quote

import httpx

from explorer.backend.core.config import get_app_config
from explorer.backend.core.exceptions import ExternalServiceError, NotFoundError
from explorer.backend.core.logging import get_logger

logger = get_logger(__name__)

Country = dict[str, Any]


def _segment(value: str) -> str:
    """Percent-encode a caller value for use as a single path segment."""
    return quote(value, safe="")


class RestCountriesClient:
    """Thin async wrapper over the REST Countries endpoints."""

    def __init__(self, base_url: str, timeout: float) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout)
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
        self._client = None

    async def _fetch(
        self,
        path: str,
        not_found: str,
        failure: str,
        params: dict[str, str] | None = None,
    ) -> list[Country]:
        """
        GET a list of countries.

        Args:
            path: Path under the base URL
            not_found: Message for a 404 or an empty result
            failure: Message for any other failure

        Raises:
            NotFoundError: Upstream answered 404 or returned no countries
            ExternalServiceError: Transport error or non-404 error status
        """
        client = await self._get_client()
        try:
            response = await client.get(path, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.warning(
                "Country provider returned error status",
                extra={"path": path, "status": status},
            )
            if status == 404:
                raise NotFoundError(not_found) from e
            raise ExternalServiceError(failure, upstream_error=str(e)) from e
        except httpx.HTTPError as e:
            logger.error(
                "Country provider request failed",
                extra={"path": path, "error": str(e), "error_type": type(e).__name__},
            )
            raise ExternalServiceError(failure, upstream_error=str(e) or type(e).__name__) from e

        data = response.json()
        if isinstance(data, dict):
            data = [data]
        if not data:
            raise NotFoundError(not_found)
        return data

    async def list_independent(self) -> list[Country]:
        return await self._fetch(
            "/independent",
            not_found="No countries found",
            failure="Error fetching all countries",
            params={"status": "true"},
        )

    async def by_name(self, name: str) -> list[Country]:
        return await self._fetch(
            f"/name/{_segment(name)}",
            not_found=f'Country "{name}" not found',
            failure=f'Error fetching country "{name}"',
        )

    async def by_region(self, region: str) -> list[Country]:
        return await self._fetch(
            f"/region/{_segment(region)}",
            not_found=f'Region "{region}" not found',
            failure=f'Error fetching countries from region "{region}"',
        )

    async def by_language(self, language: str) -> list[Country]:
        return await self._fetch(
            f"/lang/{_segment(language)}",
            not_found=f'Language "{language}" not found',
            failure=f'Error fetching countries speaking "{language}"',
        )

    async def by_code(self, code: str) -> Country:
        """Return the single country for a 2/3-letter code."""
        countries = await self._fetch(
            f"/alpha/{_segment(code)}",
            not_found="Country not found",
            failure=f'Error fetching country "{code}"',
        )
        return countries[0]

    async def by_codes(self, codes: list[str]) -> list[Country]:
        """Batch lookup, one upstream call for all codes."""
        return await self._fetch(
            "/alpha",
            not_found="No countries found for the given codes",
            failure="Error fetching countries by codes",
            params={"codes": ",".join(codes)},
        )

    async def by_currency(self, currency: str) -> list[Country]:
        return await self._fetch(
            f"/currency/{_segment(currency)}",
            not_found="Currency not found",
            failure=f'Error fetching countries using currency "{currency}"',
        )

    async def by_demonym(self, demonym: str) -> list[Country]:
        return await self._fetch(
            f"/demonym/{_segment(demonym)}",
            not_found="Demonym not found",
            failure=f'Error fetching countries by demonym "{demonym}"',
        )

    async def by_capital(self, capital: str) -> list[Country]:
        return await self._fetch(
            f"/capital/{_segment(capital)}",
            not_found="Capital not found",
            failure=f'Error fetching countries by capital "{capital}"',
        )

    async def by_subregion(self, subregion: str) -> list[Country]:
        return await self._fetch(
            f"/subregion/{_segment(subregion)}",
            not_found=f'Subregion "{subregion}" not found',
            failure="Error fetching by subregion",
        )

    async def by_translation(self, translation: str) -> list[Country]:
        return await self._fetch(
            f"/translation/{_segment(translation)}",
            not_found=f'No country with translation "{translation}"',
            failure="Error fetching by translation",
        )


@lru_cache
def get_country_client() -> RestCountriesClient:
    """Shared client built from countries.yaml. Also a FastAPI dependency."""
    config = get_app_config().countries
    return RestCountriesClient(base_url=config.base_url, timeout=config.timeout_seconds)
