"""
Country Service.

Country lookups through the REST Countries gateway. Results are passed
through unchanged except for paging of the full list.
"""

from explorer.backend.clients.rest_countries import Country, RestCountriesClient
from explorer.backend.core.exceptions import ValidationError
from explorer.backend.core.logging import get_logger
from explorer.backend.core.pagination import PagedResult, PageParams, paginate
from explorer.backend.core.utils import normalize_country_code

logger = get_logger(__name__)

SEARCH_FIELDS = frozenset({
    "name",
    "region",
    "language",
    "currency",
    "demonym",
    "capital",
    "subregion",
    "translation",
})


class CountryService:
    """Stateless facade over the country gateway."""

    def __init__(self, client: RestCountriesClient) -> None:
        self.client = client

    async def list_all(self, params: PageParams) -> PagedResult[Country]:
        """Page through all independent countries."""
        countries = await self.client.list_independent()
        result = paginate(countries, params)
        logger.debug(
            "Countries paged",
            extra={"page": params.page, "limit": params.limit, "total": result.total},
        )
        return result

    async def get_by_code(self, code: str) -> Country:
        return await self.client.by_code(normalize_country_code(code))

    async def get_by_codes(self, codes: str) -> list[Country]:
        """Batch lookup from a comma-separated code list."""
        parsed = [normalize_country_code(code) for code in codes.split(",")]
        parsed = [code for code in parsed if code]
        if not parsed:
            raise ValidationError("At least one country code is required")
        return await self.client.by_codes(parsed)

    async def search(self, field: str, value: str) -> list[Country]:
        """
        Look countries up by one attribute.

        Args:
            field: One of name, region, language, currency, demonym,
                capital, subregion, translation
            value: Value to match

        Raises:
            ValueError: If field is not a supported lookup
        """
        if field not in SEARCH_FIELDS:
            raise ValueError(f"Unsupported country lookup: {field}")
        lookup = getattr(self.client, f"by_{field}")
        return await lookup(value)
