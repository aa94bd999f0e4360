"""
Country API Endpoints.

Lookups proxied to REST Countries. Every route requires authentication;
a successful lookup by code is also recorded in the caller's history.
"""

from typing import Any

from fastapi import APIRouter, Depends, Query

from explorer.backend.clients.rest_countries import Country
from explorer.backend.core.config import get_app_config
from explorer.backend.core.dependencies import AuthUser, CountryClient, DbSession, RequestId
from explorer.backend.core.pagination import PageParams, create_paginated_response, get_page_params
from explorer.backend.schemas.base import ApiResponse, PaginatedResponse, ResponseMetadata
from explorer.backend.services.country import CountryService
from explorer.backend.services.recently_viewed import RecentlyViewedService

router = APIRouter()


def _countries(data: list[Country], request_id: str | None) -> ApiResponse[list[Country]]:
    return ApiResponse(data=data, metadata=ResponseMetadata(request_id=request_id))


@router.get(
    "/all",
    response_model=PaginatedResponse[dict[str, Any]],
    summary="List countries",
    description="Independent countries, one page at a time.",
)
async def list_countries(
    user: AuthUser,
    client: CountryClient,
    request_id: RequestId,
    pagination: PageParams = Depends(get_page_params),
) -> dict[str, Any]:
    result = await CountryService(client).list_all(pagination)
    return create_paginated_response(result, request_id)


@router.get(
    "/code/{code}",
    response_model=ApiResponse[dict[str, Any]],
    summary="Country by code",
    description="Look up one country by its 2 or 3 letter code and record the view.",
)
async def get_country(
    code: str,
    user: AuthUser,
    db: DbSession,
    client: CountryClient,
    request_id: RequestId,
) -> ApiResponse[Country]:
    country = await CountryService(client).get_by_code(code)

    if get_app_config().features.recently_viewed_tracking_enabled:
        await RecentlyViewedService(db, client).record_view_best_effort(user, code)

    return ApiResponse(data=country, metadata=ResponseMetadata(request_id=request_id))


@router.get(
    "/codes",
    response_model=ApiResponse[list[dict[str, Any]]],
    summary="Countries by codes",
)
async def get_countries(
    user: AuthUser,
    client: CountryClient,
    request_id: RequestId,
    codes: str = Query(default="", description="Comma-separated country codes"),
) -> ApiResponse[list[Country]]:
    data = await CountryService(client).get_by_codes(codes)
    return _countries(data, request_id)


@router.get("/name/{name}", response_model=ApiResponse[list[dict[str, Any]]], summary="By name")
async def by_name(name: str, user: AuthUser, client: CountryClient, request_id: RequestId):
    return _countries(await CountryService(client).search("name", name), request_id)


@router.get("/region/{region}", response_model=ApiResponse[list[dict[str, Any]]], summary="By region")
async def by_region(region: str, user: AuthUser, client: CountryClient, request_id: RequestId):
    return _countries(await CountryService(client).search("region", region), request_id)


@router.get(
    "/language/{language}",
    response_model=ApiResponse[list[dict[str, Any]]],
    summary="By language",
)
async def by_language(language: str, user: AuthUser, client: CountryClient, request_id: RequestId):
    return _countries(await CountryService(client).search("language", language), request_id)


@router.get(
    "/currency/{currency}",
    response_model=ApiResponse[list[dict[str, Any]]],
    summary="By currency",
)
async def by_currency(currency: str, user: AuthUser, client: CountryClient, request_id: RequestId):
    return _countries(await CountryService(client).search("currency", currency), request_id)


@router.get(
    "/demonym/{demonym}",
    response_model=ApiResponse[list[dict[str, Any]]],
    summary="By demonym",
)
async def by_demonym(demonym: str, user: AuthUser, client: CountryClient, request_id: RequestId):
    return _countries(await CountryService(client).search("demonym", demonym), request_id)


@router.get(
    "/capital/{capital}",
    response_model=ApiResponse[list[dict[str, Any]]],
    summary="By capital city",
)
async def by_capital(capital: str, user: AuthUser, client: CountryClient, request_id: RequestId):
    return _countries(await CountryService(client).search("capital", capital), request_id)


@router.get(
    "/subregion/{subregion}",
    response_model=ApiResponse[list[dict[str, Any]]],
    summary="By subregion",
)
async def by_subregion(subregion: str, user: AuthUser, client: CountryClient, request_id: RequestId):
    return _countries(await CountryService(client).search("subregion", subregion), request_id)


@router.get(
    "/translation/{translation}",
    response_model=ApiResponse[list[dict[str, Any]]],
    summary="By translated name",
)
async def by_translation(
    translation: str,
    user: AuthUser,
    client: CountryClient,
    request_id: RequestId,
):
    return _countries(await CountryService(client).search("translation", translation), request_id)
