"""
Pagination Utilities.

Page-number pagination for list endpoints: a 1-indexed page and a page size
select the slice items[(page - 1) * limit : page * limit].
"""

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from fastapi import Query

from explorer.backend.schemas.base import PaginatedResponse, PaginationInfo, ResponseMetadata

T = TypeVar("T")

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 5
MAX_LIMIT = 250


@dataclass
class PageParams:
    """Page number and page size from the query string."""

    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @property
    def offset(self) -> int:
        """Index of the first item on this page."""
        return (self.page - 1) * self.limit


def get_page_params(
    page: int = Query(
        default=DEFAULT_PAGE,
        ge=1,
        description="Page number, starting at 1",
    ),
    limit: int = Query(
        default=DEFAULT_LIMIT,
        ge=1,
        le=MAX_LIMIT,
        description="Items per page",
    ),
) -> PageParams:
    """
    FastAPI dependency for pagination parameters.

    Usage:
        @router.get("/all")
        async def list_all(pagination: PageParams = Depends(get_page_params)):
            ...
    """
    return PageParams(page=page, limit=limit)


@dataclass
class PagedResult(Generic[T]):
    """One page of items plus the numbers needed to describe it."""

    items: list[T]
    total: int
    page: int
    limit: int

    @property
    def has_more(self) -> bool:
        return self.page * self.limit < self.total


def paginate(items: list[T], params: PageParams) -> PagedResult[T]:
    """Slice an in-memory list down to the requested page."""
    return PagedResult(
        items=items[params.offset:params.offset + params.limit],
        total=len(items),
        page=params.page,
        limit=params.limit,
    )


def create_paginated_response(
    result: PagedResult[Any],
    request_id: str | None = None,
) -> dict[str, Any]:
    """Build the PaginatedResponse envelope for a page of raw JSON items."""
    response = PaginatedResponse[Any](
        data=result.items,
        pagination=PaginationInfo(
            total=result.total,
            page=result.page,
            limit=result.limit,
            has_more=result.has_more,
        ),
        metadata=ResponseMetadata(request_id=request_id),
    )
    return response.model_dump(mode="json")
