"""
Favorites API Endpoints.
"""

from fastapi import APIRouter

from explorer.backend.core.dependencies import AuthUser, DbSession, RequestId
from explorer.backend.schemas.base import ApiResponse, ResponseMetadata
from explorer.backend.schemas.favorite import FavoriteCreate, FavoriteItem
from explorer.backend.services.favorite import FavoriteService

router = APIRouter()


@router.get(
    "",
    response_model=ApiResponse[list[FavoriteItem]],
    summary="List favorites",
    description="Favorite countries in the order they were added.",
)
async def list_favorites(
    user: AuthUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[list[FavoriteItem]]:
    favorites = await FavoriteService(db).list_favorites(user)
    return ApiResponse(
        data=[FavoriteItem.model_validate(item) for item in favorites],
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.post(
    "",
    response_model=ApiResponse[list[FavoriteItem]],
    summary="Add favorite",
    description="Append a country to favorites. Adding the same code twice is rejected.",
)
async def add_favorite(
    data: FavoriteCreate,
    user: AuthUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[list[FavoriteItem]]:
    favorites = await FavoriteService(db).add_favorite(user, data.code, data.name, data.flag)
    return ApiResponse(
        data=[FavoriteItem.model_validate(item) for item in favorites],
        message="Added to favorites",
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.delete(
    "/{code}",
    response_model=ApiResponse[list[FavoriteItem]],
    summary="Remove favorite",
    description="Removing a code that is not a favorite still succeeds.",
)
async def remove_favorite(
    code: str,
    user: AuthUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[list[FavoriteItem]]:
    favorites = await FavoriteService(db).remove_favorite(user, code)
    return ApiResponse(
        data=[FavoriteItem.model_validate(item) for item in favorites],
        message="Removed from favorites",
        metadata=ResponseMetadata(request_id=request_id),
    )
