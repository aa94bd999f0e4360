"""
User API Endpoints.

Profile, password, recently viewed countries and country notes.
"""

from fastapi import APIRouter

from explorer.backend.core.dependencies import AuthUser, CountryClient, DbSession, RequestId
from explorer.backend.schemas.base import ApiResponse, ResponseMetadata
from explorer.backend.schemas.note import NoteListItem, NoteResponse, NoteUpsert
from explorer.backend.schemas.user import (
    PasswordReset,
    ProfileResponse,
    ProfileUpdate,
    RecentlyViewedItem,
)
from explorer.backend.services.note import NoteService
from explorer.backend.services.recently_viewed import RecentlyViewedService
from explorer.backend.services.user import UserService

router = APIRouter()


@router.get(
    "/recently-viewed",
    response_model=ApiResponse[list[RecentlyViewedItem]],
    summary="Recently viewed countries",
    description="Newest first, up to 10, with name, flag, region and the caller's rating.",
)
async def recently_viewed(
    user: AuthUser,
    db: DbSession,
    client: CountryClient,
    request_id: RequestId,
) -> ApiResponse[list[RecentlyViewedItem]]:
    items = await RecentlyViewedService(db, client).list_recently_viewed(user)
    return ApiResponse(
        data=[RecentlyViewedItem.model_validate(item) for item in items],
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.put(
    "/profile",
    response_model=ApiResponse[ProfileResponse],
    summary="Update profile",
)
async def update_profile(
    data: ProfileUpdate,
    user: AuthUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[ProfileResponse]:
    record = await UserService(db).update_profile(user, data.username, data.email, data.phone)
    return ApiResponse(
        data=ProfileResponse.model_validate(record),
        message="Profile updated successfully",
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.put(
    "/reset-password",
    response_model=ApiResponse[None],
    summary="Change password",
)
async def reset_password(
    data: PasswordReset,
    user: AuthUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[None]:
    await UserService(db).reset_password(user, data.current_password, data.new_password)
    return ApiResponse(
        message="Password updated successfully",
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.post(
    "/note",
    response_model=ApiResponse[NoteResponse],
    summary="Save note",
    description="Create or overwrite the caller's note for a country.",
)
async def save_note(
    data: NoteUpsert,
    user: AuthUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[NoteResponse]:
    review = await NoteService(db).upsert_note(user, data.country_code, data.note)
    return ApiResponse(
        data=NoteResponse.model_validate(review),
        message="Note saved successfully",
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.get(
    "/notes",
    response_model=ApiResponse[list[NoteListItem]],
    summary="List notes",
    description="Countries the caller has written a note for, oldest first.",
)
async def list_notes(
    user: AuthUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[list[NoteListItem]]:
    reviews = await NoteService(db).list_notes(user)
    return ApiResponse(
        data=[NoteListItem.model_validate(review) for review in reviews],
        metadata=ResponseMetadata(request_id=request_id),
    )
