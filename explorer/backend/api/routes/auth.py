"""
Auth API Endpoints.

Registration, login, logout and current identity.
"""

from fastapi import APIRouter, Response

from explorer.backend.core.dependencies import AuthUser, DbSession, RequestId
from explorer.backend.schemas.auth import (
    LoginRequest,
    RegisterRequest,
    TokenResponse,
    UserIdentity,
)
from explorer.backend.schemas.base import ApiResponse, ResponseMetadata
from explorer.backend.services.auth import AuthService

router = APIRouter()


@router.post(
    "/register",
    response_model=ApiResponse[TokenResponse],
    status_code=201,
    summary="Register",
    description="Create an account and return an access token.",
)
async def register(
    data: RegisterRequest,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[TokenResponse]:
    result = await AuthService(db).register(data.username, data.email, data.password)
    return ApiResponse(
        data=TokenResponse.model_validate(result),
        message="User registered successfully",
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.post(
    "/login",
    response_model=ApiResponse[TokenResponse],
    summary="Log in",
    description="Exchange a username or email plus password for an access token.",
)
async def login(
    data: LoginRequest,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[TokenResponse]:
    result = await AuthService(db).login(
        data.password,
        username=data.username,
        email=data.email,
    )
    return ApiResponse(
        data=TokenResponse.model_validate(result),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.post(
    "/logout",
    response_model=ApiResponse[None],
    summary="Log out",
    description="Tokens are held by the client; this clears the token cookie if one was set.",
)
async def logout(response: Response, request_id: RequestId) -> ApiResponse[None]:
    response.delete_cookie("token")
    return ApiResponse(
        message="Logged out successfully",
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.get(
    "/me",
    response_model=ApiResponse[UserIdentity],
    summary="Current user",
)
async def me(user: AuthUser, request_id: RequestId) -> ApiResponse[UserIdentity]:
    return ApiResponse(
        data=UserIdentity.model_validate(user),
        metadata=ResponseMetadata(request_id=request_id),
    )
