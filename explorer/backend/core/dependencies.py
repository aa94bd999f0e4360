"""
FastAPI Dependencies.

Shared dependencies for request handling: database session, request ID,
country gateway and the authenticated identity.

Usage:
    @router.get("/favorites")
    async def list_favorites(db: DbSession, user: AuthUser):
        ...
"""

from typing import Annotated

import structlog
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from explorer.backend.clients.rest_countries import RestCountriesClient, get_country_client
from explorer.backend.core.database import get_db_session
from explorer.backend.core.exceptions import AuthenticationError
from explorer.backend.core.security import CurrentUser
from explorer.backend.services.auth import AuthService

# auto_error=False so a missing header goes through our own 401 envelope
bearer_scheme = HTTPBearer(auto_error=False)

DbSession = Annotated[AsyncSession, Depends(get_db_session)]

CountryClient = Annotated[RestCountriesClient, Depends(get_country_client)]


def get_request_id(request: Request) -> str | None:
    """Request ID assigned by RequestContextMiddleware."""
    return getattr(request.state, "request_id", None)


RequestId = Annotated[str | None, Depends(get_request_id)]


async def get_current_user(
    db: DbSession,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> CurrentUser:
    """
    Resolve the bearer token to the acting user.

    Binds user_id into the log context for the rest of the request.

    Raises:
        AuthenticationError: Missing, invalid or expired token, or unknown user
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Not authorized, no token")

    user = await AuthService(db).authenticate(credentials.credentials)
    structlog.contextvars.bind_contextvars(user_id=user.id)
    return user


AuthUser = Annotated[CurrentUser, Depends(get_current_user)]
