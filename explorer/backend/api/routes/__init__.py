"""
API Router.

Aggregates all endpoint routers. Mounted under application.api_prefix.
"""

from fastapi import APIRouter

from explorer.backend.api.routes import auth, countries, favorites, users

router = APIRouter()

router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(countries.router, prefix="/countries", tags=["countries"])
router.include_router(favorites.router, prefix="/favorites", tags=["favorites"])
router.include_router(users.router, prefix="/users", tags=["users"])
