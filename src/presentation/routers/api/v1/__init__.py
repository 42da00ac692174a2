"""API v1 routers.

RESTful resource-based endpoints. All endpoints use resource nouns, not
action verbs.

Resources:
    /api/v1/tokens      - Refresh token rotation
    /api/v1/sessions    - Session listing, revocation and logout

Token issuance is not exposed over HTTP; the primary authentication
component calls LifecycleManager.issue in-process.
"""

from fastapi import APIRouter

from src.core.config import settings
from src.presentation.routers.api.v1.sessions import router as sessions_router
from src.presentation.routers.api.v1.tokens import router as tokens_router

v1_router = APIRouter(prefix=settings.api_v1_prefix)
v1_router.include_router(tokens_router)
v1_router.include_router(sessions_router)

__all__ = [
    "v1_router",
]
