"""
SmartAI Backend - Root Route

GET / answers with a short banner listing the mounted API prefixes, so a
browser hitting the deployment URL sees that the backend is alive.
"""

from fastapi import APIRouter

from smartai import __version__
from smartai.models.collections import utcnow
from smartai.schemas.common import RootResponse

router = APIRouter(tags=["Root"])

API_PREFIXES = [
    "/api/auth",
    "/api/quiz",
    "/api/folders",
    "/api/bookmarks",
    "/api/students",
    "/api/student-quiz",
    "/api/health",
]


@router.get("/", response_model=RootResponse, summary="API banner")
async def root() -> RootResponse:
    return RootResponse(
        message="SmartAI Backend API is running!",
        version=__version__,
        endpoints=API_PREFIXES,
        timestamp=utcnow(),
    )
