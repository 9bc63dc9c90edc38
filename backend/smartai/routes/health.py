"""
SmartAI Backend - Health Check Route

Liveness only: answers without touching MongoDB, so a slow or unreachable
cluster never makes the platform restart a healthy function.
"""

from fastapi import APIRouter

from smartai.schemas.common import HealthResponse

router = APIRouter(tags=["Health"])


@router.get("/api/health", response_model=HealthResponse, summary="Service health check")
async def health_check() -> HealthResponse:
    return HealthResponse(status="OK")
