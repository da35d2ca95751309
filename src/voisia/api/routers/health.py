"""Health check router

Endpoints:
- GET /health: Service health status and metadata
"""

from fastapi import APIRouter

from ...api.contracts import HealthResponse
from ...config import settings

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """API health check"""
    return HealthResponse(
        service=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
    )
