"""
Health check and monitoring router.

Provides endpoints for health checks and readiness probes.
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..dependencies import get_search_service
from ..services.search_service import DestinationSearchService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["health"])


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    timestamp: str
    service: str = "destination-search"
    version: str = "1.0.0"


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    ready: bool
    checks: dict
    timestamp: str


@router.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Health check",
)
async def health_check():
    """
    Basic health check.

    Always returns 200 OK if the service is running.
    """
    return HealthResponse(
        status="healthy", timestamp=datetime.now(timezone.utc).isoformat()
    )


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    summary="Readiness check",
)
async def readiness_check(
    service: DestinationSearchService = Depends(get_search_service),
):
    """
    Readiness check.

    Reports dataset, matcher and scorer status. Returns 503 when the
    dataset has been tried and never loaded.
    """
    dataset = service.repository.get_stats()
    checks = {
        "dataset": dataset,
        "matcher": service.matcher.get_stats(),
        "scorer": service.scorer.get_stats(),
    }
    ready = dataset.get("loaded", False) or dataset.get("load_count", 0) == 0

    response = ReadinessResponse(
        ready=ready,
        checks=checks,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
    if not ready:
        logger.warning("Readiness check failed: dataset not loaded")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=response.model_dump(),
        )
    return response
