"""
Main FastAPI application.

This file wires together all layers:
- Domain: Destination entities and errors
- Repositories: Dataset access
- Search: Normalization, fuzzy matching, scoring
- Services: Pipeline orchestration
- Routers: HTTP endpoints
"""

import time
from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import settings
from .dependencies import set_search_service
from .logging_config import setup_logging
from .metrics import metrics_endpoint, track_request_metrics
from .repositories.destination_repository import DestinationRepository
from .routers import health_router, search_router
from .search.fuzzy_matcher import FuzzyMatcher
from .search.relevance_scorer import RelevanceScorer
from .services.search_service import DestinationSearchService

setup_logging(log_level=settings.LOG_LEVEL, use_json=settings.LOG_JSON)

logger = structlog.get_logger(__name__)


def create_search_service(
    repository: Optional[DestinationRepository] = None,
) -> DestinationSearchService:
    """
    Create and configure the search service with all dependencies.

    Args:
        repository: Dataset repository (created from settings if None)

    Returns:
        Configured DestinationSearchService instance
    """
    return DestinationSearchService(
        repository=repository or DestinationRepository(),
        matcher=FuzzyMatcher(threshold=settings.MATCH_THRESHOLD),
        scorer=RelevanceScorer(),
        min_length=settings.MIN_QUERY_LENGTH,
        top_n=settings.TOP_N,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Starting Destination Search...", dataset=settings.DATASET_URL)

    repository = DestinationRepository()
    set_search_service(create_search_service(repository))

    logger.info("Destination Search started successfully")

    yield

    logger.info("Shutting down Destination Search...")
    await repository.close()
    set_search_service(None)
    logger.info("Destination Search shut down complete")


app = FastAPI(
    title=settings.APP_NAME,
    description="Typo-tolerant destination search with category-weighted ranking",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
)


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def add_request_id(request: Request, call_next):
    """Add request ID for tracing."""
    request_id = request.headers.get("X-Request-ID", f"req-{id(request)}")

    structlog.contextvars.bind_contextvars(request_id=request_id)

    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id

    structlog.contextvars.clear_contextvars()

    return response


@app.middleware("http")
async def track_metrics(request: Request, call_next):
    """Track Prometheus metrics."""
    start_time = time.time()

    response = await call_next(request)

    track_request_metrics(
        method=request.method,
        endpoint=request.url.path,
        status_code=response.status_code,
        duration=time.time() - start_time,
    )

    return response


app.include_router(search_router.router)
app.include_router(health_router.router)
app.add_api_route("/metrics", metrics_endpoint, methods=["GET"], include_in_schema=False)


@app.get("/")
async def root():
    """Root endpoint with service information."""
    return {
        "service": settings.APP_NAME,
        "version": "1.0.0",
        "status": "operational",
        "docs": "/api/docs",
        "search": "/api/v1/search?q=",
        "fragment": "/search/fragment?q=",
        "health": "/api/v1/health",
    }


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle all unhandled exceptions."""
    logger.error(
        "Unhandled exception",
        path=request.url.path,
        method=request.method,
        error=str(exc),
        exc_info=True,
    )

    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "internal_server_error",
            "message": "An unexpected error occurred",
            "request_id": request.headers.get("X-Request-ID"),
        },
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "destination_search.app:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )
