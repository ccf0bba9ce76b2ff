"""
Destination search router.

Exposes the search pipeline as JSON for API clients and as a rendered
HTML fragment for pages that load the results card list directly.
"""

import time
from typing import List, Optional

import structlog
from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import HTMLResponse, JSONResponse
from pydantic import BaseModel, Field

from ..dependencies import get_renderer, get_search_service
from ..domain.exceptions import DatasetUnavailableException, MatchFailureException
from ..search.normalizer import normalize
from ..services.search_service import DestinationSearchService
from ..ui.renderer import Cleared, Empty, Error, RenderState, ResultRenderer, Results

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["search"])


class DestinationResult(BaseModel):
    """Ranked destination in a search response."""

    id: str = Field(..., description="Destination identifier")
    name: str = Field(..., description="Destination name")
    description: Optional[str] = Field(None, description="Destination description")
    categories: List[str] = Field(default_factory=list, description="Category tags")
    image_url: Optional[str] = Field(None, description="Image URL")
    group: Optional[str] = Field(None, description="Dataset group")
    score: float = Field(..., description="Combined relevance score (unbounded)")
    percent: int = Field(..., description="Score as rounded percentage")
    distance: Optional[float] = Field(None, description="Fuzzy distance (0 = exact)")
    matched_field: Optional[str] = Field(None, description="Best matching field")


class SearchResponse(BaseModel):
    """Search response."""

    success: bool = True
    query: str = Field(..., description="Original query")
    normalized_query: str = Field(..., description="Normalized query")
    results: List[DestinationResult] = Field(default_factory=list)
    count: int = Field(..., description="Number of results")
    latency_ms: float = Field(..., description="Search latency in milliseconds")


def _error_response(status_code: int, error: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": error, "message": message},
    )


@router.get(
    "/api/v1/search",
    response_model=SearchResponse,
    responses={
        200: {"description": "Search successful"},
        500: {"description": "Matching failed"},
        503: {"description": "Destination dataset unavailable"},
    },
    summary="Search destinations",
)
async def search_destinations(
    q: str = Query(..., max_length=200, description="Search query"),
    limit: Optional[int] = Query(
        default=None, ge=1, le=50, description="Maximum results (defaults to TOP_N)"
    ),
    service: DestinationSearchService = Depends(get_search_service),
):
    """
    Search destinations by name, description or category.

    Typo tolerant; results are ranked by match quality plus category bonus.
    """
    start_time = time.time()

    try:
        ranked = await service.search_top(q, limit=limit)
    except DatasetUnavailableException as e:
        logger.error("Dataset unavailable", query=q, error=e.message)
        return _error_response(
            status.HTTP_503_SERVICE_UNAVAILABLE, "dataset_unavailable", e.message
        )
    except MatchFailureException as e:
        logger.error("Matching failed", query=q, error=e.message)
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "match_failure", e.message
        )

    results = []
    for result in ranked:
        record = result.record
        results.append(
            DestinationResult(
                id=record.id,
                name=record.name,
                description=record.description,
                categories=[str(tag) for tag in record.categories],
                image_url=record.image_url,
                group=record.group,
                score=round(result.score, 4),
                percent=result.percent,
                distance=result.candidate.distance,
                matched_field=(
                    result.candidate.matched_field.value
                    if result.candidate.matched_field
                    else None
                ),
            )
        )

    latency_ms = (time.time() - start_time) * 1000
    logger.info(
        "Destination search completed",
        query=q,
        results=len(results),
        latency_ms=round(latency_ms, 1),
    )

    return SearchResponse(
        query=q,
        normalized_query=normalize(q),
        results=results,
        count=len(results),
        latency_ms=round(latency_ms, 2),
    )


@router.get(
    "/search/fragment",
    response_class=HTMLResponse,
    summary="Rendered search results fragment",
)
async def search_fragment(
    q: str = Query("", max_length=200, description="Search query"),
    service: DestinationSearchService = Depends(get_search_service),
    renderer: ResultRenderer = Depends(get_renderer),
):
    """
    Render the results list for a query as an HTML fragment.

    Short queries render nothing; failures render the retry message.
    """
    state: RenderState
    if len(normalize(q)) < service.min_length:
        state = Cleared()
    else:
        try:
            ranked = await service.search_top(q)
        except (DatasetUnavailableException, MatchFailureException) as e:
            logger.error("Fragment search failed", query=q, error=e.message)
            state = Error()
        except Exception as e:
            logger.error(
                "Unexpected fragment search error", query=q, error=str(e), exc_info=True
            )
            state = Error()
        else:
            state = Results(ranked) if ranked else Empty()

    return HTMLResponse(content=renderer.markup(state))
