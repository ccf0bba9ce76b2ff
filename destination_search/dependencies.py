"""
Shared dependencies for the application.

Provides dependency injection functions used across routers.
"""

from typing import TYPE_CHECKING, Optional

from .ui.renderer import ResultRenderer

if TYPE_CHECKING:
    from .services.search_service import DestinationSearchService

# Global service instance (set by main app)
_search_service: Optional["DestinationSearchService"] = None
_renderer: Optional[ResultRenderer] = None


def set_search_service(service: Optional["DestinationSearchService"]) -> None:
    """
    Set the global search service instance.

    Called by main app during startup and cleared on shutdown.
    """
    global _search_service
    _search_service = service


async def get_search_service() -> "DestinationSearchService":
    """
    Get search service instance for dependency injection.

    Used by all routers that need the search pipeline.
    """
    if _search_service is None:
        raise RuntimeError("Search service not initialized")
    return _search_service


async def get_renderer() -> ResultRenderer:
    """Get the shared result renderer."""
    global _renderer
    if _renderer is None:
        _renderer = ResultRenderer()
    return _renderer
