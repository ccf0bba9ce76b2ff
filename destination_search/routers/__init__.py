"""
API routers for destination search.
"""

from . import health_router, search_router

__all__ = ["health_router", "search_router"]
