"""Service layer orchestrating the search pipeline."""

from .search_service import DestinationSearchService

__all__ = ["DestinationSearchService"]
