"""Data access for the destination dataset."""

from .destination_repository import DestinationRepository, IDestinationRepository

__all__ = ["DestinationRepository", "IDestinationRepository"]
