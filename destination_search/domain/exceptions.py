"""
Custom exceptions for the destination search domain.

These exceptions represent domain-level errors and are independent
of infrastructure concerns (HTTP, rendering, etc.).
"""

from typing import Optional


class DestinationSearchException(Exception):
    """Base exception for all destination search errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class DatasetUnavailableException(DestinationSearchException):
    """Raised when the destination dataset cannot be fetched or parsed."""

    def __init__(self, source: str, reason: Optional[str] = None):
        message = f"Destination dataset '{source}' unavailable"
        if reason:
            message += f": {reason}"
        super().__init__(
            message=message, details={"source": source, "reason": reason}
        )


class MatchFailureException(DestinationSearchException):
    """Raised when the fuzzy matching pass fails unexpectedly."""

    def __init__(self, query: str, reason: Optional[str] = None):
        message = f"Fuzzy matching failed for query: {query}"
        if reason:
            message += f" ({reason})"
        super().__init__(message=message, details={"query": query, "reason": reason})


class ScoreFailureException(DestinationSearchException):
    """
    Raised when a single candidate cannot be scored.

    Never escapes the scorer: the affected candidate is scored 0.
    """

    def __init__(self, record_id: str, reason: str):
        message = f"Scoring failed for {record_id}: {reason}"
        super().__init__(
            message=message, details={"record_id": record_id, "reason": reason}
        )
