"""
Fuzzy matching engine for destination search.

Provides typo-tolerant matching of a query against destination records
using rapidfuzz. Results carry a distance on a [0, 1] scale where 0 is
an exact match and 1 is no relation at all.
"""

import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from rapidfuzz import fuzz

from ..domain.entities import DestinationRecord, MatchCandidate, MatchedField
from ..domain.exceptions import MatchFailureException
from .normalizer import normalize

logger = logging.getLogger(__name__)


class FuzzyMatcher:
    """
    Fuzzy matcher over destination records.

    Each searchable field is compared with both a full-string ratio and a
    partial (best substring window) ratio, so "kioto" finds "Kyoto" and
    "temple" finds "ancient temples and gardens". The best field wins.
    """

    DEFAULT_THRESHOLD = 0.4
    DEFAULT_KEYS: Tuple[MatchedField, ...] = (
        MatchedField.DESCRIPTION,
        MatchedField.NAME,
        MatchedField.CATEGORIES,
    )

    def __init__(
        self,
        threshold: float = DEFAULT_THRESHOLD,
        keys: Optional[Sequence[MatchedField]] = None,
    ):
        """
        Initialize fuzzy matcher.

        Args:
            threshold: Maximum accepted distance (0-1)
            keys: Record fields to search
        """
        if not 0.0 <= threshold <= 1.0:
            raise ValueError(f"Threshold must be within [0, 1], got {threshold}")

        self.threshold = threshold
        self.keys = tuple(MatchedField(key) for key in (keys or self.DEFAULT_KEYS))

    def match(
        self, query: str, records: Sequence[DestinationRecord]
    ) -> List[MatchCandidate]:
        """
        Match query against records.

        Args:
            query: Raw or normalized search query
            records: Destination records to search

        Returns:
            Candidates within the threshold, best first; ties keep
            dataset order. Empty for an empty query or no records.

        Raises:
            MatchFailureException: If the matching computation fails
        """
        query_norm = normalize(query)
        if not query_norm or not records:
            return []

        try:
            hits = []
            for index, record in enumerate(records):
                matched_field, distance = self._best_field(query_norm, record)
                if matched_field is not None and distance <= self.threshold:
                    hits.append((distance, index, record, matched_field))
        except Exception as e:
            logger.error(f"Fuzzy matching failed for '{query_norm}': {e}")
            raise MatchFailureException(query, str(e)) from e

        hits.sort(key=lambda hit: (hit[0], hit[1]))

        logger.debug(
            f"Matched '{query_norm}': {len(hits)}/{len(records)} records "
            f"within threshold {self.threshold}"
        )

        return [
            MatchCandidate(
                record=record,
                distance=distance,
                matched_field=matched_field,
                position=position,
            )
            for position, (distance, _, record, matched_field) in enumerate(hits)
        ]

    def _best_field(
        self, query: str, record: DestinationRecord
    ) -> Tuple[Optional[MatchedField], float]:
        """
        Find the field of a record closest to the query.

        Returns:
            Tuple of (matched_field or None, distance)
        """
        best_field: Optional[MatchedField] = None
        best_similarity = 0.0

        for key in self.keys:
            for text in self._field_texts(record, key):
                similarity = self._calculate_similarity(query, normalize(text))
                if similarity > best_similarity:
                    best_field = key
                    best_similarity = similarity
                    if similarity == 1.0:
                        return (best_field, 0.0)

        return (best_field, round(1.0 - best_similarity, 6))

    @staticmethod
    def _field_texts(record: DestinationRecord, key: MatchedField) -> Iterable[str]:
        if key is MatchedField.NAME:
            return [record.name]
        if key is MatchedField.DESCRIPTION:
            return [record.description] if record.description else []
        # Non-string tags are not searchable; the scorer reports them.
        return [tag for tag in record.categories if isinstance(tag, str)]

    def _calculate_similarity(self, query: str, text: str) -> float:
        """
        Calculate similarity between query and field text.

        Returns:
            Similarity score between 0.0 (no match) and 1.0 (exact match)
        """
        if not query or not text:
            return 0.0

        if query == text:
            return 1.0

        return max(fuzz.ratio(query, text), fuzz.partial_ratio(query, text)) / 100.0

    def get_stats(self) -> dict:
        """
        Get matcher configuration.

        Returns:
            Dictionary with matcher settings
        """
        return {
            "threshold": self.threshold,
            "keys": [key.value for key in self.keys],
            "algorithm": "rapidfuzz",
        }
