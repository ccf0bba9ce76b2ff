"""
Business logic service layer.

Orchestrates one destination search pass: dataset, normalization,
fuzzy matching and relevance ranking.
"""

import logging
import time
from typing import List, Optional

from ..config import settings
from ..domain.entities import RankedResult
from ..domain.exceptions import DestinationSearchException
from ..metrics import track_search_query
from ..repositories.destination_repository import IDestinationRepository
from ..search.fuzzy_matcher import FuzzyMatcher
from ..search.normalizer import normalize
from ..search.relevance_scorer import RelevanceScorer

logger = logging.getLogger(__name__)


class DestinationSearchService:
    """
    Destination search service.

    Pipeline:
    1. Normalize the query (short queries stop here, no dataset access)
    2. Load destinations (cached after the first success)
    3. Fuzzy match within the threshold
    4. Rank by combined relevance score
    """

    def __init__(
        self,
        repository: IDestinationRepository,
        matcher: Optional[FuzzyMatcher] = None,
        scorer: Optional[RelevanceScorer] = None,
        min_length: Optional[int] = None,
        top_n: Optional[int] = None,
    ):
        """
        Initialize search service.

        Args:
            repository: Destination dataset repository
            matcher: Fuzzy matcher (defaults to settings threshold)
            scorer: Relevance scorer (defaults to the standard weight table)
            min_length: Minimum normalized query length
            top_n: Number of results kept by search_top
        """
        self.repository = repository
        self.matcher = matcher or FuzzyMatcher(threshold=settings.MATCH_THRESHOLD)
        self.scorer = scorer or RelevanceScorer()
        self.min_length = settings.MIN_QUERY_LENGTH if min_length is None else min_length
        self.top_n = settings.TOP_N if top_n is None else top_n

    async def search(self, query: str) -> List[RankedResult]:
        """
        Search destinations and rank every match.

        Args:
            query: Raw user query

        Returns:
            Ranked results, best first. Empty for short or unmatched queries.

        Raises:
            DatasetUnavailableException: If the dataset cannot be loaded
            MatchFailureException: If fuzzy matching fails
        """
        query_norm = normalize(query)
        if len(query_norm) < self.min_length:
            logger.debug(f"Query '{query_norm}' below minimum length {self.min_length}")
            return []

        start_time = time.time()
        try:
            records = await self.repository.load_all()
            candidates = self.matcher.match(query_norm, records)
            ranked = self.scorer.rank(candidates)
        except DestinationSearchException as e:
            track_search_query(success=False, duration=time.time() - start_time)
            logger.error(f"Search failed for '{query_norm}': {e.message}")
            raise

        duration = time.time() - start_time
        track_search_query(success=True, duration=duration, result_count=len(ranked))
        logger.info(
            f"Search '{query_norm}': {len(ranked)} matches in {duration * 1000:.1f}ms"
        )
        return ranked

    async def search_top(self, query: str, limit: Optional[int] = None) -> List[RankedResult]:
        """
        Search destinations and keep only the best results.

        Args:
            query: Raw user query
            limit: Number of results (defaults to top_n)

        Returns:
            At most `limit` ranked results
        """
        ranked = await self.search(query)
        return ranked[: self.top_n if limit is None else limit]
