"""
Relevance scoring system for destination search results.

Combines the fuzzy match quality with an additive category bonus:

    total = (1 - distance) + sum(weight[c] for each known category c)

The total is deliberately not normalized. A destination tagged with
several weighted categories can outrank a closer lexical match with no
category hits; thematically rich destinations are meant to surface first.
"""

import logging
from typing import Iterable, List, Optional, Tuple

from ..domain.entities import (
    CATEGORY_WEIGHTS,
    Category,
    CategoryWeightTable,
    DestinationRecord,
    MatchCandidate,
    RankedResult,
)
from ..domain.exceptions import ScoreFailureException
from ..metrics import track_score_failure

logger = logging.getLogger(__name__)


class RelevanceScorer:
    """
    Calculate relevance scores for match candidates.

    Scoring factors:
    1. Match quality - inverted fuzzy distance (0-1)
    2. Category bonus - sum of weights of the record's known categories

    Unknown category tags weigh nothing. A candidate that cannot be scored
    (malformed data) gets 0 instead of failing the whole ranking.
    """

    def __init__(self, weights: Optional[CategoryWeightTable] = None):
        """
        Initialize relevance scorer.

        Args:
            weights: Category weight table (defaults to CATEGORY_WEIGHTS)
        """
        self.weights = CATEGORY_WEIGHTS if weights is None else weights

    def score(
        self, candidate: MatchCandidate, weights: Optional[CategoryWeightTable] = None
    ) -> float:
        """
        Calculate the combined score of a candidate.

        Args:
            candidate: Match candidate to score
            weights: Weight table override for this call

        Returns:
            base + category bonus, or 0.0 if the candidate is malformed
        """
        return self._score_parts(candidate, weights)[0]

    def rank(self, candidates: Iterable[MatchCandidate]) -> List[RankedResult]:
        """
        Score candidates and sort them by relevance.

        Args:
            candidates: Candidates in matcher order

        Returns:
            RankedResult list sorted by score (descending); equal scores
            keep matcher order
        """
        ranked = []
        for candidate in candidates:
            total, breakdown = self._score_parts(candidate)
            ranked.append(RankedResult(candidate=candidate, score=total, breakdown=breakdown))

        ranked.sort(key=lambda result: result.score, reverse=True)
        return ranked

    def _score_parts(
        self, candidate: MatchCandidate, weights: Optional[CategoryWeightTable] = None
    ) -> Tuple[float, dict]:
        table = self.weights if weights is None else weights
        try:
            base = candidate.base_score
            bonus = self._category_bonus(candidate.record, table)
        except Exception as e:
            failure = ScoreFailureException(self._record_id(candidate), str(e))
            logger.warning(f"{failure.message}; scoring as 0")
            track_score_failure()
            return (0.0, {"error": failure.details["reason"]})

        return (base + bonus, {"base": base, "category_bonus": bonus})

    @staticmethod
    def _category_bonus(record: DestinationRecord, weights: CategoryWeightTable) -> float:
        """
        Sum the weights of the record's categories.

        Each category counts once even if repeated in the record.

        Raises:
            TypeError: If a tag is not a string
        """
        seen = set()
        bonus = 0.0
        for tag in record.categories:
            category = Category.parse(tag)
            if category is None or category in seen:
                continue
            seen.add(category)
            bonus += weights.get(category, 0.0)
        return bonus

    @staticmethod
    def _record_id(candidate: MatchCandidate) -> str:
        record = getattr(candidate, "record", None)
        return getattr(record, "id", None) or "<unknown>"

    def get_stats(self) -> dict:
        """
        Get scorer configuration.

        Returns:
            Dictionary with the weight table
        """
        return {
            "weights": {category.value: weight for category, weight in self.weights.items()},
            "normalized": False,
        }
