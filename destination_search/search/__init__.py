"""
Search module for destination search.

Provides normalization, fuzzy matching, relevance scoring and debouncing.
"""
from .debouncer import DebounceState, SearchDebouncer
from .fuzzy_matcher import FuzzyMatcher
from .normalizer import normalize
from .relevance_scorer import RelevanceScorer

__all__ = [
    "DebounceState",
    "FuzzyMatcher",
    "RelevanceScorer",
    "SearchDebouncer",
    "normalize",
]
