"""
Tests for the fuzzy matcher.

Covers typo tolerance, field selection, threshold filtering and ordering.
"""

from unittest.mock import patch

import pytest

from destination_search.domain.entities import DestinationRecord, MatchedField
from destination_search.domain.exceptions import MatchFailureException
from destination_search.search.fuzzy_matcher import FuzzyMatcher


class TestFuzzyMatcherInitialization:
    """Test fuzzy matcher initialization."""

    def test_default_initialization(self):
        matcher = FuzzyMatcher()

        assert matcher.threshold == 0.4
        assert matcher.keys == (
            MatchedField.DESCRIPTION,
            MatchedField.NAME,
            MatchedField.CATEGORIES,
        )

    def test_custom_threshold(self):
        matcher = FuzzyMatcher(threshold=0.2, keys=["name"])

        assert matcher.threshold == 0.2
        assert matcher.keys == (MatchedField.NAME,)

    def test_invalid_threshold(self):
        with pytest.raises(ValueError):
            FuzzyMatcher(threshold=1.5)


class TestMatching:
    """Test candidate production."""

    def test_typo_still_matches(self, kyoto):
        """'kioto' is a typo of Kyoto and must be found."""
        candidates = FuzzyMatcher().match("kioto", [kyoto])

        assert len(candidates) == 1
        assert candidates[0].record is kyoto
        assert candidates[0].matched_field is MatchedField.NAME
        assert 0.0 < candidates[0].distance <= 0.4

    def test_exact_name_has_zero_distance(self, kyoto):
        candidates = FuzzyMatcher().match("Kyoto", [kyoto])

        assert candidates[0].distance == 0.0

    def test_matches_accented_query(self, kyoto):
        candidates = FuzzyMatcher().match("Kyōto", [kyoto])

        assert candidates[0].distance == 0.0

    def test_matches_description_substring(self, kyoto):
        candidates = FuzzyMatcher().match("temples", [kyoto])

        assert len(candidates) == 1
        assert candidates[0].matched_field is MatchedField.DESCRIPTION
        assert candidates[0].distance == 0.0

    def test_matches_category_tag(self):
        record = DestinationRecord(id="alps", name="Swiss Alps", categories=("adventure",))
        candidates = FuzzyMatcher().match("adventure", [record])

        assert candidates[0].matched_field is MatchedField.CATEGORIES

    def test_non_string_tags_are_not_searched(self):
        record = DestinationRecord(id="odd", name="Oddity", categories=(42, None))

        assert FuzzyMatcher().match("zzzzz", [record]) == []
        assert len(FuzzyMatcher().match("oddity", [record])) == 1

    def test_unrelated_query_returns_empty(self, sample_records):
        assert FuzzyMatcher().match("zzzzz", sample_records) == []

    @pytest.mark.parametrize("query", ["", "   ", None])
    def test_empty_query_returns_empty(self, query, sample_records):
        assert FuzzyMatcher().match(query, sample_records) == []

    def test_no_records_returns_empty(self):
        assert FuzzyMatcher().match("kyoto", []) == []

    def test_threshold_invariant(self, sample_records):
        """Every candidate is within the threshold."""
        matcher = FuzzyMatcher()
        for query in ["kyo", "japn", "beach", "lagoon", "culture", "bora", "xyz"]:
            for candidate in matcher.match(query, sample_records):
                assert candidate.distance <= 0.4

    def test_stricter_threshold_excludes_typos(self, kyoto):
        assert FuzzyMatcher(threshold=0.1).match("kioto", [kyoto]) == []


class TestOrdering:
    """Test candidate ordering."""

    def test_sorted_by_distance(self, sample_records):
        candidates = FuzzyMatcher().match("bora bora", sample_records)
        distances = [candidate.distance for candidate in candidates]

        assert distances == sorted(distances)
        assert candidates[0].record.id == "bora-bora"

    def test_ties_keep_dataset_order(self):
        first = DestinationRecord(id="a", name="Lisbon", description="coast")
        second = DestinationRecord(id="b", name="Lisbon", description="hills")

        candidates = FuzzyMatcher().match("lisbon", [first, second])

        assert [c.record.id for c in candidates] == ["a", "b"]
        assert [c.position for c in candidates] == [0, 1]


class TestErrors:
    """Test failure wrapping."""

    def test_library_error_becomes_match_failure(self, kyoto):
        matcher = FuzzyMatcher()
        with patch(
            "destination_search.search.fuzzy_matcher.fuzz.ratio",
            side_effect=RuntimeError("boom"),
        ):
            with pytest.raises(MatchFailureException) as exc_info:
                matcher.match("kioto", [kyoto])

        assert exc_info.value.details["query"] == "kioto"
        assert "boom" in exc_info.value.message


def test_get_stats():
    stats = FuzzyMatcher().get_stats()

    assert stats["threshold"] == 0.4
    assert stats["keys"] == ["description", "name", "categories"]
    assert stats["algorithm"] == "rapidfuzz"
