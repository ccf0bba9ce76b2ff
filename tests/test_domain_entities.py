"""
Tests for domain entities.
"""

import pytest

from destination_search.domain.entities import (
    CATEGORY_WEIGHTS,
    Category,
    DestinationRecord,
    MatchCandidate,
    MatchedField,
    RankedResult,
    build_weight_table,
)


class TestCategory:
    """Test category tag parsing."""

    def test_parse_known_tag(self):
        assert Category.parse("culture") is Category.CULTURE

    def test_parse_is_case_and_space_tolerant(self):
        assert Category.parse(" Nature ") is Category.NATURE

    def test_parse_unknown_tag(self):
        assert Category.parse("nightlife") is None

    @pytest.mark.parametrize("tag", [5, None, {"name": "culture"}, ["culture"]])
    def test_parse_non_string_raises(self, tag):
        with pytest.raises(TypeError):
            Category.parse(tag)


class TestCategoryWeights:
    """Test the static weight table."""

    def test_weights(self):
        assert CATEGORY_WEIGHTS == {
            Category.CULTURE: 0.30,
            Category.NATURE: 0.25,
            Category.ADVENTURE: 0.20,
            Category.RELAXATION: 0.15,
            Category.GASTRONOMY: 0.10,
        }

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            CATEGORY_WEIGHTS[Category.CULTURE] = 1.0

    def test_negative_weight_rejected(self):
        with pytest.raises(ValueError):
            build_weight_table({Category.CULTURE: -0.1})


class TestDestinationRecord:
    """Test DestinationRecord."""

    def test_name_required(self):
        with pytest.raises(ValueError):
            DestinationRecord(id="x", name="")

    def test_is_immutable(self, kyoto):
        with pytest.raises(AttributeError):
            kyoto.name = "Osaka"

    def test_image_fallback(self, kyoto):
        assert kyoto.image_or("images/placeholder.png") == "images/placeholder.png"

        with_image = DestinationRecord(id="j", name="Japan", image_url="images/japan.jpg")
        assert with_image.image_or("images/placeholder.png") == "images/japan.jpg"

    def test_to_dict(self, kyoto):
        data = kyoto.to_dict()

        assert data["name"] == "Kyoto"
        assert data["categories"] == ["culture", "nature"]
        assert data["imageUrl"] is None
        assert data["group"] == "temples"


class TestMatchCandidate:
    """Test base score inversion."""

    def test_base_score_inverts_distance(self, kyoto):
        assert MatchCandidate(record=kyoto, distance=0.25).base_score == pytest.approx(0.75)

    def test_exact_match_scores_one(self, kyoto):
        assert MatchCandidate(record=kyoto, distance=0.0).base_score == 1.0

    def test_missing_distance_is_worst_case(self, kyoto):
        assert MatchCandidate(record=kyoto, distance=None).base_score == 0.0

    def test_distance_is_clamped(self, kyoto):
        assert MatchCandidate(record=kyoto, distance=1.7).base_score == 0.0
        assert MatchCandidate(record=kyoto, distance=-0.5).base_score == 1.0


class TestRankedResult:
    """Test RankedResult."""

    def test_percent_rounds(self, kyoto):
        candidate = MatchCandidate(record=kyoto, distance=0.2)
        result = RankedResult(candidate=candidate, score=1.3512)

        assert result.percent == 135
        assert result.record is kyoto

    def test_to_dict(self, kyoto):
        candidate = MatchCandidate(
            record=kyoto, distance=0.2, matched_field=MatchedField.NAME
        )
        data = RankedResult(candidate=candidate, score=1.35).to_dict()

        assert data["name"] == "Kyoto"
        assert data["_relevance"]["percent"] == 135
        assert data["_relevance"]["matched_field"] == "name"
        assert data["_relevance"]["distance"] == 0.2
