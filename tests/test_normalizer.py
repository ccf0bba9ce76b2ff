"""
Tests for query normalization.
"""

import pytest

from destination_search.search.normalizer import normalize, strip_diacritics


class TestNormalize:
    """Test normalize()."""

    def test_lowercases(self):
        assert normalize("KYOTO") == "kyoto"

    def test_strips_diacritics(self):
        assert normalize("São Tomé") == "sao tome"
        assert normalize("Kyōto") == "kyoto"

    def test_collapses_and_trims_whitespace(self):
        assert normalize("  Ilha \t  Grande \n") == "ilha grande"

    def test_empty_and_none(self):
        assert normalize("") == ""
        assert normalize(None) == ""
        assert normalize("   ") == ""

    @pytest.mark.parametrize(
        "text",
        [
            "Kyoto",
            "  São   Paulo ",
            "Ångström Bay",
            "école",
            "İstanbul",
            "ß straße",
            "\u0301 lone mark",
            "",
        ],
    )
    def test_idempotent(self, text):
        once = normalize(text)
        assert normalize(once) == once

    def test_combining_only_input(self):
        assert normalize("\u0301\u0300") == ""


class TestStripDiacritics:
    """Test strip_diacritics()."""

    def test_precomposed_and_decomposed_agree(self):
        assert strip_diacritics("\u00e9") == strip_diacritics("e\u0301") == "e"

    def test_leaves_plain_text(self):
        assert strip_diacritics("plain text") == "plain text"
