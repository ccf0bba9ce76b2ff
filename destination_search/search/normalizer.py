"""
Query normalization.

Canonicalizes free text so that case, accents and spacing do not
affect matching: "  São   Paulo " -> "sao paulo".
"""

import unicodedata
from typing import Optional


def strip_diacritics(text: str) -> str:
    """Decompose to NFD and drop combining marks."""
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def normalize(raw: Optional[str]) -> str:
    """
    Normalize text for fuzzy matching.

    - Convert to lowercase
    - Remove diacritics
    - Collapse internal whitespace and trim

    Idempotent: normalize(normalize(x)) == normalize(x).

    Examples:
        "Kyōto" -> "kyoto"
        "  Ilha   Grande " -> "ilha grande"
    """
    if not raw:
        return ""
    return " ".join(strip_diacritics(raw.lower()).split())
