"""
Domain entities for destination search.

Core business objects representing destinations, category weights and
per-query match results. These entities are framework-agnostic.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional, Tuple


class Category(str, Enum):
    """Closed set of thematic category tags."""

    CULTURE = "culture"
    NATURE = "nature"
    ADVENTURE = "adventure"
    RELAXATION = "relaxation"
    GASTRONOMY = "gastronomy"

    @classmethod
    def parse(cls, tag: Any) -> Optional["Category"]:
        """
        Resolve a raw dataset tag to a known category.

        Args:
            tag: Raw tag value from the dataset

        Returns:
            The matching Category, or None for an unknown tag

        Raises:
            TypeError: If the tag is not a string (malformed data)
        """
        if not isinstance(tag, str):
            raise TypeError(f"Category tag must be a string, got {type(tag).__name__}")
        try:
            return cls(tag.strip().lower())
        except ValueError:
            return None


class MatchedField(str, Enum):
    """Record fields searched by the fuzzy matcher."""

    DESCRIPTION = "description"
    NAME = "name"
    CATEGORIES = "categories"


CategoryWeightTable = Mapping[Category, float]


def build_weight_table(weights: Mapping[Category, float]) -> CategoryWeightTable:
    """
    Build a read-only category weight table.

    Args:
        weights: Mapping of category to additive weight

    Returns:
        Immutable view of the weights

    Raises:
        ValueError: If any weight is negative
    """
    table = {}
    for category, weight in weights.items():
        if weight < 0:
            raise ValueError(f"Weight for {category.value} must be non-negative")
        table[Category(category)] = float(weight)
    return MappingProxyType(table)


CATEGORY_WEIGHTS: CategoryWeightTable = build_weight_table(
    {
        Category.CULTURE: 0.30,
        Category.NATURE: 0.25,
        Category.ADVENTURE: 0.20,
        Category.RELAXATION: 0.15,
        Category.GASTRONOMY: 0.10,
    }
)


@dataclass(frozen=True)
class DestinationRecord:
    """
    Value object for a single destination in the dataset.

    Categories are kept as found in the dataset; interpretation of
    the tags is left to the scorer.
    """

    id: str
    name: str
    description: Optional[str] = None
    categories: Tuple[Any, ...] = ()
    image_url: Optional[str] = None
    group: Optional[str] = None

    def __post_init__(self):
        """Validate record on creation."""
        if not self.name or not isinstance(self.name, str):
            raise ValueError("Destination name is required")

    def image_or(self, placeholder: str) -> str:
        """Return the image URL, falling back to the placeholder asset."""
        return self.image_url or placeholder

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "categories": [str(tag) for tag in self.categories],
            "imageUrl": self.image_url,
            "group": self.group,
        }


@dataclass(frozen=True)
class MatchCandidate:
    """
    A record matched by the fuzzy matcher.

    Attributes:
        record: The matched destination
        distance: Match distance (0 = identical, 1 = unrelated), None if unknown
        matched_field: Field that produced the best match
        position: Index in the matcher's output order
    """

    record: DestinationRecord
    distance: Optional[float]
    matched_field: Optional[MatchedField] = None
    position: int = 0

    @property
    def base_score(self) -> float:
        """Inverted distance; a missing distance counts as worst case."""
        distance = 1.0 if self.distance is None else self.distance
        distance = min(max(distance, 0.0), 1.0)
        return 1.0 - distance


@dataclass(frozen=True)
class RankedResult:
    """Match candidate extended with its final combined score."""

    candidate: MatchCandidate
    score: float
    breakdown: dict = field(default_factory=dict, compare=False)

    @property
    def record(self) -> DestinationRecord:
        return self.candidate.record

    @property
    def percent(self) -> int:
        """Score formatted as an integer percentage."""
        return round(self.score * 100)

    def to_dict(self) -> dict:
        """Convert to dictionary for API response."""
        result = self.record.to_dict()
        result["_relevance"] = {
            "score": round(self.score, 4),
            "percent": self.percent,
            "distance": (
                round(self.candidate.distance, 4)
                if self.candidate.distance is not None
                else None
            ),
            "matched_field": (
                self.candidate.matched_field.value
                if self.candidate.matched_field
                else None
            ),
        }
        return result
