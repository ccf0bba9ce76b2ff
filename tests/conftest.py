"""
Test configuration and fixtures
"""

import asyncio
import json
from typing import List, Optional

import pytest

from destination_search.domain.entities import DestinationRecord
from destination_search.domain.exceptions import DatasetUnavailableException
from destination_search.repositories.destination_repository import IDestinationRepository
from destination_search.search.fuzzy_matcher import FuzzyMatcher
from destination_search.search.relevance_scorer import RelevanceScorer
from destination_search.services.search_service import DestinationSearchService
from destination_search.ui.page import Element


class StubRepository(IDestinationRepository):
    """In-memory repository counting loads, optionally failing or slow."""

    def __init__(
        self,
        records: List[DestinationRecord],
        fail: bool = False,
        delay: float = 0.0,
    ):
        self.records = records
        self.fail = fail
        self.delay = delay
        self.load_count = 0

    async def load_all(self) -> List[DestinationRecord]:
        self.load_count += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail:
            raise DatasetUnavailableException("stub", "network failure")
        return list(self.records)

    def get_stats(self) -> dict:
        return {"loaded": not self.fail and self.load_count > 0, "load_count": self.load_count}


@pytest.fixture
def kyoto() -> DestinationRecord:
    """The Kyoto destination used throughout the scenarios."""
    return DestinationRecord(
        id="kyoto",
        name="Kyoto",
        description="ancient temples and gardens",
        categories=("culture", "nature"),
        group="temples",
    )


@pytest.fixture
def sample_records(kyoto) -> List[DestinationRecord]:
    """Small destination set covering every group."""
    return [
        DestinationRecord(
            id="japan",
            name="Japan",
            description="Bullet trains and cherry blossoms",
            categories=("culture", "gastronomy"),
            image_url="images/japan.jpg",
            group="countries",
        ),
        kyoto,
        DestinationRecord(
            id="bora-bora",
            name="Bora Bora",
            description="Turquoise lagoon and overwater bungalows",
            categories=("relaxation",),
            group="beaches",
        ),
        DestinationRecord(
            id="copacabana",
            name="Copacabana Beach",
            categories=("relaxation", "gastronomy"),
            group="beaches",
        ),
    ]


@pytest.fixture
def sample_dataset() -> dict:
    """Raw dataset document as served to the repository."""
    return {
        "countries": [
            {
                "id": "japan",
                "name": "Japan",
                "description": "Bullet trains and cherry blossoms",
                "categories": ["culture", "gastronomy"],
                "imageUrl": "images/japan.jpg",
            }
        ],
        "temples": [
            {
                "name": "Kyoto",
                "description": "ancient temples and gardens",
                "categories": ["culture", "nature"],
            }
        ],
        "beaches": [
            {"name": "Bora Bora", "categories": ["relaxation"]},
        ],
        "unrelated": [{"name": "Ignored"}],
    }


@pytest.fixture
def dataset_file(tmp_path, sample_dataset) -> str:
    """Dataset written to a temporary JSON file."""
    path = tmp_path / "database.json"
    path.write_text(json.dumps(sample_dataset), encoding="utf-8")
    return str(path)


@pytest.fixture
def stub_repository(sample_records) -> StubRepository:
    return StubRepository(sample_records)


@pytest.fixture
def search_service(stub_repository) -> DestinationSearchService:
    """Search service over the in-memory sample records."""
    return DestinationSearchService(
        repository=stub_repository,
        matcher=FuzzyMatcher(threshold=0.4),
        scorer=RelevanceScorer(),
        min_length=3,
        top_n=2,
    )


def build_page(with_main: bool = True, with_container: bool = False, legacy_input: bool = False) -> Element:
    """
    Build a page with a header search input.

    Args:
        with_main: Include a <main> region
        with_container: Include an existing #results container
        legacy_input: Use the .nav-right input instead of #Research
    """
    page = Element("body")
    header = page.append_child(Element("header"))
    nav = header.append_child(Element("nav", classes=["nav-right"]))
    if legacy_input:
        nav.append_child(Element("input", attributes={"type": "text"}))
    else:
        nav.append_child(Element("input", id="Research", attributes={"type": "text"}))
    if with_main:
        main = page.append_child(Element("main"))
        if with_container:
            main.append_child(Element("div", id="results"))
    return page


@pytest.fixture
def page() -> Element:
    return build_page()


def make_service(
    records: List[DestinationRecord],
    fail: bool = False,
    delay: float = 0.0,
    top_n: Optional[int] = 2,
) -> DestinationSearchService:
    return DestinationSearchService(
        repository=StubRepository(records, fail=fail, delay=delay),
        matcher=FuzzyMatcher(threshold=0.4),
        scorer=RelevanceScorer(),
        min_length=3,
        top_n=top_n,
    )
