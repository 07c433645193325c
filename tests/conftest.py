"""Pytest configuration and fixtures for test suite."""

import json
import sys
from collections.abc import Callable, Iterable, Sequence
from pathlib import Path
from typing import Any

import pytest

# Add src directory to path for imports
SRC_PATH = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(SRC_PATH))

from litdedupe.models import BibliographicRecord, Provenance  # noqa: E402


@pytest.fixture
def make_record() -> Callable[..., BibliographicRecord]:
    """Factory for test records with minimal boilerplate.

    Every content field defaults to absent; pass only what the test
    is about.
    """

    def _factory(
        rid: str = "rec_001",
        *,
        title: str | None = None,
        authors: Sequence[str] = (),
        abstract: str | None = None,
        journal: str | None = None,
        doi: str | None = None,
        pmid: str | None = None,
        publication_date: str | None = None,
        source: str | None = None,
    ) -> BibliographicRecord:
        return BibliographicRecord(
            id=rid,
            title=title,
            authors=tuple(authors),
            abstract=abstract,
            journal=journal,
            doi=doi,
            pmid=pmid,
            publication_date=publication_date,
            provenance=Provenance(source=source) if source else None,
        )

    return _factory


@pytest.fixture
def write_lines() -> Callable[[Path, Iterable[Any]], Path]:
    """Write dicts (as JSON) or raw strings as lines of a file."""

    def _write(path: Path, rows: Iterable[Any]) -> Path:
        lines = [row if isinstance(row, str) else json.dumps(row) for row in rows]
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _write


@pytest.fixture
def sample_rows() -> list[dict[str, Any]]:
    """Small collection with one duplicate pair, one DOI pair and a singleton.

    - rec_1 / rec_2: same article, one with a trailing period and an
      extra abstract
    - rec_3 / rec_4: different titles sharing a DOI
    - rec_5: unrelated
    """
    return [
        {
            "id": "rec_1",
            "title": "Telemedicine for chronic heart failure management",
            "authors": ["Smith, John", "Doe, Alice"],
            "journal": "Journal of Telemedicine",
            "publication_date": "2021-03-15",
            "provenance": {"source": "pubmed"},
        },
        {
            "id": "rec_2",
            "title": "Telemedicine for chronic heart failure management.",
            "authors": ["Smith, John", "Doe, Alice"],
            "abstract": "Background: telemonitoring of chronic heart failure.",
            "journal": "Journal of Telemedicine",
            "publication_date": "2021-03",
            "provenance": {"source": "embase"},
        },
        {
            "id": "rec_3",
            "title": "Machine learning for sepsis prediction",
            "doi": "10.1000/sepsis.42",
        },
        {
            "id": "rec_4",
            "title": "Gut microbiome and depression in adolescents",
            "doi": "10.1000/SEPSIS.42",
        },
        {
            "id": "rec_5",
            "title": "Urban heat islands and cardiovascular mortality",
            "authors": ["Nguyen, Lan"],
            "journal": "Environmental Research",
            "publication_date": "2019",
        },
    ]
