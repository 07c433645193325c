"""Field comparators for pairwise scoring.

This module provides pure, deterministic functions for comparing bibliographic
record fields. Each comparator maps a pair of field values to a similarity in
[0.0, 1.0], or to None when the field is absent on either side. Absent fields
are excluded from the overall score and from its weight normalization.

All functions are locale-independent and reproducible.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from litdedupe.models import BibliographicRecord
from litdedupe.normalize import (
    normalize_author,
    normalize_text,
    parse_publication_date,
    trigrams,
    word_tokens,
)

# Type alias for comparator result: similarity, or None when not comparable
CompareResult = float | None

WORD_WEIGHT = 0.7
TRIGRAM_WEIGHT = 0.3
AUTHOR_MATCH_THRESHOLD = 0.8


@dataclass(frozen=True, slots=True)
class FieldConfig:
    """Configuration for a field comparator.

    Attributes
    ----------
    name : str
        Field name as reported in field scores (e.g., 'doi', 'title').
    weight : float
        Weight in the overall weighted average.
    threshold : float
        Minimum similarity for the field to count as matched.
    extractor : Callable[[BibliographicRecord, BibliographicRecord], dict[str, Any]]
        Function to extract comparison inputs from record pair.
    comparator : Callable[..., CompareResult]
        Comparison function.
    """

    name: str
    weight: float
    threshold: float
    extractor: Callable[[BibliographicRecord, BibliographicRecord], dict[str, Any]]
    comparator: Callable[..., CompareResult]

    def compare(
        self, record_a: BibliographicRecord, record_b: BibliographicRecord
    ) -> CompareResult:
        """Extract fields and run comparison.

        Parameters
        ----------
        record_a : BibliographicRecord
            First record.
        record_b : BibliographicRecord
            Second record.

        Returns
        -------
        CompareResult
            Similarity, or None when the field is absent on either side.
        """
        params = self.extractor(record_a, record_b)
        return self.comparator(**params)


def jaccard_similarity(set_a: set[str], set_b: set[str]) -> float:
    """Calculate Jaccard similarity between two sets.

    Parameters
    ----------
    set_a : set[str]
        First set.
    set_b : set[str]
        Second set.

    Returns
    -------
    float
        Jaccard similarity (0.0-1.0).

    Notes
    -----
    Jaccard = |A ∩ B| / |A ∪ B|

    When both sets are empty the result is 1.0 (agreement); when only one is
    empty it is 0.0.
    """
    if not set_a and not set_b:
        return 1.0
    if not set_a or not set_b:
        return 0.0

    return len(set_a & set_b) / len(set_a | set_b)


def text_similarity(text_a: str, text_b: str) -> float:
    """Blend word and character-trigram Jaccard similarity.

    Parameters
    ----------
    text_a : str
        First normalized text.
    text_b : str
        Second normalized text.

    Returns
    -------
    float
        1.0 for identical strings, 0.0 if either is empty, otherwise
        0.7 * word Jaccard + 0.3 * trigram Jaccard.
    """
    if not text_a or not text_b:
        return 0.0
    if text_a == text_b:
        return 1.0

    word_sim = jaccard_similarity(word_tokens(text_a), word_tokens(text_b))
    trigram_sim = jaccard_similarity(trigrams(text_a), trigrams(text_b))

    return WORD_WEIGHT * word_sim + TRIGRAM_WEIGHT * trigram_sim


def compare_identifier(id_a: str | None, id_b: str | None) -> CompareResult:
    """Compare an exact identifier (DOI or PMID).

    Parameters
    ----------
    id_a : str | None
        Identifier from first record.
    id_b : str | None
        Identifier from second record.

    Returns
    -------
    CompareResult
        1.0 if both present and equal ignoring case and surrounding
        whitespace, 0.0 if both present and different, None otherwise.
    """
    if not id_a or not id_b:
        return None

    id_a = id_a.strip().lower()
    id_b = id_b.strip().lower()
    if not id_a or not id_b:
        return None

    return 1.0 if id_a == id_b else 0.0


def compare_text(text_a: str | None, text_b: str | None) -> CompareResult:
    """Compare a fuzzy text field (title or journal).

    Parameters
    ----------
    text_a : str | None
        Raw text from first record.
    text_b : str | None
        Raw text from second record.

    Returns
    -------
    CompareResult
        Text similarity over normalized text, None if either is missing or
        normalizes to an empty string.
    """
    if not text_a or not text_b:
        return None

    normalized_a = normalize_text(text_a)
    normalized_b = normalize_text(text_b)
    if not normalized_a or not normalized_b:
        return None

    return text_similarity(normalized_a, normalized_b)


def compare_authors(authors_a: Sequence[str], authors_b: Sequence[str]) -> CompareResult:
    """Compare author lists.

    Parameters
    ----------
    authors_a : Sequence[str]
        Author names from first record.
    authors_b : Sequence[str]
        Author names from second record.

    Returns
    -------
    CompareResult
        Share of A names that have some B name with text similarity above
        0.8, divided by the longer list length. Names that normalize to an
        empty string (bare initials) are dropped first. None if either list
        is then empty.

    Notes
    -----
    Each A name is checked independently against every B name; several A
    names may match the same B name. Dividing by max(|A|, |B|) keeps the
    value symmetric for the common cases.
    """
    normalized_a = [n for n in map(normalize_author, authors_a) if n]
    normalized_b = [n for n in map(normalize_author, authors_b) if n]
    if not normalized_a or not normalized_b:
        return None

    matches = sum(
        1
        for name_a in normalized_a
        if any(text_similarity(name_a, name_b) > AUTHOR_MATCH_THRESHOLD for name_b in normalized_b)
    )

    return matches / max(len(normalized_a), len(normalized_b))


def compare_publication_date(date_a: str | None, date_b: str | None) -> CompareResult:
    """Compare publication dates at year/month precision.

    Parameters
    ----------
    date_a : str | None
        Raw date from first record.
    date_b : str | None
        Raw date from second record.

    Returns
    -------
    CompareResult
        1.0 same year and month, 0.9 same year, 0.7 adjacent years,
        0.0 otherwise. None if either date is missing or unparsable.

    Notes
    -----
    Year-only dates carry month None, so two year-only dates of the same
    year count as the same month.
    """
    parsed_a = parse_publication_date(date_a)
    parsed_b = parse_publication_date(date_b)
    if parsed_a is None or parsed_b is None:
        return None

    if parsed_a.year == parsed_b.year:
        return 1.0 if parsed_a.month == parsed_b.month else 0.9

    if abs(parsed_a.year - parsed_b.year) == 1:
        return 0.7

    return 0.0


# ---------------------------------------------------------------------------
# Field extractors - map record pairs to comparator arguments
# ---------------------------------------------------------------------------


def _extract_doi(a: BibliographicRecord, b: BibliographicRecord) -> dict[str, Any]:
    return {"id_a": a.doi, "id_b": b.doi}


def _extract_pmid(a: BibliographicRecord, b: BibliographicRecord) -> dict[str, Any]:
    return {"id_a": a.pmid, "id_b": b.pmid}


def _extract_title(a: BibliographicRecord, b: BibliographicRecord) -> dict[str, Any]:
    return {"text_a": a.title, "text_b": b.title}


def _extract_authors(a: BibliographicRecord, b: BibliographicRecord) -> dict[str, Any]:
    return {"authors_a": a.authors, "authors_b": b.authors}


def _extract_journal(a: BibliographicRecord, b: BibliographicRecord) -> dict[str, Any]:
    return {"text_a": a.journal, "text_b": b.journal}


def _extract_publication_date(a: BibliographicRecord, b: BibliographicRecord) -> dict[str, Any]:
    return {"date_a": a.publication_date, "date_b": b.publication_date}


# ---------------------------------------------------------------------------
# Field registry - ordered tuple for deterministic iteration
# ---------------------------------------------------------------------------


FIELD_CONFIGS: tuple[FieldConfig, ...] = (
    FieldConfig(
        name="doi",
        weight=0.05,
        threshold=1.0,
        extractor=_extract_doi,
        comparator=compare_identifier,
    ),
    FieldConfig(
        name="pmid",
        weight=0.05,
        threshold=1.0,
        extractor=_extract_pmid,
        comparator=compare_identifier,
    ),
    FieldConfig(
        name="title",
        weight=0.40,
        threshold=0.85,
        extractor=_extract_title,
        comparator=compare_text,
    ),
    FieldConfig(
        name="authors",
        weight=0.25,
        threshold=0.75,
        extractor=_extract_authors,
        comparator=compare_authors,
    ),
    FieldConfig(
        name="journal",
        weight=0.15,
        threshold=0.80,
        extractor=_extract_journal,
        comparator=compare_text,
    ),
    FieldConfig(
        name="publication_date",
        weight=0.10,
        threshold=0.90,
        extractor=_extract_publication_date,
        comparator=compare_publication_date,
    ),
)

# Fields whose exact agreement forces an overall score of 1.0
OVERRIDE_FIELDS: frozenset[str] = frozenset({"doi", "pmid"})
