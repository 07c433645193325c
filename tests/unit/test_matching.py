"""Tests for incremental matching against a record pool."""

from collections.abc import Callable

import pytest

from litdedupe.matching import describe_match, find_candidates
from litdedupe.models import BibliographicRecord, DetectionStatus, compute_detection_id
from litdedupe.scoring import SimilarityResult

TITLE = "Telemedicine for chronic heart failure"


@pytest.fixture
def probe(make_record: Callable[..., BibliographicRecord]) -> BibliographicRecord:
    """Newly imported record used as the probe in every test."""
    return make_record("new", title=TITLE, doi="10.1/probe")


@pytest.mark.unit
def test_returns_potential_detections_for_matches(
    probe: BibliographicRecord, make_record: Callable[..., BibliographicRecord]
) -> None:
    """Matching pool records become POTENTIAL detections."""
    pool = [
        make_record("p1", title=TITLE.upper(), doi="10.1/PROBE"),
        make_record("p2", title="Gut microbiome and depression"),
    ]

    detections = find_candidates(probe, pool)

    assert len(detections) == 1
    detection = detections[0]
    assert detection.record_a_id == "new"
    assert detection.record_b_id == "p1"
    assert detection.similarity_score == 1.0
    assert detection.matched_fields == ("doi", "title")
    assert detection.status is DetectionStatus.POTENTIAL
    assert detection.detection_id == compute_detection_id("new", "p1", (0,))
    assert detection.note == "Detected 2 matching fields: doi, title"


@pytest.mark.unit
def test_sorted_by_descending_score(
    probe: BibliographicRecord, make_record: Callable[..., BibliographicRecord]
) -> None:
    """Better matches come first regardless of pool order."""
    pool = [
        make_record("weaker", title=TITLE, doi="10.1/other"),
        make_record("exact", title=TITLE, doi="10.1/probe"),
    ]

    detections = find_candidates(probe, pool)

    assert [d.record_b_id for d in detections] == ["exact", "weaker"]
    assert detections[0].similarity_score > detections[1].similarity_score


@pytest.mark.unit
def test_ties_keep_pool_order(
    probe: BibliographicRecord, make_record: Callable[..., BibliographicRecord]
) -> None:
    """Equal scores are returned in pool order."""
    pool = [make_record(rid, title=TITLE, doi="10.1/probe") for rid in ("c", "a", "b")]

    detections = find_candidates(probe, pool)

    assert [d.record_b_id for d in detections] == ["c", "a", "b"]


@pytest.mark.unit
def test_threshold_is_inclusive(
    probe: BibliographicRecord, make_record: Callable[..., BibliographicRecord]
) -> None:
    """A score exactly at the threshold is reported."""
    candidate = make_record("p", title=TITLE, doi="10.1/other")
    score = round(0.40 / 0.45, 6)

    assert len(find_candidates(probe, [candidate], threshold=score)) == 1
    assert find_candidates(probe, [candidate], threshold=score + 1e-6) == []


@pytest.mark.unit
def test_empty_pool_and_no_match(
    probe: BibliographicRecord, make_record: Callable[..., BibliographicRecord]
) -> None:
    """No detections for an empty pool or a pool without matches."""
    assert find_candidates(probe, []) == []
    assert find_candidates(probe, [make_record("p", title="Unrelated study")]) == []


@pytest.mark.unit
def test_pool_may_be_any_iterable(
    probe: BibliographicRecord, make_record: Callable[..., BibliographicRecord]
) -> None:
    """Generators are consumed once."""
    pool = (make_record(f"p{i}", title=TITLE, doi="10.1/probe") for i in range(3))

    assert len(find_candidates(probe, pool)) == 3


@pytest.mark.unit
def test_pool_record_with_same_id_is_scored(probe: BibliographicRecord) -> None:
    """The probe itself is not filtered out of the pool."""
    detections = find_candidates(probe, [probe])

    assert [d.record_b_id for d in detections] == ["new"]


@pytest.mark.unit
def test_describe_match() -> None:
    """The note lists the matched fields in registry order."""
    similarity = SimilarityResult(score=0.9, matched_fields=("title", "authors"))

    assert describe_match(similarity) == "Detected 2 matching fields: title, authors"


@pytest.mark.unit
def test_repeated_pool_ids_get_distinct_detection_ids(
    probe: BibliographicRecord, make_record: Callable[..., BibliographicRecord]
) -> None:
    """Two pool records sharing an id yield two distinguishable detections."""
    pool = [
        make_record("p1", title=TITLE, doi="10.1/probe"),
        make_record("p1", title=TITLE, doi="10.1/probe"),
    ]

    detections = find_candidates(probe, pool)

    assert [d.record_b_id for d in detections] == ["p1", "p1"]
    assert detections[0].detection_id != detections[1].detection_id
