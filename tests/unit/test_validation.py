"""Tests for record models and boundary validation."""

from typing import Any

import pytest

from litdedupe.models import (
    BibliographicRecord,
    DetectionStatus,
    DuplicateDetection,
    MergedRecord,
    Provenance,
    RecordValidationError,
    compute_detection_id,
    record_from_dict,
    validate_record_dict,
)
from litdedupe.models.validation import load_record_schema

# ---------------------------------------------------------------------------
# validate_record_dict
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_schema_is_draft_2020_12() -> None:
    """The bundled schema declares its dialect."""
    schema = load_record_schema()

    assert schema["$schema"] == "https://json-schema.org/draft/2020-12/schema"
    assert schema["required"] == ["id"]


@pytest.mark.unit
@pytest.mark.parametrize(
    "data",
    [
        pytest.param({"id": "r1"}, id="minimal"),
        pytest.param(
            {
                "id": "r1",
                "title": "T",
                "authors": ["Smith, John"],
                "abstract": None,
                "journal": "BMJ",
                "doi": "10.1/x",
                "pmid": "123",
                "publication_date": "2021-03",
                "provenance": {"source": "pubmed", "imported_at": "2024-01-01T00:00:00Z"},
            },
            id="full",
        ),
        pytest.param({"id": "r1", "pmid": 123}, id="numeric_pmid"),
        pytest.param({"id": "r1", "authors": None}, id="null_authors"),
        pytest.param({"id": "r1", "custom_tag": [1, 2]}, id="extra_keys"),
    ],
)
def test_valid_records_pass(data: dict[str, Any]) -> None:
    """Well-formed dicts validate silently."""
    validate_record_dict(data)


@pytest.mark.unit
@pytest.mark.parametrize(
    ("data", "path", "message"),
    [
        pytest.param({}, "<root>", "'id' is a required property", id="missing_id"),
        pytest.param({"id": ""}, "id", "''", id="empty_id"),
        pytest.param({"id": 5}, "id", "is not of type 'string'", id="numeric_id"),
        pytest.param({"id": "r", "title": 3}, "title", "is not of type", id="bad_title"),
        pytest.param(
            {"id": "r", "authors": ["A", 3]}, "authors/1", "is not of type 'string'", id="author"
        ),
        pytest.param(
            {"id": "r", "authors": "Smith, John"}, "authors", "is not of type", id="authors_str"
        ),
        pytest.param(
            {"id": "r", "provenance": {}}, "provenance", "'source' is a required", id="prov"
        ),
        pytest.param(["id"], "<root>", "is not of type 'object'", id="not_object"),
    ],
)
def test_invalid_records_raise_with_path(data: Any, path: str, message: str) -> None:
    """Errors name the offending JSON path."""
    with pytest.raises(RecordValidationError) as exc_info:
        validate_record_dict(data)

    assert exc_info.value.path == path
    assert message in str(exc_info.value)
    assert str(exc_info.value).startswith(f"{path}: ")


@pytest.mark.unit
def test_validation_error_is_value_error() -> None:
    """Callers can catch ValueError."""
    with pytest.raises(ValueError):
        validate_record_dict({})


# ---------------------------------------------------------------------------
# record_from_dict / to_dict
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_record_from_dict_builds_typed_record() -> None:
    """Lists become tuples, numeric PMIDs become strings, absent keys default."""
    record = record_from_dict(
        {
            "id": "r1",
            "title": "T",
            "authors": ["Smith, John", "Doe, Alice"],
            "pmid": 123,
            "provenance": {"source": "pubmed"},
        }
    )

    assert record == BibliographicRecord(
        id="r1",
        title="T",
        authors=("Smith, John", "Doe, Alice"),
        pmid="123",
        provenance=Provenance(source="pubmed"),
    )


@pytest.mark.unit
def test_record_from_dict_rejects_invalid() -> None:
    """Validation runs before construction."""
    with pytest.raises(RecordValidationError):
        record_from_dict({"title": "no id"})


@pytest.mark.unit
def test_to_dict_reads_back() -> None:
    """Serialized records validate and rebuild to an equal record."""
    record = BibliographicRecord(
        id="r1",
        title="T",
        authors=("A",),
        doi="10.1/x",
        publication_date="2021",
        provenance=Provenance(source="scopus", imported_at="2024-01-01T00:00:00Z"),
    )

    assert record_from_dict(record.to_dict()) == record


@pytest.mark.unit
def test_merged_record_dict_is_a_valid_record() -> None:
    """Merge metadata rides along as an extra key."""
    merged = MergedRecord(id="r1", title="T", merged_from=("r1", "r2"), merged_at="now")
    data = merged.to_dict()

    validate_record_dict(data)
    assert data["merge"]["merged_from"] == ["r1", "r2"]
    assert record_from_dict(data).id == "r1"


@pytest.mark.unit
def test_has_value_and_filled_field_count() -> None:
    """Empty strings and empty author tuples count as absent."""
    record = BibliographicRecord(id="r", title="", authors=(), journal="BMJ")

    assert not record.has_value("title")
    assert not record.has_value("authors")
    assert record.has_value("journal")
    assert record.filled_field_count() == 1


# ---------------------------------------------------------------------------
# Detections
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_detection_id_depends_on_pair_order() -> None:
    """Detection ids are deterministic for an ordered pair."""
    detection_id = compute_detection_id("a", "b")

    assert detection_id == compute_detection_id("a", "b")
    assert detection_id != compute_detection_id("b", "a")
    assert detection_id.startswith("dup:")


@pytest.mark.unit
def test_detection_status_transition() -> None:
    """with_status returns a copy; the original stays POTENTIAL."""
    detection = DuplicateDetection.potential("a", "b", 0.9, ("title",), "note")

    confirmed = detection.with_status("confirmed")

    assert detection.status is DetectionStatus.POTENTIAL
    assert confirmed.status is DetectionStatus.CONFIRMED
    assert confirmed.detection_id == detection.detection_id
    assert confirmed.to_dict()["status"] == "confirmed"


@pytest.mark.unit
def test_detection_status_rejects_unknown_value() -> None:
    """Only potential, confirmed and rejected are valid statuses."""
    detection = DuplicateDetection.potential("a", "b", 0.9, (), "")

    with pytest.raises(ValueError):
        detection.with_status("dismissed")


@pytest.mark.unit
def test_detection_id_includes_position() -> None:
    """The scan position is part of the id."""
    assert compute_detection_id("a", "b", (0, 1)) != compute_detection_id("a", "b", (0, 2))
    assert compute_detection_id("a", "b", (3,)) == compute_detection_id("a", "b", (3,))
