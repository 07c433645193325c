"""Incremental matching of one record against a candidate pool."""

from collections.abc import Iterable

from litdedupe.models import BibliographicRecord, DuplicateDetection
from litdedupe.scoring import SimilarityResult, compare_records

__all__ = ["DEFAULT_THRESHOLD", "find_candidates", "describe_match"]

DEFAULT_THRESHOLD = 0.8


def find_candidates(
    new_record: BibliographicRecord,
    pool: Iterable[BibliographicRecord],
    threshold: float = DEFAULT_THRESHOLD,
) -> list[DuplicateDetection]:
    """Find likely duplicates of a new record in an existing pool.

    Parameters
    ----------
    new_record : BibliographicRecord
        Newly imported record.
    pool : Iterable[BibliographicRecord]
        Existing records to compare against.
    threshold : float, optional
        Minimum overall score (inclusive), by default 0.8.

    Returns
    -------
    list[DuplicateDetection]
        POTENTIAL detections sorted by descending score. Ties keep pool
        order.

    Notes
    -----
    Every pool member is scored; there is no blocking. A pool member that
    shares the new record's id is scored like any other record.
    """
    detections: list[DuplicateDetection] = []

    for index, candidate in enumerate(pool):
        similarity = compare_records(new_record, candidate)
        if similarity.score >= threshold:
            detections.append(
                DuplicateDetection.potential(
                    record_a_id=new_record.id,
                    record_b_id=candidate.id,
                    similarity_score=similarity.score,
                    matched_fields=similarity.matched_fields,
                    note=describe_match(similarity),
                    position=(index,),
                )
            )

    # sorted() is stable, so equal scores stay in pool order
    return sorted(detections, key=lambda d: -d.similarity_score)


def describe_match(similarity: SimilarityResult) -> str:
    """Build the reviewer note for an incremental match."""
    fields = ", ".join(similarity.matched_fields)
    return f"Detected {len(similarity.matched_fields)} matching fields: {fields}"
