"""Collapse a duplicate cluster into one canonical record."""

from collections.abc import Sequence

from litdedupe.clustering import DuplicateCluster
from litdedupe.models import RECORD_CONTENT_FIELDS, BibliographicRecord, MergedRecord
from litdedupe.utils import get_iso_timestamp

__all__ = [
    "AUTO_MERGED",
    "completeness_score",
    "select_primary",
    "merge_records",
    "merge_cluster",
]

AUTO_MERGED = "auto_merged"


def completeness_score(record: BibliographicRecord) -> float:
    """Share of content fields that are non-empty.

    Parameters
    ----------
    record : BibliographicRecord
        Record to score.

    Returns
    -------
    float
        Non-empty count of title, authors, abstract, journal, doi, pmid and
        publication_date, divided by 7.
    """
    return record.filled_field_count() / len(RECORD_CONTENT_FIELDS)


def select_primary(records: Sequence[BibliographicRecord]) -> BibliographicRecord:
    """Select the most complete record of a cluster.

    Parameters
    ----------
    records : Sequence[BibliographicRecord]
        Cluster records.

    Returns
    -------
    BibliographicRecord
        Record with the highest completeness; the first one wins ties.

    Raises
    ------
    ValueError
        If records list is empty.
    """
    if not records:
        raise ValueError("Cannot select primary from empty records list")

    return records[_primary_index(records)]


def merge_records(
    records: Sequence[BibliographicRecord],
    *,
    merged_at: str | None = None,
) -> BibliographicRecord | None:
    """Merge duplicate records into one canonical record.

    Parameters
    ----------
    records : Sequence[BibliographicRecord]
        Cluster members in cluster order.
    merged_at : str | None, optional
        Merge timestamp; current UTC time if None.

    Returns
    -------
    BibliographicRecord | None
        None for an empty cluster, the record itself for a single-record
        cluster, otherwise a MergedRecord.

    Notes
    -----
    Merge rules, applied over the primary (see select_primary):

    1. Empty primary fields are filled from the first other member, in
       cluster order, that has the field.
    2. Authors are the union across the cluster, primary first, deduplicated
       by exact string equality only.
    3. The longest abstract in the cluster wins, earliest on ties.

    The merged record keeps the primary's id and provenance.
    """
    if not records:
        return None
    if len(records) == 1:
        return records[0]

    primary_index = _primary_index(records)
    primary = records[primary_index]
    donors = [r for i, r in enumerate(records) if i != primary_index]

    values = {name: getattr(primary, name) for name in RECORD_CONTENT_FIELDS}

    for donor in donors:
        for name in RECORD_CONTENT_FIELDS:
            if not values[name] and donor.has_value(name):
                values[name] = getattr(donor, name)

    values["authors"] = _union_authors([primary, *donors])
    values["abstract"] = _longest_abstract([primary, *donors])

    return MergedRecord(
        id=primary.id,
        provenance=primary.provenance,
        merged_from=tuple(r.id for r in records),
        merged_at=merged_at or get_iso_timestamp(),
        resolution=AUTO_MERGED,
        **values,
    )


def merge_cluster(
    cluster: DuplicateCluster,
    *,
    merged_at: str | None = None,
) -> BibliographicRecord | None:
    """Merge a group produced by the batch clusterer.

    Parameters
    ----------
    cluster : DuplicateCluster
        Duplicate group, anchor first.
    merged_at : str | None, optional
        Merge timestamp; current UTC time if None.

    Returns
    -------
    BibliographicRecord | None
        See merge_records.
    """
    return merge_records(cluster.records, merged_at=merged_at)


def _union_authors(records: list[BibliographicRecord]) -> tuple[str, ...]:
    authors: dict[str, None] = {}
    for record in records:
        for name in record.authors:
            authors.setdefault(name, None)
    return tuple(authors)


def _longest_abstract(records: list[BibliographicRecord]) -> str | None:
    best: str | None = None
    for record in records:
        if record.abstract and len(record.abstract) > len(best or ""):
            best = record.abstract
    return best


def _primary_index(records: Sequence[BibliographicRecord]) -> int:
    # max() returns the first maximal element
    return max(range(len(records)), key=lambda i: completeness_score(records[i]))
