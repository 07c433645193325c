"""Data models for batch duplicate clustering."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from litdedupe.models import BibliographicRecord, DuplicateDetection
from litdedupe.utils import compute_short_id


@dataclass(frozen=True)
class DuplicateCluster:
    """Duplicate group produced by one clustering run.

    Attributes
    ----------
    cluster_id : str
        Deterministic cluster identifier.
    records : tuple[BibliographicRecord, ...]
        Anchor first, then members in scan order.
    similarity_score : float
        Highest anchor-vs-member score in the group.
    matched_fields : tuple[str, ...]
        Matched fields of the first member against the anchor.
    """

    cluster_id: str
    records: tuple[BibliographicRecord, ...]
    similarity_score: float = 0.0
    matched_fields: tuple[str, ...] = ()

    @property
    def anchor(self) -> BibliographicRecord:
        """Record that started the group."""
        return self.records[0]

    @property
    def record_ids(self) -> tuple[str, ...]:
        """Member ids in group order."""
        return tuple(r.id for r in self.records)

    def __len__(self) -> int:
        return len(self.records)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization.

        Records are referenced by id only.
        """
        return {
            "cluster_id": self.cluster_id,
            "anchor_id": self.anchor.id,
            "record_ids": list(self.record_ids),
            "similarity_score": self.similarity_score,
            "matched_fields": list(self.matched_fields),
        }


@dataclass
class ClusteringResult:
    """Output of a batch clustering run.

    Attributes
    ----------
    duplicate_groups : list[DuplicateCluster]
        Groups with more than one record, in anchor order.
    unique_records : list[BibliographicRecord]
        Records that matched no anchor and attracted no members.
    detections : list[DuplicateDetection]
        Every anchor-vs-member detection, in discovery order.
    """

    duplicate_groups: list[DuplicateCluster] = field(default_factory=list)
    unique_records: list[BibliographicRecord] = field(default_factory=list)
    detections: list[DuplicateDetection] = field(default_factory=list)

    @property
    def duplicate_record_count(self) -> int:
        """Number of records that belong to a duplicate group."""
        return sum(len(group) for group in self.duplicate_groups)


def compute_cluster_id(record_ids: Sequence[str]) -> str:
    """Compute deterministic cluster ID from member ids.

    Parameters
    ----------
    record_ids : Sequence[str]
        Record IDs in cluster.

    Returns
    -------
    str
        Cluster ID in format "c:{sha256_prefix}", independent of id order.
    """
    return compute_short_id("c", sorted(record_ids))
