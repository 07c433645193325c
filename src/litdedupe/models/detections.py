"""Duplicate detection data models.

A DuplicateDetection links two records that scored above a threshold. The
engine only ever creates detections as POTENTIAL; confirming or rejecting
them is a reviewer's job outside the engine.
"""

from dataclasses import dataclass, replace
from enum import StrEnum
from typing import Any

from litdedupe.utils import compute_short_id


class DetectionStatus(StrEnum):
    """Review status of a duplicate detection.

    Attributes
    ----------
    POTENTIAL : str
        Detected by the engine, not yet reviewed.
    CONFIRMED : str
        Reviewer confirmed the pair as duplicates.
    REJECTED : str
        Reviewer rejected the pair.
    """

    POTENTIAL = "potential"
    CONFIRMED = "confirmed"
    REJECTED = "rejected"


@dataclass(frozen=True)
class DuplicateDetection:
    """A scored duplicate candidate pair.

    Attributes
    ----------
    detection_id : str
        Deterministic identifier derived from the ordered pair of record ids
        and the pair's position in the scan.
    record_a_id : str
        Id of the probe or anchor record.
    record_b_id : str
        Id of the candidate record.
    similarity_score : float
        Overall similarity score (0.0-1.0).
    matched_fields : tuple[str, ...]
        Fields whose similarity cleared their own threshold.
    status : DetectionStatus
        Review status.
    note : str
        Human-readable summary.
    """

    detection_id: str
    record_a_id: str
    record_b_id: str
    similarity_score: float
    matched_fields: tuple[str, ...]
    status: DetectionStatus = DetectionStatus.POTENTIAL
    note: str = ""

    @classmethod
    def potential(
        cls,
        record_a_id: str,
        record_b_id: str,
        similarity_score: float,
        matched_fields: tuple[str, ...],
        note: str,
        position: tuple[int, ...] = (),
    ) -> "DuplicateDetection":
        """Create a new detection in POTENTIAL status.

        position locates the pair in the scan that produced it (see
        compute_detection_id).
        """
        return cls(
            detection_id=compute_detection_id(record_a_id, record_b_id, position),
            record_a_id=record_a_id,
            record_b_id=record_b_id,
            similarity_score=similarity_score,
            matched_fields=matched_fields,
            status=DetectionStatus.POTENTIAL,
            note=note,
        )

    def with_status(self, status: DetectionStatus | str) -> "DuplicateDetection":
        """Return a copy carrying a reviewer-assigned status."""
        return replace(self, status=DetectionStatus(status))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "detection_id": self.detection_id,
            "record_a_id": self.record_a_id,
            "record_b_id": self.record_b_id,
            "similarity_score": self.similarity_score,
            "matched_fields": list(self.matched_fields),
            "status": self.status.value,
            "note": self.note,
        }


def compute_detection_id(
    record_a_id: str,
    record_b_id: str,
    position: tuple[int, ...] = (),
) -> str:
    """Compute deterministic detection ID for an ordered record pair.

    Record ids are not required to be unique within an input, so the pair
    position keeps detections of same-id records apart.

    Parameters
    ----------
    record_a_id : str
        Probe or anchor record id.
    record_b_id : str
        Candidate record id.
    position : tuple[int, ...], optional
        Indexes of the pair in the scan: (anchor, member) for batch
        clustering, (pool index,) for incremental matching.

    Returns
    -------
    str
        Detection ID in format "dup:{sha256_prefix}".
    """
    return compute_short_id("dup", (record_a_id, record_b_id, *map(str, position)))
