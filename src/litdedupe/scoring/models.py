"""Data models for pairwise scoring."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class SimilarityResult:
    """Similarity of a record pair with per-field explainability.

    Attributes
    ----------
    score : float
        Overall weighted similarity (0.0-1.0).
    field_scores : dict[str, float]
        Similarity per field present on both records, in registry order.
    matched_fields : tuple[str, ...]
        Fields whose similarity met their field-specific threshold.
    """

    score: float
    field_scores: dict[str, float] = field(default_factory=dict)
    matched_fields: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "score": self.score,
            "field_scores": dict(self.field_scores),
            "matched_fields": list(self.matched_fields),
        }
