"""Pairwise similarity scoring.

Field comparators feed a weighted overall score with a DOI/PMID override.
"""

from litdedupe.scoring.comparators import (
    FIELD_CONFIGS,
    FieldConfig,
    jaccard_similarity,
    text_similarity,
)
from litdedupe.scoring.models import SimilarityResult
from litdedupe.scoring.scorer import compare_records, overall_score

__all__ = [
    # Models
    "SimilarityResult",
    # Comparators
    "FieldConfig",
    "FIELD_CONFIGS",
    "jaccard_similarity",
    "text_similarity",
    # Scoring
    "compare_records",
    "overall_score",
]
