"""Shared data types for litdedupe.

This package contains the record and detection dataclasses consumed across
the engine, plus boundary validation for untrusted record dicts.

Domain-specific types live closer to their consumers:
- Similarity results → litdedupe.scoring.models
- Cluster types → litdedupe.clustering.models
"""

from litdedupe.models.detections import (
    DetectionStatus,
    DuplicateDetection,
    compute_detection_id,
)
from litdedupe.models.records import (
    RECORD_CONTENT_FIELDS,
    BibliographicRecord,
    MergedRecord,
    Provenance,
    PublicationDate,
)
from litdedupe.models.validation import (
    RecordValidationError,
    record_from_dict,
    validate_record_dict,
)

__all__ = [
    # Record models
    "RECORD_CONTENT_FIELDS",
    "BibliographicRecord",
    "MergedRecord",
    "Provenance",
    "PublicationDate",
    # Detections
    "DetectionStatus",
    "DuplicateDetection",
    "compute_detection_id",
    # Validation
    "RecordValidationError",
    "record_from_dict",
    "validate_record_dict",
]
