"""Convenience duplicate detection rules built on the scorer."""

from litdedupe.rules.factory import (
    MODERATE_THRESHOLD,
    STRONG_THRESHOLD,
    DetectionRules,
    build_detection_rules,
    classify_pair,
    is_exact_duplicate,
    is_moderate_duplicate,
    is_strong_duplicate,
)

__all__ = [
    "MODERATE_THRESHOLD",
    "STRONG_THRESHOLD",
    "DetectionRules",
    "build_detection_rules",
    "classify_pair",
    "is_exact_duplicate",
    "is_moderate_duplicate",
    "is_strong_duplicate",
]
