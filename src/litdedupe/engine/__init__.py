"""Detection run orchestration.

This package provides the batch and incremental runners, plus their
configuration and result types.
"""

from litdedupe.engine.config import DetectionConfig, DetectionResult, MatchResult
from litdedupe.engine.runner import run_detection, run_matching

__all__ = [
    "DetectionConfig",
    "DetectionResult",
    "MatchResult",
    "run_detection",
    "run_matching",
]
