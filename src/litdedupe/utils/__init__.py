"""Common utility functions for litdedupe.

This module consolidates shared utility functions used across the codebase,
including hashing and timestamps.
"""

from litdedupe.utils.hashing import (
    calculate_file_sha256,
    compute_short_id,
    format_sha256,
)
from litdedupe.utils.timestamps import get_iso_timestamp

__all__ = [
    "get_iso_timestamp",
    "calculate_file_sha256",
    "compute_short_id",
    "format_sha256",
]
