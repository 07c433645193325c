"""Hashing utilities for litdedupe.

This module provides deterministic digests for output artifacts and for
identifiers derived from record ids.
"""

import hashlib
from collections.abc import Sequence
from pathlib import Path

__all__ = [
    "format_sha256",
    "calculate_file_sha256",
    "compute_short_id",
]


def format_sha256(hex_digest: str) -> str:
    """Format SHA256 hash with standard prefix.

    Parameters
    ----------
    hex_digest : str
        Raw hexadecimal digest.

    Returns
    -------
    str
        Formatted hash with "sha256:" prefix.
    """
    return f"sha256:{hex_digest}"


def calculate_file_sha256(path: Path) -> str:
    """Calculate SHA256 hash of file contents from file path.

    Parameters
    ----------
    path : Path
        Path to file.

    Returns
    -------
    str
        SHA256 hash with "sha256:" prefix.

    Raises
    ------
    FileNotFoundError
        If file does not exist.
    """
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    sha256_hash = hashlib.sha256()
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(8192), b""):
            sha256_hash.update(chunk)

    return format_sha256(sha256_hash.hexdigest())


def compute_short_id(prefix: str, parts: Sequence[str]) -> str:
    """Compute a short deterministic identifier from ordered parts.

    Parameters
    ----------
    prefix : str
        Identifier prefix (e.g., 'dup', 'c').
    parts : Sequence[str]
        Ordered components (usually record ids). Order is significant.

    Returns
    -------
    str
        Identifier in format "{prefix}:{sha256_prefix}" with 12 hex chars.
    """
    content = "\n".join(parts)
    hash_digest = hashlib.sha256(content.encode("utf-8")).hexdigest()
    return f"{prefix}:{hash_digest[:12]}"
