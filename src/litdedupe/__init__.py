"""Duplicate detection for bibliographic references.

This package provides:
- Data models (litdedupe.models): records, detections, boundary validation
- Parsing (litdedupe.parse): JSONL record ingestion
- Normalization (litdedupe.normalize): text and date normalization
- Scoring (litdedupe.scoring): weighted field similarity
- Matching (litdedupe.matching): incremental matching against a pool
- Clustering (litdedupe.clustering): anchor-based batch grouping
- Merge (litdedupe.merge): canonical record merging
- Rules (litdedupe.rules): preconfigured detection predicates
- Engine (litdedupe.engine): batch and incremental runners
- Audit (litdedupe.audit): structured event logging
- CLI (litdedupe.cli): command-line interface
- Public API (litdedupe.api): high-level convenience functions
"""

__version__ = "0.1.0"
__author__ = "Ennio Politi Lopes <enniolopes@gmail.com>"
__license__ = "MIT"

from litdedupe.api import (
    ParseError,
    cluster,
    compare,
    dedupe,
    find_candidates,
    merge,
    parse_file,
    write_jsonl,
)
from litdedupe.models import BibliographicRecord, DuplicateDetection, MergedRecord

__all__ = [
    "__version__",
    "__author__",
    "__license__",
    "BibliographicRecord",
    "DuplicateDetection",
    "MergedRecord",
    "parse_file",
    "write_jsonl",
    "compare",
    "find_candidates",
    "cluster",
    "merge",
    "dedupe",
    "ParseError",
]
