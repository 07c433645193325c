"""Public API for duplicate detection.

This module provides the main public API for litdedupe, enabling:
- Parsing JSONL files into BibliographicRecord objects
- Exporting records to JSONL format
- Comparing, matching, clustering and merging records in memory
- Running the batch detection pipeline over a file
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import TYPE_CHECKING

from litdedupe.clustering import DEFAULT_THRESHOLD, ClusteringResult, cluster_records
from litdedupe.matching import find_candidates as _find_candidates
from litdedupe.merge import merge_records
from litdedupe.models import BibliographicRecord, DuplicateDetection
from litdedupe.parse.ingestion import ingest_file
from litdedupe.scoring import SimilarityResult, compare_records

if TYPE_CHECKING:
    from litdedupe.engine.config import DetectionResult

__all__ = [
    "parse_file",
    "write_jsonl",
    "compare",
    "find_candidates",
    "cluster",
    "merge",
    "dedupe",
    "ParseError",
]


class ParseError(Exception):
    """Raised when parsing fails."""

    def __init__(
        self,
        message: str,
        file: str | None = None,
    ) -> None:
        """Initialize parse error.

        Parameters
        ----------
        message : str
            Error message.
        file : str | None, optional
            File where error occurred.
        """
        super().__init__(message)
        self.file = file


def parse_file(
    path: str | Path,
    *,
    strict: bool = True,
) -> list[BibliographicRecord]:
    """Parse a JSONL file of records.

    Every line is validated against the bundled record schema.

    Parameters
    ----------
    path : str | Path
        Path to file to parse.
    strict : bool, optional
        If True, raise exception on any invalid line. If False, return
        whatever records could be parsed, by default True.

    Returns
    -------
    list[BibliographicRecord]
        Parsed records in file order.

    Raises
    ------
    ParseError
        If the file cannot be read, or any line is invalid and strict=True.
    FileNotFoundError
        If file does not exist.

    Examples
    --------
        >>> from litdedupe import parse_file
        >>> records = parse_file("records.jsonl")
        >>> for record in records:
        ...     print(record.title)
    """
    file_path = Path(path)

    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    records, result = ingest_file(file_path)

    if result.file_errors or (result.errors and strict):
        error_msg = "; ".join(result.errors[:3])
        raise ParseError(
            f"Failed to parse {file_path.name}: {error_msg}",
            file=str(file_path),
        )

    return records


def write_jsonl(
    records: Iterable[BibliographicRecord],
    path: str | Path,
    *,
    sort_keys: bool = True,
) -> None:
    """Write records to JSONL file (one JSON object per line).

    Output is deterministic with consistent field ordering and UTF-8 encoding.
    Files written here can be read back with parse_file.

    Parameters
    ----------
    records : Iterable[BibliographicRecord]
        Records to write.
    path : str | Path
        Output file path.
    sort_keys : bool, optional
        Whether to sort dictionary keys for deterministic output,
        by default True.
    """
    file_path = Path(path)

    with file_path.open("w", encoding="utf-8", newline="\n") as f:
        for record in records:
            json_str = json.dumps(
                record.to_dict(),
                ensure_ascii=False,
                sort_keys=sort_keys,
            )
            f.write(json_str + "\n")


def compare(record_a: BibliographicRecord, record_b: BibliographicRecord) -> SimilarityResult:
    """Score how likely two records describe the same publication.

    Examples
    --------
        >>> from litdedupe import compare
        >>> compare(record_a, record_b).score
        0.93
    """
    return compare_records(record_a, record_b)


def find_candidates(
    new_record: BibliographicRecord,
    pool: Iterable[BibliographicRecord],
    *,
    threshold: float = DEFAULT_THRESHOLD,
) -> list[DuplicateDetection]:
    """Find existing records that likely duplicate a new one.

    Parameters
    ----------
    new_record : BibliographicRecord
        Newly imported record.
    pool : Iterable[BibliographicRecord]
        Existing records.
    threshold : float, optional
        Minimum overall score (inclusive), by default 0.8.

    Returns
    -------
    list[DuplicateDetection]
        Detections sorted by descending score.
    """
    return _find_candidates(new_record, pool, threshold)


def cluster(
    records: Sequence[BibliographicRecord],
    *,
    threshold: float = DEFAULT_THRESHOLD,
    max_workers: int | None = None,
) -> ClusteringResult:
    """Group a record collection into duplicate groups and unique records.

    Parameters
    ----------
    records : Sequence[BibliographicRecord]
        Records to cluster; order determines anchors.
    threshold : float, optional
        Minimum overall score (inclusive), by default 0.8.
    max_workers : int | None, optional
        Thread pool size for scoring; None scores sequentially.

    Returns
    -------
    ClusteringResult
        Duplicate groups, unique records and detections.
    """
    return cluster_records(records, threshold, max_workers=max_workers)


def merge(records: Sequence[BibliographicRecord]) -> BibliographicRecord | None:
    """Merge duplicate records into one; None for an empty sequence."""
    return merge_records(records)


def dedupe(
    input_path: str | Path,
    *,
    output_dir: str | Path = "out",
    threshold: float = DEFAULT_THRESHOLD,
    merge_duplicates: bool = True,
    max_workers: int | None = None,
) -> DetectionResult:
    """Deduplicate records from a JSONL file.

    Simplified interface to the batch detection runner.

    Parameters
    ----------
    input_path : str | Path
        Path to JSONL input file.
    output_dir : str | Path, optional
        Directory for output files, by default "out".
    threshold : float, optional
        Minimum overall score (0.0 to 1.0) for two records to be grouped,
        by default 0.8.
    merge_duplicates : bool, optional
        Whether to merge each duplicate group into one record,
        by default True.
    max_workers : int | None, optional
        Thread pool size for the clustering scan.

    Returns
    -------
    DetectionResult
        Result with statistics and output file paths.
        Access ``result.output_files`` for a dict mapping artifact names to paths.

    Raises
    ------
    FileNotFoundError
        If input path does not exist.
    ParseError
        If deduplication fails.

    Examples
    --------
        >>> from litdedupe import dedupe
        >>> result = dedupe("records.jsonl", output_dir="results", threshold=0.85)
        >>> print(result.duplicate_groups, result.output_files["deduplicated_records"])
    """
    from litdedupe.engine import DetectionConfig, run_detection

    input_path_obj = Path(input_path)

    if not input_path_obj.exists():
        raise FileNotFoundError(f"Input path not found: {input_path}")

    config = DetectionConfig(
        threshold=threshold,
        output_dir=Path(output_dir),
        merge_duplicates=merge_duplicates,
        max_workers=max_workers,
    )

    result = run_detection(input_path=input_path_obj, config=config)

    if not result.success:
        raise ParseError(f"Deduplication failed: {result.error_message}")

    return result
