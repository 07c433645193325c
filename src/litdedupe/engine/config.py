"""Detection configuration and result dataclasses."""

from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from litdedupe.clustering import DEFAULT_THRESHOLD


@dataclass
class DetectionConfig:
    """Configuration for batch and incremental detection runs.

    Attributes
    ----------
    threshold : float
        Minimum overall similarity (inclusive) for a pair to count as a
        duplicate (default: 0.8).
    output_dir : Path
        Base directory for all outputs.
    merge_duplicates : bool
        Collapse every duplicate group into a merged record (batch only).
    max_workers : int | None
        Thread pool size for the clustering scan. None scans sequentially.
    strict : bool
        Fail the run when any input line is invalid instead of skipping it.
    """

    threshold: float = DEFAULT_THRESHOLD
    output_dir: Path = Path("out")
    merge_duplicates: bool = True
    max_workers: int | None = None
    strict: bool = False

    def __post_init__(self) -> None:
        """Coerce paths and validate."""
        self.output_dir = Path(self.output_dir)

        if not 0.0 <= self.threshold <= 1.0:
            raise ValueError(f"threshold must be in [0, 1], got {self.threshold}")

        if self.max_workers is not None and self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {self.max_workers}")

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        data = asdict(self)
        data["output_dir"] = str(self.output_dir)
        return data


@dataclass
class DetectionResult:
    """Results from a batch detection run.

    Attributes
    ----------
    success : bool
        Whether the run completed successfully.
    total_records : int
        Valid records ingested.
    rejected_records : int
        Input lines skipped as invalid.
    duplicate_groups : int
        Groups with more than one record.
    duplicate_records : int
        Records belonging to a duplicate group.
    unique_records : int
        Records that joined no group.
    merged_records : int
        Merged records written (0 when merging is disabled).
    output_records : int
        Records in the deduplicated output.
    dedup_rate : float
        Fraction of input records removed by deduplication (0.0-1.0).
    output_files : dict[str, str]
        Map of artifact type to file path.
    error_message : str | None
        Error message if failed.
    """

    success: bool
    total_records: int = 0
    rejected_records: int = 0
    duplicate_groups: int = 0
    duplicate_records: int = 0
    unique_records: int = 0
    merged_records: int = 0
    output_records: int = 0
    dedup_rate: float = 0.0
    output_files: dict[str, str] = field(default_factory=dict)
    error_message: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


@dataclass
class MatchResult:
    """Results from an incremental matching run.

    Attributes
    ----------
    success : bool
        Whether the run completed successfully.
    new_records : int
        Valid new records ingested.
    pool_records : int
        Valid pool records ingested.
    rejected_records : int
        Input lines skipped as invalid, across both files.
    detections : int
        Detections written.
    records_with_matches : int
        New records with at least one detection.
    output_files : dict[str, str]
        Map of artifact type to file path.
    error_message : str | None
        Error message if failed.
    """

    success: bool
    new_records: int = 0
    pool_records: int = 0
    rejected_records: int = 0
    detections: int = 0
    records_with_matches: int = 0
    output_files: dict[str, str] = field(default_factory=dict)
    error_message: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)
