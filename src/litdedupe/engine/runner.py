"""Batch and incremental duplicate detection runners.

The runners chain ingestion, detection and merging, and persist every
intermediate result as JSONL so a run can be audited after the fact.

Batch flow (run_detection):
    Stage 1: Ingestion (JSONL, schema-validated)
    Stage 2: Anchor clustering
    Stage 3: Merge of duplicate groups (optional)
    Stage 4: Output artifacts and summary

Incremental flow (run_matching):
    Stage 1: Ingestion of new records and pool
    Stage 2: Pairwise matching of each new record against the pool
    Stage 3: Output artifacts and summary

Runners never raise: failures are logged and reported through the
``success`` and ``error_message`` fields of the result.
"""

import json
import time
import traceback
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from litdedupe.audit.logger import AuditLogger
from litdedupe.clustering import ClusteringResult, cluster_records
from litdedupe.engine.config import DetectionConfig, DetectionResult, MatchResult
from litdedupe.matching import find_candidates
from litdedupe.merge import merge_cluster
from litdedupe.models import BibliographicRecord, DuplicateDetection
from litdedupe.parse.ingestion import ingest_file
from litdedupe.utils import calculate_file_sha256

BATCH_MODE = "batch"
INCREMENTAL_MODE = "incremental"

_RESULT_META_FIELDS = frozenset({"success", "output_files", "error_message"})


class InputRejectedError(Exception):
    """Raised inside a run when input cannot be used."""


# ---------------------------------------------------------------------------
# Output helpers
# ---------------------------------------------------------------------------


def _write_jsonl(path: Path, items: Iterable[dict[str, Any]]) -> int:
    """Write dicts as JSONL and return the line count."""
    count = 0
    with path.open("w", encoding="utf-8") as f:
        for item in items:
            json.dump(item, f, ensure_ascii=False, sort_keys=True)
            f.write("\n")
            count += 1
    return count


def _write_artifact(
    output_dir: Path,
    name: str,
    items: Iterable[dict[str, Any]],
    logger: AuditLogger | None,
) -> Path:
    path = output_dir / name
    count = _write_jsonl(path, items)
    if logger:
        logger.artifact_written(name, calculate_file_sha256(path), record_count=count)
    return path


def _write_summary(output_dir: Path, summary: dict[str, Any], logger: AuditLogger | None) -> Path:
    reports_dir = output_dir / "reports"
    reports_dir.mkdir(parents=True, exist_ok=True)
    path = reports_dir / "summary.json"
    with path.open("w", encoding="utf-8") as f:
        json.dump(summary, f, indent=2, ensure_ascii=False, sort_keys=True)
    if logger:
        logger.artifact_written("reports/summary.json", calculate_file_sha256(path))
    return path


# ---------------------------------------------------------------------------
# Stage helpers
# ---------------------------------------------------------------------------


def _ingest(
    input_path: Path,
    strict: bool,
    logger: AuditLogger | None,
) -> tuple[list[BibliographicRecord], int]:
    """Ingest one JSONL file, logging every rejected line.

    Returns
    -------
    tuple[list[BibliographicRecord], int]
        Valid records and the number of rejected lines.

    Raises
    ------
    InputRejectedError
        If the file is missing or unreadable, or if strict and any line
        was rejected.
    """
    if not input_path.is_file():
        raise InputRejectedError(f"Input file does not exist: {input_path}")

    records, result = ingest_file(input_path)

    if result.file_errors:
        raise InputRejectedError(f"{input_path.name}: {result.file_errors[0]}")

    if logger:
        for rejected in result.rejected:
            logger.record_rejected(rejected.line_number, rejected.reason, rid=rejected.rid)
        for warning in result.warnings:
            logger.event(
                "ingestion_warning",
                data={"file": input_path.name, "message": warning},
                level="WARN",
            )

    if strict and result.rejected:
        first = result.rejected[0]
        raise InputRejectedError(
            f"{input_path.name}: {len(result.rejected)} invalid line(s); "
            f"first at line {first.line_number}: {first.reason}"
        )

    return records, len(result.rejected)


def _stage_ingest(
    paths: list[Path],
    strict: bool,
    logger: AuditLogger | None,
) -> tuple[list[list[BibliographicRecord]], int]:
    """Stage 1: Ingest every input file."""
    start = time.perf_counter()
    if logger:
        logger.stage_started("ingest")

    batches: list[list[BibliographicRecord]] = []
    rejected_total = 0
    for path in paths:
        records, rejected = _ingest(path, strict, logger)
        batches.append(records)
        rejected_total += rejected

    if logger:
        logger.stage_finished(
            "ingest",
            time.perf_counter() - start,
            counters={
                "records_valid": sum(len(b) for b in batches),
                "records_rejected": rejected_total,
            },
        )

    return batches, rejected_total


def _stage_cluster(
    records: list[BibliographicRecord],
    config: DetectionConfig,
    logger: AuditLogger | None,
) -> ClusteringResult:
    """Stage 2: Anchor clustering."""
    start = time.perf_counter()
    if logger:
        logger.stage_started("cluster", expected_records=len(records))

    clustering = cluster_records(records, config.threshold, max_workers=config.max_workers)

    if logger:
        logger.stage_finished(
            "cluster",
            time.perf_counter() - start,
            counters={
                "duplicate_groups": len(clustering.duplicate_groups),
                "duplicate_records": clustering.duplicate_record_count,
                "unique_records": len(clustering.unique_records),
                "detections": len(clustering.detections),
            },
        )

    return clustering


def _stage_merge(
    clustering: ClusteringResult,
    logger: AuditLogger | None,
) -> list[BibliographicRecord]:
    """Stage 3: Merge each duplicate group into one record."""
    start = time.perf_counter()
    if logger:
        logger.stage_started("merge", expected_records=clustering.duplicate_record_count)

    merged: list[BibliographicRecord] = []
    for group in clustering.duplicate_groups:
        record = merge_cluster(group)
        if record is not None:
            merged.append(record)

    if logger:
        logger.stage_finished(
            "merge", time.perf_counter() - start, counters={"merged_records": len(merged)}
        )

    return merged


def _stage_match(
    new_records: list[BibliographicRecord],
    pool: list[BibliographicRecord],
    threshold: float,
    logger: AuditLogger | None,
) -> list[list[DuplicateDetection]]:
    """Stage 2 (incremental): Match each new record against the pool."""
    start = time.perf_counter()
    if logger:
        logger.stage_started("match", expected_records=len(new_records))

    per_record = [find_candidates(record, pool, threshold) for record in new_records]

    if logger:
        logger.stage_finished(
            "match",
            time.perf_counter() - start,
            counters={
                "detections": sum(len(d) for d in per_record),
                "records_with_matches": sum(1 for d in per_record if d),
            },
        )

    return per_record


def _stage_write(
    output_dir: Path,
    artifacts: dict[str, Iterable[Any]],
    summary: dict[str, Any],
    logger: AuditLogger | None,
) -> dict[str, str]:
    """Final stage: write one JSONL file per artifact, then the summary.

    Parameters
    ----------
    output_dir : Path
        Base output directory, created if missing.
    artifacts : dict[str, Iterable[Any]]
        Artifact name to items exposing to_dict(). Written to
        ``{name}.jsonl``.
    summary : dict[str, Any]
        Content of reports/summary.json.
    logger : AuditLogger | None
        Audit logger.

    Returns
    -------
    dict[str, str]
        Map of artifact name to file path, including "summary".
    """
    start = time.perf_counter()
    if logger:
        logger.stage_started("write")

    output_dir.mkdir(parents=True, exist_ok=True)

    files: dict[str, str] = {}
    for name, items in artifacts.items():
        rows = (item.to_dict() for item in items)
        files[name] = str(_write_artifact(output_dir, f"{name}.jsonl", rows, logger))
    files["summary"] = str(_write_summary(output_dir, summary, logger))

    if logger:
        logger.stage_finished(
            "write", time.perf_counter() - start, counters={"artifacts": len(files)}
        )

    return files


def _build_summary(
    mode: str,
    config: DetectionConfig,
    result: DetectionResult | MatchResult,
    start: float,
) -> dict[str, Any]:
    counters = {k: v for k, v in result.to_dict().items() if k not in _RESULT_META_FIELDS}
    return {
        "mode": mode,
        "config": config.to_dict(),
        "counters": counters,
        "execution_time_seconds": round(time.perf_counter() - start, 6),
    }


def _log_failure(logger: AuditLogger | None, exc: Exception) -> str:
    error_msg = f"{type(exc).__name__}: {exc}"
    if logger:
        logger.error(type(exc).__name__, str(exc), traceback=traceback.format_exc())
    return error_msg


def _finish_run(logger: AuditLogger | None, success: bool, start: float, records: int) -> None:
    if logger:
        logger.set_stage(None)
        logger.run_finished(
            "success" if success else "failed",
            time.perf_counter() - start,
            records_processed=records,
        )


# ---------------------------------------------------------------------------
# Runners
# ---------------------------------------------------------------------------


def run_detection(
    input_path: Path | str,
    config: DetectionConfig | None = None,
    logger: AuditLogger | None = None,
) -> DetectionResult:
    """Run batch duplicate detection over a JSONL file.

    Parameters
    ----------
    input_path : Path | str
        JSONL file of records.
    config : DetectionConfig | None, optional
        Run configuration. If None, uses defaults.
    logger : AuditLogger | None, optional
        Audit logger for tracking. If None, no logging.

    Returns
    -------
    DetectionResult
        Run counters and artifact paths. Counters gathered before a failure
        are kept.

    Notes
    -----
    Artifacts written to config.output_dir:

    - detections.jsonl: anchor-vs-member detections
    - clusters.jsonl: duplicate groups (record ids only)
    - unique_records.jsonl: records outside every group
    - merged_records.jsonl: one merged record per group (when merging)
    - deduplicated_records.jsonl: merged records, then unique records
      (when merging)
    - reports/summary.json: configuration and counters

    Examples
    --------
        >>> from litdedupe.engine import DetectionConfig, run_detection
        >>> result = run_detection("records.jsonl", DetectionConfig(threshold=0.85))
        >>> if result.success:
        ...     print(f"{result.duplicate_groups} duplicate groups")
    """
    input_path = Path(input_path)
    if config is None:
        config = DetectionConfig()

    start = time.perf_counter()
    result = DetectionResult(success=False)

    if logger:
        logger.run_started(BATCH_MODE, {"input": str(input_path), **config.to_dict()})

    try:
        batches, result.rejected_records = _stage_ingest([input_path], config.strict, logger)
        records = batches[0]
        result.total_records = len(records)

        clustering = _stage_cluster(records, config, logger)
        result.duplicate_groups = len(clustering.duplicate_groups)
        result.duplicate_records = clustering.duplicate_record_count
        result.unique_records = len(clustering.unique_records)

        artifacts: dict[str, Iterable[Any]] = {
            "detections": clustering.detections,
            "clusters": clustering.duplicate_groups,
            "unique_records": clustering.unique_records,
        }

        if config.merge_duplicates:
            merged = _stage_merge(clustering, logger)
            deduplicated = [*merged, *clustering.unique_records]
            artifacts["merged_records"] = merged
            artifacts["deduplicated_records"] = deduplicated
            result.merged_records = len(merged)
            result.output_records = len(deduplicated)
        else:
            result.output_records = len(records)

        if result.total_records:
            result.dedup_rate = round(1 - result.output_records / result.total_records, 6)

        summary = _build_summary(BATCH_MODE, config, result, start)
        result.output_files = _stage_write(config.output_dir, artifacts, summary, logger)
        result.success = True

    except Exception as e:
        result.error_message = _log_failure(logger, e)

    _finish_run(logger, result.success, start, result.total_records)
    return result


def run_matching(
    new_path: Path | str,
    pool_path: Path | str,
    config: DetectionConfig | None = None,
    logger: AuditLogger | None = None,
) -> MatchResult:
    """Match newly imported records against an existing pool.

    Parameters
    ----------
    new_path : Path | str
        JSONL file of new records.
    pool_path : Path | str
        JSONL file of existing records.
    config : DetectionConfig | None, optional
        Run configuration; merge_duplicates and max_workers are ignored.
    logger : AuditLogger | None, optional
        Audit logger for tracking. If None, no logging.

    Returns
    -------
    MatchResult
        Run counters and artifact paths.

    Notes
    -----
    detections.jsonl lists the detections of each new record, sorted by
    descending score, new records in input order.
    """
    new_path = Path(new_path)
    pool_path = Path(pool_path)
    if config is None:
        config = DetectionConfig()

    start = time.perf_counter()
    result = MatchResult(success=False)

    if logger:
        logger.run_started(
            INCREMENTAL_MODE,
            {"new": str(new_path), "pool": str(pool_path), **config.to_dict()},
        )

    try:
        batches, result.rejected_records = _stage_ingest(
            [new_path, pool_path], config.strict, logger
        )
        new_records, pool = batches
        result.new_records = len(new_records)
        result.pool_records = len(pool)

        per_record = _stage_match(new_records, pool, config.threshold, logger)
        detections = [d for record_detections in per_record for d in record_detections]
        result.detections = len(detections)
        result.records_with_matches = sum(1 for d in per_record if d)

        summary = _build_summary(INCREMENTAL_MODE, config, result, start)
        result.output_files = _stage_write(
            config.output_dir, {"detections": detections}, summary, logger
        )
        result.success = True

    except Exception as e:
        result.error_message = _log_failure(logger, e)

    _finish_run(logger, result.success, start, result.new_records)
    return result
