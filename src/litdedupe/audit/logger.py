"""Structured audit logger for JSONL event logging.

Provides append-only structured event logging to JSONL files with
a persistent file handle. The engine modules never log; runners and the
CLI report run and stage boundaries through this logger.
"""

import json
from dataclasses import asdict
from pathlib import Path
from typing import Any

from litdedupe.audit.models import LOG_LEVELS, LogEvent
from litdedupe.utils import get_iso_timestamp

__all__ = ["AuditLogger"]


class AuditLogger:
    """JSONL audit logger with persistent file handle.

    Writes structured log events to a JSONL file (one JSON object per line).
    Events are append-only and flushed after each write.

    Attributes
    ----------
    run_id : str
        Unique run identifier.
    log_path : Path
        Path to JSONL log file.
    current_stage : str | None
        Current stage name for context.
    """

    def __init__(self, run_id: str, log_path: Path) -> None:
        """Initialize audit logger and open file handle.

        Parameters
        ----------
        run_id : str
            Unique run identifier.
        log_path : Path
            Path to JSONL log file. Parent directories are created.
        """
        self.run_id = run_id
        self.log_path = log_path
        self.current_stage: str | None = None

        self.log_path.parent.mkdir(parents=True, exist_ok=True)
        self._file = self.log_path.open("a", encoding="utf-8")

    def __enter__(self) -> "AuditLogger":
        """Enter context manager."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Exit context manager and close file."""
        self.close()

    def close(self) -> None:
        """Flush and close the log file handle."""
        if not self._file.closed:
            self._file.flush()
            self._file.close()

    def set_stage(self, stage: str | None) -> None:
        """Set current stage context (None to clear)."""
        self.current_stage = stage

    def event(
        self,
        event_type: str,
        data: dict[str, Any] | None = None,
        level: str = "INFO",
        stage: str | None = None,
        rid: str | None = None,
    ) -> None:
        """Write structured event to log.

        Parameters
        ----------
        event_type : str
            Event type identifier (e.g., "stage_started").
        data : dict[str, Any] | None, optional
            Event-specific data payload.
        level : str, optional
            Log level ("DEBUG", "INFO", "WARN", "ERROR").
        stage : str | None, optional
            Stage identifier, uses current_stage if not provided.
        rid : str | None, optional
            Record identifier if event is record-specific.

        Raises
        ------
        ValueError
            If level is not a known log level.
        """
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {level}")

        log_event = LogEvent(
            ts=get_iso_timestamp(),
            run_id=self.run_id,
            level=level,
            event=event_type,
            data=data if data is not None else {},
            stage=stage if stage is not None else self.current_stage,
            rid=rid,
        )

        json.dump(asdict(log_event), self._file, ensure_ascii=False, separators=(",", ":"))
        self._file.write("\n")
        self._file.flush()

    def run_started(self, mode: str, parameters: dict[str, Any]) -> None:
        """Log run_started event.

        Parameters
        ----------
        mode : str
            Run mode ("batch" or "incremental").
        parameters : dict[str, Any]
            Configuration snapshot.
        """
        self.event("run_started", data={"mode": mode, "parameters": parameters})

    def run_finished(
        self,
        status: str,
        duration_seconds: float,
        records_processed: int | None = None,
    ) -> None:
        """Log run_finished event.

        Parameters
        ----------
        status : str
            Run status ("success" or "failed").
        duration_seconds : float
            Total execution time in seconds.
        records_processed : int | None, optional
            Total records processed.
        """
        data: dict[str, Any] = {
            "status": status,
            "duration_seconds": duration_seconds,
        }
        if records_processed is not None:
            data["records_processed"] = records_processed

        self.event("run_finished", data=data)

    def stage_started(self, stage: str, expected_records: int | None = None) -> None:
        """Log stage_started event and make it the current stage."""
        self.set_stage(stage)

        data: dict[str, Any] = {}
        if expected_records is not None:
            data["expected_records"] = expected_records

        self.event("stage_started", data=data, stage=stage)

    def stage_finished(
        self,
        stage: str,
        duration_seconds: float,
        counters: dict[str, int] | None = None,
    ) -> None:
        """Log stage_finished event.

        Parameters
        ----------
        stage : str
            Stage identifier.
        duration_seconds : float
            Stage execution time in seconds.
        counters : dict[str, int] | None, optional
            Stage-specific counters (e.g., duplicate_groups).
        """
        data: dict[str, Any] = {"duration_seconds": duration_seconds}
        if counters:
            data["counters"] = counters

        self.event("stage_finished", data=data, stage=stage)

    def record_rejected(self, line_number: int, reason: str, rid: str | None = None) -> None:
        """Log a record skipped at the input boundary.

        Parameters
        ----------
        line_number : int
            1-based line number in the input file.
        reason : str
            Validation or decoding error message.
        rid : str | None, optional
            Record id, when it could be read.
        """
        self.event(
            "record_rejected",
            data={"line": line_number, "reason": reason},
            level="WARN",
            rid=rid,
        )

    def artifact_written(
        self,
        path: str,
        sha256: str,
        record_count: int | None = None,
    ) -> None:
        """Log artifact_written event.

        Parameters
        ----------
        path : str
            Path to artifact relative to the output directory.
        sha256 : str
            SHA256 hash of artifact.
        record_count : int | None, optional
            Number of JSONL lines in artifact.
        """
        data: dict[str, Any] = {"path": path, "sha256": sha256}
        if record_count is not None:
            data["record_count"] = record_count

        self.event("artifact_written", data=data)

    def error(
        self,
        exception_class: str,
        message: str,
        stage: str | None = None,
        traceback: str | None = None,
    ) -> None:
        """Log error event.

        Parameters
        ----------
        exception_class : str
            Exception class name.
        message : str
            Error message.
        stage : str | None, optional
            Stage where error occurred.
        traceback : str | None, optional
            Stack trace.
        """
        data: dict[str, Any] = {
            "exception_class": exception_class,
            "message": message,
        }
        if traceback is not None:
            data["traceback"] = traceback

        self.event("error", data=data, stage=stage, level="ERROR")
