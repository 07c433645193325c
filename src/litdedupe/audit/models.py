"""Data models for audit logging."""

from dataclasses import dataclass
from typing import Any

__all__ = ["LogEvent", "LOG_LEVELS"]

LOG_LEVELS: tuple[str, ...] = ("DEBUG", "INFO", "WARN", "ERROR")


@dataclass
class LogEvent:
    """Structured log event, one line of events.jsonl.

    Attributes
    ----------
    ts : str
        ISO8601 timestamp with microseconds (UTC).
    run_id : str
        Unique run identifier.
    level : str
        Log level ("DEBUG", "INFO", "WARN", "ERROR").
    event : str
        Event type identifier.
    data : dict[str, Any]
        Event-specific data payload.
    stage : str | None
        Current stage identifier.
    rid : str | None
        Record identifier if event is record-specific.
    """

    ts: str
    run_id: str
    level: str
    event: str
    data: dict[str, Any]
    stage: str | None = None
    rid: str | None = None
