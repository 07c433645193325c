"""JSONL record ingestion with boundary validation.

Import pipelines hand records over as JSON Lines: one JSON object per line,
keyed like BibliographicRecord.to_dict(). Each line is decoded and checked
against the record schema; bad lines are collected, not raised.
"""

import json
from dataclasses import dataclass
from pathlib import Path

from litdedupe.models import BibliographicRecord, RecordValidationError, record_from_dict

@dataclass(frozen=True)
class RejectedLine:
    """Input line that could not be turned into a record.

    Attributes
    ----------
    line_number : int
        1-based line number.
    reason : str
        Decoding or validation error message.
    rid : str | None
        Record id, when the line decoded to an object with a string id.
    """

    line_number: int
    reason: str
    rid: str | None = None


@dataclass(frozen=True)
class FileIngestionResult:
    """Immutable result of ingesting a single JSONL file.

    Attributes
    ----------
    filename : str
        Name of the file (basename).
    filepath : str
        Full path to the file.
    file_size : int
        Size of file in bytes.
    lines_read : int
        Non-blank lines read.
    records_parsed : int
        Number of records that passed validation.
    rejected : tuple[RejectedLine, ...]
        Lines skipped because of decoding or validation errors.
    warnings : tuple[str, ...]
        Warning messages (e.g., repeated record ids).
    file_errors : tuple[str, ...]
        File-level errors (unreadable, undecodable).
    """

    filename: str
    filepath: str
    file_size: int
    lines_read: int
    records_parsed: int
    rejected: tuple[RejectedLine, ...] = ()
    warnings: tuple[str, ...] = ()
    file_errors: tuple[str, ...] = ()

    @property
    def errors(self) -> tuple[str, ...]:
        """File-level errors followed by per-line errors."""
        return self.file_errors + tuple(f"line {r.line_number}: {r.reason}" for r in self.rejected)


def parse_record_line(line: str) -> BibliographicRecord:
    """Decode and validate one JSONL line.

    Parameters
    ----------
    line : str
        JSON object text.

    Returns
    -------
    BibliographicRecord
        Validated record.

    Raises
    ------
    RecordValidationError
        If the line is not valid JSON or does not match the record schema.
    """
    try:
        data = json.loads(line)
    except json.JSONDecodeError as e:
        raise RecordValidationError(f"Invalid JSON: {e.msg}") from e

    return record_from_dict(data)


def ingest_file(file_path: Path) -> tuple[list[BibliographicRecord], FileIngestionResult]:
    """Ingest a JSONL file of records.

    Parameters
    ----------
    file_path : Path
        Path to file to ingest.

    Returns
    -------
    tuple[list[BibliographicRecord], FileIngestionResult]
        - Valid records in file order
        - File ingestion result with rejected lines and warnings
    """
    try:
        content = file_path.read_bytes().decode("utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        result = FileIngestionResult(
            filename=file_path.name,
            filepath=str(file_path),
            file_size=0,
            lines_read=0,
            records_parsed=0,
            file_errors=(f"Failed to read file: {e}",),
        )
        return [], result

    records: list[BibliographicRecord] = []
    rejected: list[RejectedLine] = []
    warnings: list[str] = []
    seen_ids: set[str] = set()
    lines_read = 0

    for line_number, line in enumerate(content.splitlines(), start=1):
        if not line.strip():
            continue
        lines_read += 1

        try:
            record = parse_record_line(line)
        except RecordValidationError as e:
            rejected.append(RejectedLine(line_number, str(e), _peek_id(line)))
            continue

        if record.id in seen_ids:
            warnings.append(f"line {line_number}: repeated record id {record.id!r}")
        seen_ids.add(record.id)
        records.append(record)

    result = FileIngestionResult(
        filename=file_path.name,
        filepath=str(file_path),
        file_size=len(content.encode("utf-8")),
        lines_read=lines_read,
        records_parsed=len(records),
        rejected=tuple(rejected),
        warnings=tuple(warnings),
    )

    return records, result


def _peek_id(line: str) -> str | None:
    try:
        data = json.loads(line)
    except json.JSONDecodeError:
        return None
    if isinstance(data, dict) and isinstance(data.get("id"), str):
        return data["id"]
    return None
