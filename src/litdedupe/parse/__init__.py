"""JSONL record ingestion.

Main entry points:
- ingest_file: Read and validate a JSONL file of records
- parse_record_line: Decode and validate a single line
"""

from litdedupe.parse.ingestion import (
    FileIngestionResult,
    RejectedLine,
    ingest_file,
    parse_record_line,
)

__all__ = [
    "FileIngestionResult",
    "RejectedLine",
    "ingest_file",
    "parse_record_line",
]
