"""Audit logging subsystem for litdedupe.

Main Components
---------------
- AuditLogger: JSONL event logger
- generate_run_id: run identifier factory
"""

from litdedupe.audit.helpers import generate_run_id, get_package_version
from litdedupe.audit.logger import AuditLogger
from litdedupe.audit.models import LOG_LEVELS, LogEvent

__all__ = [
    "AuditLogger",
    "LogEvent",
    "LOG_LEVELS",
    "generate_run_id",
    "get_package_version",
]
