"""Boundary validation for untrusted record dictionaries.

Records supplied by import pipelines are checked against the bundled JSON
Schema before they become BibliographicRecord instances. The engine itself
assumes well-formed records and never re-validates.
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any

import jsonschema
from jsonschema.exceptions import best_match

from litdedupe.models.records import BibliographicRecord

__all__ = [
    "RECORD_SCHEMA_PATH",
    "RecordValidationError",
    "load_record_schema",
    "validate_record_dict",
    "record_from_dict",
]

RECORD_SCHEMA_PATH = Path(__file__).parent.parent / "schemas" / "bibliographic_record.schema.json"


class RecordValidationError(ValueError):
    """Raised when a record dict does not match the record schema."""

    def __init__(self, message: str, path: str = "<root>") -> None:
        """Initialize validation error.

        Parameters
        ----------
        message : str
            Error message.
        path : str, optional
            JSON path of the offending value, by default "<root>".
        """
        super().__init__(f"{path}: {message}")
        self.path = path


@lru_cache(maxsize=1)
def load_record_schema() -> dict[str, Any]:
    """Load the bundled record JSON schema."""
    with RECORD_SCHEMA_PATH.open("r", encoding="utf-8") as f:
        return json.load(f)


@lru_cache(maxsize=1)
def _record_validator() -> jsonschema.Draft202012Validator:
    return jsonschema.Draft202012Validator(load_record_schema())


def validate_record_dict(data: Any) -> None:
    """Validate a record dictionary against the record schema.

    Parameters
    ----------
    data : Any
        Candidate record (normally a dict decoded from JSON).

    Raises
    ------
    RecordValidationError
        If the value does not match the schema. The most relevant
        schema error is reported.
    """
    error = best_match(_record_validator().iter_errors(data))
    if error is None:
        return

    path = "/".join(str(p) for p in error.absolute_path) or "<root>"
    raise RecordValidationError(error.message, path=path)


def record_from_dict(data: Any) -> BibliographicRecord:
    """Validate a record dictionary and build the typed record.

    Parameters
    ----------
    data : Any
        Candidate record.

    Returns
    -------
    BibliographicRecord
        Typed record.

    Raises
    ------
    RecordValidationError
        If the value does not match the schema.
    """
    validate_record_dict(data)
    return BibliographicRecord.from_dict(data)
