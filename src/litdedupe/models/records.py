"""Bibliographic record data models for litdedupe.

This module defines the typed record consumed by every engine component.
Records arrive from external import pipelines as plain dicts and are
validated at the boundary (see litdedupe.models.validation) before being
turned into these dataclasses.
"""

from dataclasses import dataclass, field
from typing import Any

# Fields counted for completeness and filled during merge, in canonical order
RECORD_CONTENT_FIELDS: tuple[str, ...] = (
    "title",
    "authors",
    "abstract",
    "journal",
    "doi",
    "pmid",
    "publication_date",
)


@dataclass(frozen=True)
class Provenance:
    """Origin of a record.

    Attributes
    ----------
    source : str
        Search provider or import channel (e.g., 'pubmed', 'scopus', 'manual').
    imported_at : str | None
        ISO8601 timestamp (UTC) of import.
    """

    source: str
    imported_at: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"source": self.source, "imported_at": self.imported_at}


@dataclass(frozen=True)
class PublicationDate:
    """Publication date at year/month precision.

    Attributes
    ----------
    year : int
        Four-digit year.
    month : int | None
        Month (1-12), None when only the year is known.
    """

    year: int
    month: int | None = None


@dataclass(frozen=True)
class BibliographicRecord:
    """A single bibliographic record (article) from one source.

    All content fields are optional; a missing field is simply excluded
    from scoring. DOI and PMID are strong signals, not enforced keys.

    Attributes
    ----------
    id : str
        Opaque record identifier assigned by the caller.
    title : str | None
        Article title as supplied by the source.
    authors : tuple[str, ...]
        Author names in source order.
    abstract : str | None
        Abstract text.
    journal : str | None
        Journal name.
    doi : str | None
        Digital Object Identifier.
    pmid : str | None
        PubMed identifier.
    publication_date : str | None
        Raw publication date text; parsed to year/month on comparison.
    provenance : Provenance | None
        Source and import time.
    """

    id: str
    title: str | None = None
    authors: tuple[str, ...] = ()
    abstract: str | None = None
    journal: str | None = None
    doi: str | None = None
    pmid: str | None = None
    publication_date: str | None = None
    provenance: Provenance | None = None

    def has_value(self, field_name: str) -> bool:
        """Check whether a content field is non-empty.

        Parameters
        ----------
        field_name : str
            One of RECORD_CONTENT_FIELDS.

        Returns
        -------
        bool
            True if the field holds a non-empty value.
        """
        return bool(getattr(self, field_name))

    def filled_field_count(self) -> int:
        """Count non-empty content fields."""
        return sum(1 for name in RECORD_CONTENT_FIELDS if self.has_value(name))

    def to_dict(self) -> dict[str, Any]:
        """Convert record to dictionary for JSON serialization.

        Returns
        -------
        dict[str, Any]
            Dictionary representation compatible with the record JSON schema.
        """
        return {
            "id": self.id,
            "title": self.title,
            "authors": list(self.authors),
            "abstract": self.abstract,
            "journal": self.journal,
            "doi": self.doi,
            "pmid": self.pmid,
            "publication_date": self.publication_date,
            "provenance": self.provenance.to_dict() if self.provenance else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BibliographicRecord":
        """Build a record from an already validated dictionary.

        Use litdedupe.models.validation.record_from_dict for untrusted input.

        Parameters
        ----------
        data : dict[str, Any]
            Dictionary (e.g. from JSON) with record fields.

        Returns
        -------
        BibliographicRecord
            Reconstructed record.
        """
        prov_data = data.get("provenance")
        provenance = None
        if prov_data:
            provenance = Provenance(
                source=prov_data.get("source", ""),
                imported_at=prov_data.get("imported_at"),
            )

        return cls(
            id=str(data["id"]),
            title=data.get("title"),
            authors=tuple(data.get("authors") or ()),
            abstract=data.get("abstract"),
            journal=data.get("journal"),
            doi=data.get("doi"),
            pmid=_optional_str(data.get("pmid")),
            publication_date=data.get("publication_date"),
            provenance=provenance,
        )


@dataclass(frozen=True)
class MergedRecord(BibliographicRecord):
    """Canonical record produced by collapsing a duplicate cluster.

    Keeps the primary record's id and provenance. Source records are never
    deleted by the engine; removing them is the caller's decision.

    Attributes
    ----------
    merged_from : tuple[str, ...]
        Ids of all cluster members in cluster order (primary included).
    merged_at : str
        ISO8601 timestamp (UTC) of the merge.
    resolution : str
        Resolution tag, "auto_merged" for engine merges.
    """

    merged_from: tuple[str, ...] = field(default=())
    merged_at: str = ""
    resolution: str = "auto_merged"

    def to_dict(self) -> dict[str, Any]:
        """Convert merged record to dictionary for JSON serialization."""
        data = super().to_dict()
        data["merge"] = {
            "merged_from": list(self.merged_from),
            "merged_at": self.merged_at,
            "resolution": self.resolution,
        }
        return data


def _optional_str(value: Any) -> str | None:
    # PMIDs often arrive as JSON numbers
    if value is None:
        return None
    return str(value)
