"""Preconfigured duplicate detection rules.

Three predicates of increasing leniency over the similarity scorer. Each
call rescores the pair; nothing is cached.
"""

from collections.abc import Callable
from dataclasses import dataclass

from litdedupe.models import BibliographicRecord
from litdedupe.scoring import compare_records

__all__ = [
    "STRONG_THRESHOLD",
    "MODERATE_THRESHOLD",
    "RulePredicate",
    "DetectionRules",
    "build_detection_rules",
    "is_exact_duplicate",
    "is_strong_duplicate",
    "is_moderate_duplicate",
    "classify_pair",
]

STRONG_THRESHOLD = 0.9
MODERATE_THRESHOLD = 0.7

RulePredicate = Callable[[BibliographicRecord, BibliographicRecord], bool]


def is_exact_duplicate(record_a: BibliographicRecord, record_b: BibliographicRecord) -> bool:
    """Check whether two records share a DOI or a PMID.

    Identifiers are compared by plain string equality; unlike the scorer,
    no case folding is applied.
    """
    if record_a.doi and record_b.doi and record_a.doi == record_b.doi:
        return True
    return bool(record_a.pmid and record_b.pmid and record_a.pmid == record_b.pmid)


def is_strong_duplicate(record_a: BibliographicRecord, record_b: BibliographicRecord) -> bool:
    """Check whether the overall score is at least 0.9."""
    return compare_records(record_a, record_b).score >= STRONG_THRESHOLD


def is_moderate_duplicate(record_a: BibliographicRecord, record_b: BibliographicRecord) -> bool:
    """Check whether the overall score is at least 0.7."""
    return compare_records(record_a, record_b).score >= MODERATE_THRESHOLD


@dataclass(frozen=True)
class DetectionRules:
    """Bundle of duplicate detection predicates.

    Attributes
    ----------
    exact : RulePredicate
        True when DOI or PMID are equal on both records.
    strong : RulePredicate
        True when the overall score is at least 0.9.
    moderate : RulePredicate
        True when the overall score is at least 0.7.
    """

    exact: RulePredicate
    strong: RulePredicate
    moderate: RulePredicate

    def items(self) -> tuple[tuple[str, RulePredicate], ...]:
        """Rules from strictest to most lenient."""
        return (("exact", self.exact), ("strong", self.strong), ("moderate", self.moderate))


def build_detection_rules() -> DetectionRules:
    """Build the exact / strong / moderate rule set.

    Returns
    -------
    DetectionRules
        Predicates backed by the similarity scorer.

    Examples
    --------
        >>> rules = build_detection_rules()
        >>> rules.moderate(record_a, record_b)
        True
    """
    return DetectionRules(
        exact=is_exact_duplicate,
        strong=is_strong_duplicate,
        moderate=is_moderate_duplicate,
    )


def classify_pair(
    record_a: BibliographicRecord,
    record_b: BibliographicRecord,
    rules: DetectionRules | None = None,
) -> str | None:
    """Name the strictest rule a pair satisfies.

    Parameters
    ----------
    record_a : BibliographicRecord
        First record.
    record_b : BibliographicRecord
        Second record.
    rules : DetectionRules | None, optional
        Rule set, by default build_detection_rules().

    Returns
    -------
    str | None
        'exact', 'strong', 'moderate', or None if no rule holds.
    """
    if rules is None:
        rules = build_detection_rules()

    for name, predicate in rules.items():
        if predicate(record_a, record_b):
            return name
    return None
