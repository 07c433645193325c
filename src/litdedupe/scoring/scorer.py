"""Overall similarity scoring for record pairs.

Combines the per-field comparators into one weighted score. Only fields
present on both records take part, and the weights are renormalized over
those fields. Exact agreement on DOI or PMID overrides everything else.
"""

from litdedupe.models import BibliographicRecord
from litdedupe.scoring.comparators import FIELD_CONFIGS, OVERRIDE_FIELDS, FieldConfig
from litdedupe.scoring.models import SimilarityResult

__all__ = ["SCORE_DECIMALS", "compare_records", "overall_score"]

# Overall scores are rounded so threshold checks are not defeated by float noise
SCORE_DECIMALS = 6

_WEIGHTS: dict[str, float] = {fc.name: fc.weight for fc in FIELD_CONFIGS}


def compare_records(
    record_a: BibliographicRecord,
    record_b: BibliographicRecord,
    field_configs: tuple[FieldConfig, ...] = FIELD_CONFIGS,
) -> SimilarityResult:
    """Score the similarity of two records.

    Parameters
    ----------
    record_a : BibliographicRecord
        First record.
    record_b : BibliographicRecord
        Second record.
    field_configs : tuple[FieldConfig, ...], optional
        Field registry, by default FIELD_CONFIGS.

    Returns
    -------
    SimilarityResult
        Overall score, per-field scores and matched fields.

    Examples
    --------
        >>> a = BibliographicRecord(id="a", title="Effects of Telemedicine", doi="10.1/ABC")
        >>> b = BibliographicRecord(id="b", title="EFFECTS OF TELEMEDICINE", doi="10.1/abc")
        >>> compare_records(a, b).score
        1.0
    """
    field_scores: dict[str, float] = {}
    matched_fields: list[str] = []

    for fc in field_configs:
        sim = fc.compare(record_a, record_b)
        if sim is None:
            continue

        field_scores[fc.name] = sim
        if sim >= fc.threshold:
            matched_fields.append(fc.name)

    weights = {fc.name: fc.weight for fc in field_configs}
    return SimilarityResult(
        score=overall_score(field_scores, weights),
        field_scores=field_scores,
        matched_fields=tuple(matched_fields),
    )


def overall_score(
    field_scores: dict[str, float],
    weights: dict[str, float] | None = None,
) -> float:
    """Combine field similarities into the overall score.

    Parameters
    ----------
    field_scores : dict[str, float]
        Similarity per present field.
    weights : dict[str, float] | None, optional
        Weight per field name, by default the registry weights.

    Returns
    -------
    float
        1.0 if any override field (DOI, PMID) scored 1.0; otherwise the
        weighted mean over the present fields, rounded to SCORE_DECIMALS.
        0.0 when no field is present.
    """
    if any(field_scores.get(name) == 1.0 for name in OVERRIDE_FIELDS):
        return 1.0

    if weights is None:
        weights = _WEIGHTS

    weighted_sum = 0.0
    total_weight = 0.0
    for name, sim in field_scores.items():
        weight = weights.get(name, 0.0)
        weighted_sum += sim * weight
        total_weight += weight

    if total_weight == 0:
        return 0.0

    return round(weighted_sum / total_weight, SCORE_DECIMALS)
