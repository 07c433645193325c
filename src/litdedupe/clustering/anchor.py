"""Anchor-based batch clustering of a record collection.

Records are scanned once in index order. The first unassigned record
becomes an anchor and absorbs every later unassigned record that scores at
or above the threshold against it. Membership depends only on the score
against the anchor: two members of one group need not match each other,
and a record that matches a member but not the anchor stays out. This is
not connected-component clustering.
"""

from collections.abc import Iterator, Sequence
from concurrent.futures import Executor, ThreadPoolExecutor
from contextlib import nullcontext
from functools import partial

from litdedupe.clustering.models import ClusteringResult, DuplicateCluster, compute_cluster_id
from litdedupe.models import BibliographicRecord, DuplicateDetection
from litdedupe.scoring import SimilarityResult, compare_records

__all__ = ["DEFAULT_THRESHOLD", "cluster_records"]

DEFAULT_THRESHOLD = 0.8


def cluster_records(
    records: Sequence[BibliographicRecord],
    threshold: float = DEFAULT_THRESHOLD,
    *,
    max_workers: int | None = None,
) -> ClusteringResult:
    """Partition records into duplicate groups and unique records.

    Parameters
    ----------
    records : Sequence[BibliographicRecord]
        Records to cluster. Order determines anchors and group order.
    threshold : float, optional
        Minimum overall score (inclusive), by default 0.8.
    max_workers : int | None, optional
        If given, the candidate scan for each anchor is scored on a thread
        pool of this size. Results are applied in index order, so the
        grouping is identical to the sequential scan.

    Returns
    -------
    ClusteringResult
        Duplicate groups, unique records and anchor-vs-member detections.
        Empty input yields an empty result.
    """
    result = ClusteringResult()
    assigned = [False] * len(records)

    pool_ctx = ThreadPoolExecutor(max_workers=max_workers) if max_workers else nullcontext()
    with pool_ctx as executor:
        for i, anchor in enumerate(records):
            if assigned[i]:
                continue
            assigned[i] = True

            candidates = [j for j in range(i + 1, len(records)) if not assigned[j]]
            members: list[BibliographicRecord] = []
            member_scores: list[SimilarityResult] = []

            for j, similarity in zip(
                candidates,
                _score_candidates(anchor, [records[j] for j in candidates], executor),
                strict=True,
            ):
                if similarity.score < threshold:
                    continue

                assigned[j] = True
                members.append(records[j])
                member_scores.append(similarity)
                result.detections.append(
                    DuplicateDetection.potential(
                        record_a_id=anchor.id,
                        record_b_id=records[j].id,
                        similarity_score=similarity.score,
                        matched_fields=similarity.matched_fields,
                        note=f"Auto-detected duplicate ({similarity.score * 100:.1f}% similarity)",
                        position=(i, j),
                    )
                )

            if members:
                result.duplicate_groups.append(_build_cluster(anchor, members, member_scores))
            else:
                result.unique_records.append(anchor)

    return result


def _score_candidates(
    anchor: BibliographicRecord,
    candidates: list[BibliographicRecord],
    executor: Executor | None,
) -> Iterator[SimilarityResult]:
    """Score candidates against the anchor, yielding in candidate order."""
    score = partial(compare_records, anchor)
    if executor is None:
        return map(score, candidates)
    return executor.map(score, candidates)


def _build_cluster(
    anchor: BibliographicRecord,
    members: list[BibliographicRecord],
    member_scores: list[SimilarityResult],
) -> DuplicateCluster:
    group = (anchor, *members)
    return DuplicateCluster(
        cluster_id=compute_cluster_id([r.id for r in group]),
        records=group,
        similarity_score=max(s.score for s in member_scores),
        matched_fields=member_scores[0].matched_fields,
    )
