"""Batch clustering of record collections into duplicate groups.

Grouping is anchor-relative: each group is one anchor record plus the later
records that match it directly.
"""

from litdedupe.clustering.anchor import DEFAULT_THRESHOLD, cluster_records
from litdedupe.clustering.models import (
    ClusteringResult,
    DuplicateCluster,
    compute_cluster_id,
)

__all__ = [
    "DEFAULT_THRESHOLD",
    "ClusteringResult",
    "DuplicateCluster",
    "cluster_records",
    "compute_cluster_id",
]
