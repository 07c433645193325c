"""Canonical merge of duplicate clusters."""

from litdedupe.merge.merger import (
    AUTO_MERGED,
    completeness_score,
    merge_cluster,
    merge_records,
    select_primary,
)

__all__ = [
    "AUTO_MERGED",
    "completeness_score",
    "merge_cluster",
    "merge_records",
    "select_primary",
]
