"""Incremental duplicate matching for newly imported records."""

from litdedupe.matching.pairwise import DEFAULT_THRESHOLD, describe_match, find_candidates

__all__ = ["DEFAULT_THRESHOLD", "describe_match", "find_candidates"]
