"""Merging layer - reduce per-node instances into cluster aggregates."""

from __future__ import annotations

from stat_merge.merging.correlator import RecordCorrelator, keys_match
from stat_merge.merging.merger import StatMerger, merge

__all__ = [
    "StatMerger",
    "merge",
    "RecordCorrelator",
    "keys_match",
]
