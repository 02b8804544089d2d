"""Record correlation for multi-entity responses.

Each node reports a list of entities (sets, secondary indexes, ...). The
correlator pools every node's list and partitions the pool into groups of
instances whose ``Key`` fields are exactly equal, then merges each group.
Comparison is pairwise; per-query entity and node counts are small.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any, Generic, TypeVar

from stat_merge.core.exceptions import MergeError
from stat_merge.mapping.registry import DescriptorRegistry, default_registry
from stat_merge.merging.merger import StatMerger

T = TypeVar("T")

log = logging.getLogger(__name__)


def keys_match(a: Any, b: Any, registry: DescriptorRegistry | None = None) -> bool:
    """Whether two instances represent the same logical entity.

    Both must be of the same type, the type must declare at least one key
    field, and every key field must hold equal values of identical type.
    """
    if a is None or b is None or type(a) is not type(b):
        return False
    registry = registry if registry is not None else default_registry
    key_fields = registry.get(type(a)).key_fields
    if not key_fields:
        return False
    for field in key_fields:
        value_a = getattr(a, field.name, None)
        value_b = getattr(b, field.name, None)
        if type(value_a) is not type(value_b) or value_a != value_b:
            return False
    return True


class RecordCorrelator(Generic[T]):
    """Groups per-node entity lists by key fields and merges each group.

    Args:
        registry: Descriptor registry. Defaults to the process-wide one.
        merger: Merger for each group. Defaults to one on ``registry``.
        drop_conflicting_groups: Log and drop a group whose merge fails
            instead of raising.
    """

    def __init__(
        self,
        registry: DescriptorRegistry | None = None,
        merger: StatMerger | None = None,
        drop_conflicting_groups: bool = True,
    ) -> None:
        self._registry = registry if registry is not None else default_registry
        self._merger = merger if merger is not None else StatMerger(self._registry)
        self._drop_conflicting_groups = drop_conflicting_groups

    def correlate(self, node_lists: Iterable[Iterable[T]]) -> list[list[T]]:
        """Partition all instances into groups of matching key fields.

        Groups come out in order of their first member's position in the
        pool (node order, then entity order).
        """
        pool = [item for items in node_lists for item in items if item is not None]
        groups: list[list[T]] = []
        while pool:
            first = pool[0]
            group = [first]
            remaining = []
            for other in pool[1:]:
                if keys_match(first, other, self._registry):
                    group.append(other)
                else:
                    remaining.append(other)
            groups.append(group)
            pool = remaining
        return groups

    def merge(self, node_lists: Iterable[Iterable[T]]) -> list[T]:
        """Correlate and merge, one result per successfully merged group.

        Raises:
            MergeError: Only if ``drop_conflicting_groups`` is disabled.
        """
        results: list[T] = []
        for group in self.correlate(node_lists):
            try:
                merged = self._merger.merge(group)
            except MergeError as e:
                if not self._drop_conflicting_groups:
                    raise
                log.warning(
                    "Dropping %s group of %d record(s) after %s: %s",
                    type(group[0]).__name__,
                    len(group),
                    type(e).__name__,
                    e,
                )
                continue
            if merged is not None:
                results.append(merged)
        return results
