"""Aggregation facade.

The InfoAggregator takes one raw response per node, parses it, maps it
onto a target type, and either returns the per-node objects or reduces
them into cluster-wide aggregates. Fetching the responses is the caller's
job; a node whose response is ``None`` did not respond.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable, Mapping
from typing import Any, TypeVar

from stat_merge.core.config import AggregationConfig
from stat_merge.core.exceptions import CoercionError, MergeError
from stat_merge.core.parser import parse_flat, parse_list, parse_multi
from stat_merge.mapping.model import InfoMapper
from stat_merge.mapping.registry import DescriptorRegistry, default_registry
from stat_merge.merging.correlator import RecordCorrelator
from stat_merge.merging.merger import StatMerger

T = TypeVar("T")

log = logging.getLogger(__name__)

Responses = Mapping[Hashable, str | None]


class InfoAggregator:
    """Parses, maps and merges per-node info responses.

    Args:
        config: Aggregation settings. Defaults to AggregationConfig().
        registry: Descriptor registry. Defaults to the process-wide one.
    """

    def __init__(
        self,
        config: AggregationConfig | None = None,
        registry: DescriptorRegistry | None = None,
    ) -> None:
        self.config = config if config is not None else AggregationConfig()
        self._registry = registry if registry is not None else default_registry
        self._merger = StatMerger(self._registry)
        self._correlator: RecordCorrelator[Any] = RecordCorrelator(
            self._registry,
            self._merger,
            drop_conflicting_groups=self.config.drop_conflicting_groups,
        )

    @classmethod
    def from_config(cls, config: AggregationConfig) -> InfoAggregator:
        """Create an InfoAggregator from an AggregationConfig."""
        return cls(config)

    @property
    def registry(self) -> DescriptorRegistry:
        return self._registry

    def _log_response(self, node: Hashable, target_class: type, raw: str | None) -> None:
        if self.config.log_responses:
            log.debug("Node: %s, target: %s, response: %s", node, target_class.__name__, raw)

    def _coercion_failed(self, node: Hashable, target_class: type, error: CoercionError) -> None:
        if self.config.coercion_errors == "raise":
            raise error
        log.warning(
            "Skipping %s from node %s: %s", target_class.__name__, node, error
        )

    def map_single_per_node(
        self,
        target_class: type[T],
        responses: Responses,
    ) -> dict[Hashable, T | None]:
        """Map each node's flat response, without merging.

        A node that did not respond, or whose object failed to build,
        maps to None.
        """
        mapper = InfoMapper(target_class, self._registry)
        results: dict[Hashable, T | None] = {}
        for node, raw in responses.items():
            self._log_response(node, target_class, raw)
            if raw is None:
                results[node] = None
                continue
            try:
                results[node] = mapper.map_one(parse_flat(raw))
            except CoercionError as e:
                self._coercion_failed(node, target_class, e)
                results[node] = None
        return results

    def map_multiple_per_node(
        self,
        target_class: type[T],
        responses: Responses,
    ) -> dict[Hashable, list[T]]:
        """Map each node's multi-entity response, without merging.

        Entities that fail to build are left out of their node's list.
        """
        mapper = InfoMapper(target_class, self._registry)
        results: dict[Hashable, list[T]] = {}
        for node, raw in responses.items():
            self._log_response(node, target_class, raw)
            items: list[T] = []
            for data in parse_multi(raw):
                try:
                    items.append(mapper.map_one(data))
                except CoercionError as e:
                    self._coercion_failed(node, target_class, e)
            results[node] = items
        return results

    def aggregate_single(
        self,
        target_class: type[T],
        responses: Responses,
    ) -> T | None:
        """Map every node's flat response and merge them into one object.

        Returns None if no node responded or no node's object could be built.

        Raises:
            MergeConflictError: If a MustMatch field disagrees across nodes.
        """
        per_node = self.map_single_per_node(target_class, responses)
        instances = [item for item in per_node.values() if item is not None]
        if not instances:
            return None
        try:
            return self._merger.merge(instances)
        except MergeError as e:
            log.warning(
                "Merging %s across %d node(s) failed: %s", target_class.__name__, len(instances), e
            )
            raise

    def aggregate_multiple(
        self,
        target_class: type[T],
        responses: Responses,
    ) -> list[T]:
        """Map every node's multi-entity response, correlate by key and merge."""
        per_node = self.map_multiple_per_node(target_class, responses)
        return self._correlator.merge(per_node.values())

    def merge_lists(self, responses: Responses) -> set[str]:
        """Union of the comma-separated lists reported by every node."""
        values: set[str] = set()
        for raw in responses.values():
            values.update(parse_list(raw))
        return values
