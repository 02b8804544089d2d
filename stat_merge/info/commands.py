"""Typed info commands - sync and async.

Each method sends one info command to every node of the source and runs
the responses through an InfoAggregator. The ``*_per_node`` variants skip
merging and return what each node reported.
"""

from __future__ import annotations

import asyncio
from collections.abc import Hashable

from stat_merge.core.engine import InfoAggregator
from stat_merge.info.namespace import NamespaceDetail
from stat_merge.info.sets import SetDetail
from stat_merge.info.sindex import Sindex, SindexDetail
from stat_merge.sources.protocol import AsyncInfoSource, InfoSource

BUILD = "build"
NAMESPACES = "namespaces"
SETS = "sets"
SINDEX_LIST = "sindex-list"


def namespace_command(namespace: str) -> str:
    return f"namespace/{namespace}"


def sindex_stat_command(namespace: str, index_name: str) -> str:
    return f"sindex-stat:namespace={namespace};indexname={index_name}"


def _find_set(details: list[SetDetail], name: str) -> SetDetail | None:
    return next((detail for detail in details if detail.set == name), None)


class InfoCommands:
    """Cluster-wide info queries over a synchronous InfoSource.

    Args:
        source: Where the per-node responses come from.
        aggregator: Parses, maps and merges responses. Defaults to
            InfoAggregator().

    Example:
        source = StaticInfoSource({"A": {"sets": "..."}, "B": {"sets": "..."}})
        commands = InfoCommands(source)
        for detail in commands.sets():
            print(detail.namespace, detail.set, detail.objects)
    """

    def __init__(self, source: InfoSource, aggregator: InfoAggregator | None = None) -> None:
        self._source = source
        self._aggregator = aggregator if aggregator is not None else InfoAggregator()

    @property
    def aggregator(self) -> InfoAggregator:
        return self._aggregator

    def _fetch(self, command: str) -> dict[Hashable, str | None]:
        return {node: self._source.request(node, command) for node in self._source.nodes()}

    def build(self) -> set[str]:
        """Distinct server builds running in the cluster."""
        return self._aggregator.merge_lists(self._fetch(BUILD))

    def namespaces(self) -> set[str]:
        """Namespaces known to any node."""
        return self._aggregator.merge_lists(self._fetch(NAMESPACES))

    def namespace_details(self, namespace: str) -> NamespaceDetail | None:
        """Merged namespace details, or None if no node reported the namespace."""
        return self._aggregator.aggregate_single(
            NamespaceDetail, self._fetch(namespace_command(namespace))
        )

    def namespace_details_per_node(self, namespace: str) -> dict[Hashable, NamespaceDetail | None]:
        return self._aggregator.map_single_per_node(
            NamespaceDetail, self._fetch(namespace_command(namespace))
        )

    def sets(self) -> list[SetDetail]:
        """Every set in the cluster, merged across nodes."""
        return self._aggregator.aggregate_multiple(SetDetail, self._fetch(SETS))

    def set(self, name: str) -> SetDetail | None:
        """The first merged set named ``name``, in any namespace."""
        return _find_set(self.sets(), name)

    def sets_per_node(self) -> dict[Hashable, list[SetDetail]]:
        return self._aggregator.map_multiple_per_node(SetDetail, self._fetch(SETS))

    def secondary_indexes(self) -> list[Sindex]:
        """Every secondary index in the cluster, merged across nodes.

        An index whose definition differs between nodes is dropped (and
        logged) unless the aggregator is configured to raise.
        """
        return self._aggregator.aggregate_multiple(Sindex, self._fetch(SINDEX_LIST))

    def secondary_indexes_per_node(self) -> dict[Hashable, list[Sindex]]:
        return self._aggregator.map_multiple_per_node(Sindex, self._fetch(SINDEX_LIST))

    def secondary_index_details(self, namespace: str, index_name: str) -> SindexDetail | None:
        """Merged statistics of one secondary index."""
        return self._aggregator.aggregate_single(
            SindexDetail, self._fetch(sindex_stat_command(namespace, index_name))
        )

    def secondary_index_details_per_node(
        self, namespace: str, index_name: str
    ) -> dict[Hashable, SindexDetail | None]:
        return self._aggregator.map_single_per_node(
            SindexDetail, self._fetch(sindex_stat_command(namespace, index_name))
        )

    def index_details(self, index: Sindex) -> SindexDetail | None:
        """Merged statistics of a secondary index returned by secondary_indexes()."""
        return self.secondary_index_details(index.namespace or "", index.index_name or "")

    def index_details_per_node(self, index: Sindex) -> dict[Hashable, SindexDetail | None]:
        return self.secondary_index_details_per_node(index.namespace or "", index.index_name or "")


class AsyncInfoCommands:
    """Cluster-wide info queries over an AsyncInfoSource.

    Requests to the individual nodes of one command run concurrently.
    """

    def __init__(self, source: AsyncInfoSource, aggregator: InfoAggregator | None = None) -> None:
        self._source = source
        self._aggregator = aggregator if aggregator is not None else InfoAggregator()

    @property
    def aggregator(self) -> InfoAggregator:
        return self._aggregator

    async def _fetch(self, command: str) -> dict[Hashable, str | None]:
        nodes = list(self._source.nodes())
        responses = await asyncio.gather(
            *(self._source.request_async(node, command) for node in nodes)
        )
        return dict(zip(nodes, responses))

    async def build(self) -> set[str]:
        return self._aggregator.merge_lists(await self._fetch(BUILD))

    async def namespaces(self) -> set[str]:
        return self._aggregator.merge_lists(await self._fetch(NAMESPACES))

    async def namespace_details(self, namespace: str) -> NamespaceDetail | None:
        return self._aggregator.aggregate_single(
            NamespaceDetail, await self._fetch(namespace_command(namespace))
        )

    async def namespace_details_per_node(
        self, namespace: str
    ) -> dict[Hashable, NamespaceDetail | None]:
        return self._aggregator.map_single_per_node(
            NamespaceDetail, await self._fetch(namespace_command(namespace))
        )

    async def sets(self) -> list[SetDetail]:
        return self._aggregator.aggregate_multiple(SetDetail, await self._fetch(SETS))

    async def set(self, name: str) -> SetDetail | None:
        return _find_set(await self.sets(), name)

    async def sets_per_node(self) -> dict[Hashable, list[SetDetail]]:
        return self._aggregator.map_multiple_per_node(SetDetail, await self._fetch(SETS))

    async def secondary_indexes(self) -> list[Sindex]:
        return self._aggregator.aggregate_multiple(Sindex, await self._fetch(SINDEX_LIST))

    async def secondary_indexes_per_node(self) -> dict[Hashable, list[Sindex]]:
        return self._aggregator.map_multiple_per_node(Sindex, await self._fetch(SINDEX_LIST))

    async def secondary_index_details(
        self, namespace: str, index_name: str
    ) -> SindexDetail | None:
        return self._aggregator.aggregate_single(
            SindexDetail, await self._fetch(sindex_stat_command(namespace, index_name))
        )

    async def secondary_index_details_per_node(
        self, namespace: str, index_name: str
    ) -> dict[Hashable, SindexDetail | None]:
        return self._aggregator.map_single_per_node(
            SindexDetail, await self._fetch(sindex_stat_command(namespace, index_name))
        )

    async def index_details(self, index: Sindex) -> SindexDetail | None:
        return await self.secondary_index_details(index.namespace or "", index.index_name or "")

    async def index_details_per_node(self, index: Sindex) -> dict[Hashable, SindexDetail | None]:
        return await self.secondary_index_details_per_node(
            index.namespace or "", index.index_name or ""
        )
