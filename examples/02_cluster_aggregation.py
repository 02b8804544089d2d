"""
Example 02: Cluster Aggregation

This example demonstrates merging per-node info responses into
cluster-wide views with InfoCommands, sync and async.
"""

import asyncio
import logging

from stat_merge import (
    AggregationConfig,
    AsyncInfoCommands,
    AsyncStaticInfoSource,
    InfoAggregator,
    InfoCommands,
    StaticInfoSource,
)

RESPONSES = {
    "10.0.0.1:3000": {
        "build": "7.1.0.0",
        "namespaces": "test,bar",
        "namespace/test": "objects=10;stop_writes=false;storage-engine=memory",
        "sets": "ns=test:set=users:objects=10;ns=test:set=orders:objects=3",
        "sindex-list": (
            "ns=test:indexname=idx_age:set=users:bin=age:type=numeric:"
            "indextype=default:state=RW:entries_per_bval=2"
        ),
    },
    "10.0.0.2:3000": {
        "build": "7.1.0.0",
        "namespaces": "test",
        "namespace/test": "objects=15;stop_writes=true;storage-engine=memory",
        "sets": "ns=test:set=users:objects=15",
        "sindex-list": (
            "ns=test:indexname=idx_age:set=users:bin=age:type=numeric:"
            "indextype=default:state=WO:entries_per_bval=4"
        ),
    },
}


def sync_queries():
    commands = InfoCommands(StaticInfoSource(RESPONSES))

    print("1. Lists merged across nodes:")
    print(f"   Builds: {sorted(commands.build())}")
    print(f"   Namespaces: {sorted(commands.namespaces())}\n")

    print("2. Namespace details:")
    detail = commands.namespace_details("test")
    print(f"   Objects (summed): {detail.objects}")
    print(f"   Stop writes (any node): {detail.stop_writes}")
    for node, node_detail in commands.namespace_details_per_node("test").items():
        print(f"   {node}: {node_detail.objects} objects")
    print()

    print("3. Sets correlated by namespace and set name:")
    for set_detail in commands.sets():
        print(f"   {set_detail.namespace}.{set_detail.set}: {set_detail.objects} objects")
    print()


async def async_queries():
    aggregator = InfoAggregator(AggregationConfig(log_responses=True))
    commands = AsyncInfoCommands(AsyncStaticInfoSource(RESPONSES), aggregator)

    print("4. Secondary indexes (async):")
    for index in await commands.secondary_indexes():
        # One node still building the index makes it WO cluster-wide
        print(f"   {index.index_name}: {index.type.name}, state {index.state.name}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.WARNING)
    sync_queries()
    asyncio.run(async_queries())
