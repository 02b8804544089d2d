"""Shared test fixtures."""

from __future__ import annotations

import pytest

from stat_merge.core.engine import InfoAggregator
from stat_merge.mapping.registry import DescriptorRegistry
from stat_merge.sources.static import StaticInfoSource

NAMESPACE_A = (
    "objects=10;master_objects=5;prole_objects=5;effective_replication_factor=2;"
    "stop_writes=false;prefer-uniform-balance=true;migrate-sleep=1;"
    "storage-engine=device;storage-engine.file[0]=/dev/sda;storage-engine.file[1]=/dev/sdb;"
    "storage-engine.file[0].used_bytes=100;storage-engine.flush-size=1048576;"
    "conflict-resolution-policy=generation;replication-factor=2;"
    "data_compression_ratio=1.0;some-future-metric=7"
)

NAMESPACE_B = (
    "objects=15;master_objects=8;prole_objects=7;effective_replication_factor=2;"
    "stop_writes=true;prefer-uniform-balance=false;migrate-sleep=3;"
    "storage-engine=device;storage-engine.file[0]=/dev/sda;"
    "storage-engine.file[0].used_bytes=300;storage-engine.flush-size=1048576;"
    "conflict-resolution-policy=generation;replication-factor=2;"
    "data_compression_ratio=0.5"
)

SETS_A = (
    "ns=test:set=users:objects=10:tombstones=1:truncating=false;"
    "ns=test:set=orders:objects=3:tombstones=0:truncating=false"
)

SETS_B = "ns=test:set=users:objects=15:tombstones=2:truncating=true"

SINDEX_A = (
    "ns=test:indexname=idx_age:set=users:bin=age:type=numeric:indextype=default:"
    "context=NULL:state=RW:entries_per_bval=2;"
    "ns=test:indexname=idx_name:set=users:bin=name:type=string:indextype=default:"
    "context=NULL:state=RW:entries_per_bval=1"
)

SINDEX_B = (
    "ns=test:indexname=idx_age:set=users:bin=age:type=numeric:indextype=default:"
    "context=NULL:state=WO:entries_per_bval=4;"
    "ns=test:indexname=idx_name:set=users:bin=name:type=geojson:indextype=default:"
    "context=NULL:state=RW:entries_per_bval=1"
)


@pytest.fixture
def registry() -> DescriptorRegistry:
    """Fresh descriptor registry, isolated from the process-wide one."""
    return DescriptorRegistry()


@pytest.fixture
def aggregator(registry: DescriptorRegistry) -> InfoAggregator:
    return InfoAggregator(registry=registry)


@pytest.fixture
def cluster_responses() -> dict[str, dict[str, str]]:
    """Captured responses of a two-node cluster, keyed by node then command."""
    return {
        "A": {
            "build": "7.1.0.0",
            "namespaces": "test,bar",
            "namespace/test": NAMESPACE_A,
            "sets": SETS_A,
            "sindex-list": SINDEX_A,
            "sindex-stat:namespace=test;indexname=idx_age": (
                "entries=100;used_bytes=4096;entries_per_bval=2;load_pct=100"
            ),
        },
        "B": {
            "build": "7.1.0.1",
            "namespaces": "test",
            "namespace/test": NAMESPACE_B,
            "sets": SETS_B,
            "sindex-list": SINDEX_B,
            "sindex-stat:namespace=test;indexname=idx_age": (
                "entries=50;used_bytes=2048;entries_per_bval=4;load_pct=50"
            ),
        },
    }


@pytest.fixture
def static_source(cluster_responses: dict[str, dict[str, str]]) -> StaticInfoSource:
    return StaticInfoSource(cluster_responses)
