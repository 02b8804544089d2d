"""Unit tests for StatMerger."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Annotated

import pytest

from stat_merge.core.exceptions import MergeConflictError, MergeError
from stat_merge.core.policies import FirstOf, MustMatch
from stat_merge.info.namespace import (
    NamespaceDetail,
    StorageEngine,
    StorageEngineType,
    StorageFileDetail,
)
from stat_merge.mapping.registry import DescriptorRegistry
from stat_merge.mapping.tags import Key
from stat_merge.merging.merger import StatMerger, merge


class Opaque:
    """A value with no merge policy and no structure."""

    def __init__(self, tag: str) -> None:
        self.tag = tag


@dataclass
class Counters:
    hits: int = 0
    ratio: float = 0.0
    healthy: bool = True
    state: Annotated[str | None, FirstOf("WO", "RW")] = None
    kind: Annotated[str | None, MustMatch] = None
    ports: list[int] = field(default_factory=list)
    extra: Opaque | None = None


@dataclass
class Other:
    hits: int = 0


@dataclass
class Partition:
    id: Annotated[int, Key] = 0
    records: int = 0


@pytest.fixture
def merger(registry: DescriptorRegistry) -> StatMerger:
    return StatMerger(registry)


class TestStatMerger:
    def test_type_defaults(self, merger: StatMerger) -> None:
        result = merger.merge(
            [
                Counters(hits=1, ratio=1.0, healthy=True),
                Counters(hits=2, ratio=0.0, healthy=False),
            ]
        )
        assert result.hits == 3
        assert result.ratio == 0.5
        assert result.healthy is False

    def test_declared_policies(self, merger: StatMerger) -> None:
        result = merger.merge(
            [
                Counters(state="RW", kind="numeric"),
                Counters(state="WO", kind="numeric"),
                Counters(state="RW", kind="numeric"),
            ]
        )
        assert result.state == "WO"
        assert result.kind == "numeric"

    def test_int_key_field_is_not_summed(self, merger: StatMerger) -> None:
        result = merger.merge([Partition(id=7, records=1), Partition(id=7, records=2)])
        assert result == Partition(id=7, records=3)

    def test_key_field_disagreement(self, merger: StatMerger) -> None:
        with pytest.raises(MergeConflictError):
            merger.merge([Partition(id=1), Partition(id=2)])

    def test_none_values_do_not_contribute(self, merger: StatMerger) -> None:
        result = merger.merge([Counters(kind="numeric"), Counters(kind=None)])
        assert result.kind == "numeric"

    def test_must_match_conflict_propagates(self, merger: StatMerger) -> None:
        with pytest.raises(MergeConflictError):
            merger.merge([Counters(kind="numeric"), Counters(kind="string")])

    def test_list_of_scalars_merged_by_column(self, merger: StatMerger) -> None:
        result = merger.merge([Counters(ports=[1, 2]), Counters(ports=[10])])
        assert result.ports == [11, 2]

    def test_fallback_takes_first_value(self, merger: StatMerger) -> None:
        first, second = Opaque("a"), Opaque("b")
        result = merger.merge([Counters(extra=first), Counters(extra=second)])
        assert result.extra is first

    def test_inputs_are_not_modified(self, merger: StatMerger) -> None:
        a, b = Counters(hits=1), Counters(hits=2)
        result = merger.merge([a, b])
        assert result is not a
        assert (a.hits, b.hits) == (1, 2)

    def test_single_instance(self, merger: StatMerger) -> None:
        result = merger.merge([Counters(hits=4, state="RW")])
        assert result == Counters(hits=4, state="RW")

    def test_nothing_to_merge(self, merger: StatMerger) -> None:
        assert merger.merge([]) is None
        assert merger.merge([None, None]) is None

    def test_mixed_types(self, merger: StatMerger) -> None:
        with pytest.raises(MergeError, match="Cannot merge"):
            merger.merge([Counters(), Other()])

    def test_module_level_merge(self) -> None:
        assert merge([Other(hits=1), Other(hits=2)]).hits == 3


class TestNamespaceMerge:
    def test_nested_storage_engine(self, merger: StatMerger) -> None:
        a = NamespaceDetail(
            objects=10,
            migrate_sleep=1,
            prefer_uniform_balance=True,
            storage_engine=StorageEngine(
                type=StorageEngineType.DEVICE,
                files=[
                    StorageFileDetail(file_path="/dev/sda", used_bytes=100),
                    StorageFileDetail(file_path="/dev/sdb", used_bytes=50),
                ],
            ),
        )
        b = NamespaceDetail(
            objects=15,
            migrate_sleep=3,
            prefer_uniform_balance=False,
            storage_engine=StorageEngine(
                type=StorageEngineType.DEVICE,
                files=[StorageFileDetail(file_path="/dev/sda", used_bytes=300)],
            ),
        )

        result = merger.merge([a, b])

        assert result.objects == 25
        assert result.migrate_sleep == 2
        assert result.prefer_uniform_balance is False
        engine = result.storage_engine
        assert engine is not a.storage_engine
        assert engine.type is StorageEngineType.DEVICE
        assert [f.file_path for f in engine.files] == ["/dev/sda", "/dev/sdb"]
        assert [f.used_bytes for f in engine.files] == [400, 50]

    def test_engine_reported_by_one_node(self, merger: StatMerger) -> None:
        a = NamespaceDetail(objects=1, storage_engine=StorageEngine(type=StorageEngineType.PMEM))
        b = NamespaceDetail(objects=2)
        result = merger.merge([a, b])
        assert result.storage_engine.type is StorageEngineType.PMEM
        assert result.storage_engine is not a.storage_engine
