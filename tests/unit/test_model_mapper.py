"""Unit tests for InfoMapper."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Annotated

import pytest
from pydantic import BaseModel

from stat_merge.core.exceptions import CoercionError, DescriptorError, MappingError
from stat_merge.info.namespace import NamespaceDetail, StorageEngineType
from stat_merge.info.sets import SetDetail
from stat_merge.mapping.model import InfoMapper
from stat_merge.mapping.registry import DescriptorRegistry
from stat_merge.mapping.tags import Named, mapping


@dataclass
class NodeStats:
    client_connections: int = 0
    uptime: int = 0
    cluster_name: str | None = None


class NodeStatsModel(BaseModel):
    client_connections: int = 0
    cluster_name: str | None = None


class NodeStatsPlain:
    client_connections: int
    cluster_name: str

    def __init__(self) -> None:
        self.client_connections = 0
        self.cluster_name = ""


class RequiredName(BaseModel):
    name: str
    objects: int = 0


@dataclass
class WithDecimal:
    objects: int = 0
    ratio: Decimal | None = None
    labels: dict | None = None


@mapping("old-name", "cluster-name")
@dataclass
class Renamed:
    cluster_name: str | None = None


class TestInfoMapper:
    def test_map_to_dataclass(self, registry: DescriptorRegistry) -> None:
        mapper = InfoMapper(NodeStats, registry)
        result = mapper.map_one({"client_connections": "12", "uptime": "300"})
        assert isinstance(result, NodeStats)
        assert result.client_connections == 12
        assert result.uptime == 300

    def test_config_and_metric_style_keys(self, registry: DescriptorRegistry) -> None:
        mapper = InfoMapper(NodeStats, registry)
        result = mapper.map_one({"client-connections": "5", "cluster_name": "prod"})
        assert result.client_connections == 5
        assert result.cluster_name == "prod"

    def test_map_to_pydantic(self, registry: DescriptorRegistry) -> None:
        mapper = InfoMapper(NodeStatsModel, registry)
        result = mapper.map_one({"client_connections": "7"})
        assert isinstance(result, NodeStatsModel)
        assert result.client_connections == 7

    def test_map_to_plain_class(self, registry: DescriptorRegistry) -> None:
        mapper = InfoMapper(NodeStatsPlain, registry)
        result = mapper.map_one({"cluster-name": "prod"})
        assert isinstance(result, NodeStatsPlain)
        assert result.cluster_name == "prod"

    def test_unknown_keys_are_skipped_and_logged(
        self, registry: DescriptorRegistry, caplog: pytest.LogCaptureFixture
    ) -> None:
        mapper = InfoMapper(NodeStats, registry)
        with caplog.at_level(logging.DEBUG, logger="stat_merge.mapping.model"):
            result = mapper.map_one({"brand-new-metric": "1", "uptime": "9"})
        assert result.uptime == 9
        assert "Unknown key encountered: brand-new-metric = 1" in caplog.text

    def test_bad_literal_aborts_object(self, registry: DescriptorRegistry) -> None:
        mapper = InfoMapper(NodeStats, registry)
        with pytest.raises(CoercionError):
            mapper.map_one({"uptime": "9", "client_connections": "many"})

    def test_field_without_text_conversion_is_skipped(
        self, registry: DescriptorRegistry, caplog: pytest.LogCaptureFixture
    ) -> None:
        mapper = InfoMapper(WithDecimal, registry)
        with caplog.at_level(logging.DEBUG, logger="stat_merge.mapping.model"):
            result = mapper.map_one({"objects": "5", "ratio": "1.5", "labels": "a"})
        assert result == WithDecimal(objects=5)
        assert "Unknown key encountered: ratio = 1.5" in caplog.text

    def test_pydantic_model_with_required_field(self, registry: DescriptorRegistry) -> None:
        mapper = InfoMapper(RequiredName, registry)
        with pytest.raises(MappingError, match="RequiredName") as exc_info:
            mapper.map_one({"objects": "1"})
        assert exc_info.value.__cause__ is not None

    def test_class_mapping_rule(self, registry: DescriptorRegistry) -> None:
        result = InfoMapper(Renamed, registry).map_one({"old-name": "legacy"})
        assert result.cluster_name == "legacy"

    def test_map_many(self, registry: DescriptorRegistry) -> None:
        mapper = InfoMapper(NodeStats, registry)
        results = mapper.map_many([{"uptime": "1"}, {"uptime": "2"}])
        assert [r.uptime for r in results] == [1, 2]

    def test_map_flat(self, registry: DescriptorRegistry) -> None:
        result = InfoMapper(NodeStats, registry).map_flat("uptime=5;cluster_name=prod")
        assert result.uptime == 5
        assert result.cluster_name == "prod"

    def test_map_multi(self, registry: DescriptorRegistry) -> None:
        results = InfoMapper(SetDetail, registry).map_multi(
            "ns=test:set=users:objects=10;ns=test:set=orders:objects=3"
        )
        assert [(r.namespace, r.set, r.objects) for r in results] == [
            ("test", "users", 10),
            ("test", "orders", 3),
        ]

    def test_invalid_declaration_fails_at_construction(
        self, registry: DescriptorRegistry
    ) -> None:
        @dataclass
        class Clash:
            a: Annotated[int, Named("x")] = 0
            b: Annotated[int, Named("x")] = 0

        with pytest.raises(DescriptorError):
            InfoMapper(Clash, registry)

    def test_target_class(self, registry: DescriptorRegistry) -> None:
        assert InfoMapper(NodeStats, registry).target_class is NodeStats


class TestNamespaceMapping:
    def test_full_namespace_response(self, registry: DescriptorRegistry) -> None:
        raw = (
            "objects=10;effective_replication_factor=2;storage-engine=device;"
            "storage-engine.file[0]=/dev/sda;storage-engine.file[1]=/dev/sdb;"
            "storage-engine.file[0].used_bytes=100;prefer-uniform-balance=true"
        )
        detail = InfoMapper(NamespaceDetail, registry).map_flat(raw)

        assert detail.objects == 10
        assert detail.effective_replication_factor == 2
        assert detail.prefer_uniform_balance is True
        assert detail.storage_engine.type is StorageEngineType.DEVICE
        assert [f.file_path for f in detail.storage_engine.files] == ["/dev/sda", "/dev/sdb"]
        assert detail.storage_engine.files[0].used_bytes == 100
