"""Contract tests for mapper protocol compliance."""

from __future__ import annotations

from stat_merge.info.sets import SetDetail
from stat_merge.mapping.model import InfoMapper
from stat_merge.mapping.protocol import Mapper
from stat_merge.mapping.registry import DescriptorRegistry


class TestInfoMapperProtocol:
    def test_implements_mapper_protocol(self, registry: DescriptorRegistry) -> None:
        assert isinstance(InfoMapper(SetDetail, registry), Mapper)

    def test_map_one_and_map_many(self, registry: DescriptorRegistry) -> None:
        mapper: Mapper[SetDetail] = InfoMapper(SetDetail, registry)
        one = mapper.map_one({"ns": "test", "set": "users"})
        many = mapper.map_many([{"ns": "test", "set": "users"}, {"ns": "bar", "set": "logs"}])
        assert one == SetDetail(namespace="test", set="users")
        assert [d.namespace for d in many] == ["test", "bar"]

    def test_plain_object_is_not_a_mapper(self) -> None:
        assert not isinstance(object(), Mapper)
