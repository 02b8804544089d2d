"""
Example 01: Parsing and Mapping

This example demonstrates turning raw info responses into typed objects
with InfoMapper, declarative field tags and key rewrite rules.
"""

from dataclasses import dataclass
from typing import Annotated

from stat_merge import InfoMapper, Key, Named, mapping, parse_flat, parse_multi
from stat_merge.info import NamespaceDetail


@mapping(r"ver(\d+)", "version-$1")
@dataclass
class Service:
    name: Annotated[str | None, Key, Named("svc")] = None
    client_connections: int = 0
    version_1: str | None = None


def main():
    # 1. Parse the two response grammars
    print("1. Parsing raw responses:")
    print(f"   Flat:  {parse_flat('objects=10;stop_writes=false')}")
    print(f"   Multi: {parse_multi('ns=test:set=users;ns=test:set=orders')}\n")

    # 2. Map a flat response onto a dataclass
    print("2. Mapping to a dataclass:")
    mapper = InfoMapper(Service)
    service = mapper.map_flat("svc=cache;client-connections=42;ver1=7.1;unheard-of=1")
    print(f"   {service}")
    print("   (unknown keys are skipped and logged at DEBUG)\n")

    # 3. Storage engine keys are rewritten onto nested objects
    print("3. Mapping a namespace response:")
    detail = InfoMapper(NamespaceDetail).map_flat(
        "objects=1000;storage-engine=device;"
        "storage-engine.file[0]=/dev/nvme0n1;storage-engine.file[1]=/dev/nvme1n1;"
        "storage-engine.file[0].used_bytes=4096;storage-engine.compression=zstd"
    )
    engine = detail.storage_engine
    print(f"   Objects: {detail.objects}")
    print(f"   Engine: {engine.type.name}, compression {engine.compression.name}")
    for file in engine.files:
        print(f"   File: {file.file_path} ({file.used_bytes} bytes used)")


if __name__ == "__main__":
    main()
