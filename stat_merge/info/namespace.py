"""Namespace statistics and configuration (``namespace/<ns>``)."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Annotated

from stat_merge.core.policies import Aggregate, And, Average, Maximum, Minimum, MostCommon, Or
from stat_merge.mapping.tags import KeyMapping, Named, mappings


class StorageEngineType(Enum):
    MEMORY = "memory"
    DEVICE = "device"
    PMEM = "pmem"


class CompressionAlgorithm(Enum):
    NONE = "none"
    LZ4 = "lz4"
    SNAPPY = "snappy"
    ZSTD = "zstd"


class ConflictResolutionPolicy(Enum):
    GENERATION = "generation"
    LAST_UPDATE_TIME = "last-update-time"


class ReadConsistencyLevelOverride(Enum):
    OFF = "off"
    ONE = "one"
    ALL = "all"


class WriteCommitLevelOverride(Enum):
    OFF = "off"
    ALL = "all"
    MASTER = "master"


@dataclass
class StorageFileDetail:
    """Per-device (or per-file) storage statistics."""

    file_path: str | None = None
    used_bytes: int = 0
    free_wblocks: int = 0
    read_errors: int = 0
    write_q: int = 0
    writes: int = 0
    partial_writes: int = 0
    defrag_q: int = 0
    defrag_reads: int = 0
    defrag_writes: int = 0
    defrag_partial_writes: int = 0
    age: int = 0


@dataclass
class StorageEngine:
    """The ``storage-engine.*`` block of a namespace.

    Servers report the engine type under the bare ``storage-engine`` key
    and each device path under ``storage-engine.file[N]``; NamespaceDetail
    rewrites both onto this object.
    """

    type: StorageEngineType | None = None
    files: Annotated[list[StorageFileDetail], Named("file")] = field(default_factory=list)
    cache_replica_writes: bool = False
    cold_start_empty: bool = False
    commit_to_device: bool = False
    compression: CompressionAlgorithm | None = None
    compression_acceleration: Annotated[int, MostCommon] = 0
    compression_level: Annotated[int, MostCommon] = 0
    defrag_lwm_pct: Annotated[int, MostCommon] = 0
    defrag_queue_min: Annotated[int, MostCommon] = 0
    defrag_sleep: Annotated[int, MostCommon] = 0
    defrag_startup_minimum: Annotated[int, MostCommon] = 0
    direct_files: bool = False
    disable_odsync: bool = False
    enable_benchmarks_storage: bool = False
    encryption_key_file: str | None = None
    encryption_old_key_file: str | None = None
    evict_used_pct: Annotated[int, MostCommon] = 0
    filesize: Annotated[int, MostCommon] = 0
    flush_max_ms: Annotated[int, MostCommon] = 0
    flush_size: Annotated[int, MostCommon] = 0
    max_write_cache: Annotated[int, MostCommon] = 0
    post_write_cache: Annotated[int, MostCommon] = 0
    read_page_cache: bool = False
    serialize_tomb_raider: bool = False
    sindex_startup_device_scan: bool = False
    stop_writes_avail_pct: Annotated[int, MostCommon] = 0
    stop_writes_used_pct: Annotated[int, MostCommon] = 0
    tomb_raider_sleep: Annotated[int, MostCommon] = 0


@mappings(
    KeyMapping("storage-engine", "storage-engine.type"),
    KeyMapping(r"storage-engine.file\[(\d+)\]", "storage-engine.files[$1].filePath"),
)
@dataclass
class NamespaceDetail:
    """Statistics and configuration of one namespace.

    Counters sum across nodes. Configuration values, which every node
    should report identically, take the value most nodes agree on.
    """

    effective_replication_factor: Annotated[int, Average] = 0
    objects: Annotated[int, Aggregate] = 0
    tombstones: int = 0
    xdr_tombstones: int = 0
    xdr_bin_cemeteries: int = 0
    mrt_provisionals: int = 0
    master_objects: Annotated[int, Aggregate] = 0
    master_tombstones: Annotated[int, Aggregate] = 0
    prole_objects: Annotated[int, Aggregate] = 0
    prole_tombstones: Annotated[int, Aggregate] = 0
    non_replica_objects: Annotated[int, Aggregate] = 0
    non_replica_tombstones: Annotated[int, Aggregate] = 0
    unreplicated_records: Annotated[int, Aggregate] = 0
    dead_partitions: int = 0
    unavailable_partitions: int = 0
    auto_revived_partitions: int = 0

    # Node state
    clock_skew_stop_writes: Annotated[bool, Or] = False
    stop_writes: Annotated[bool, Or] = False
    hwm_breached: Annotated[bool, Or] = False
    current_time: Annotated[int, Maximum] = 0
    non_expirable_objects: int = 0
    expired_objects: int = 0
    evicted_objects: int = 0
    evict_ttl: Annotated[int, Maximum] = 0
    evict_void_time: Annotated[int, Maximum] = 0
    nsup_cycle_duration: Annotated[int, Maximum] = 0
    nsup_cycle_deleted_pct: float = 0.0
    truncate_lut: Annotated[int, Maximum] = 0
    truncating: Annotated[bool, Or] = False

    # Memory and storage usage
    index_used_bytes: int = 0
    set_index_used_bytes: int = 0
    sindex_used_bytes: int = 0
    data_total_bytes: int = 0
    data_used_bytes: int = 0
    data_used_pct: Annotated[int, Maximum] = 0
    data_avail_pct: Annotated[int, Minimum] = 0
    data_compression_ratio: float = 0.0
    cache_read_pct: Annotated[int, Average] = 0

    # Quiesce and rebalance
    pending_quiesce: Annotated[bool, Or] = False
    effective_is_quiesced: Annotated[bool, Or] = False
    nodes_quiesced: Annotated[int, MostCommon] = 0
    effective_prefer_uniform_balance: bool = False
    effective_active_rack: Annotated[int, MostCommon] = 0

    # Migrations
    migrate_tx_partitions_imbalance: int = 0
    migrate_tx_partitions_active: int = 0
    migrate_rx_partitions_active: int = 0
    migrate_tx_partitions_initial: int = 0
    migrate_tx_partitions_remaining: int = 0
    migrate_rx_partitions_initial: int = 0
    migrate_rx_partitions_remaining: int = 0
    migrate_records_transmitted: int = 0
    migrate_record_receives: int = 0

    # Client transactions
    client_read_success: int = 0
    client_read_error: int = 0
    client_read_timeout: int = 0
    client_read_not_found: int = 0
    client_write_success: int = 0
    client_write_error: int = 0
    client_write_timeout: int = 0
    client_delete_success: int = 0
    client_delete_error: int = 0
    client_delete_timeout: int = 0
    client_delete_not_found: int = 0
    client_udf_complete: int = 0
    client_udf_error: int = 0
    client_udf_timeout: int = 0
    batch_sub_read_success: int = 0
    batch_sub_read_error: int = 0
    batch_sub_write_success: int = 0
    batch_sub_write_error: int = 0
    fail_key_busy: int = 0
    fail_generation: int = 0
    fail_record_too_big: int = 0

    # Configuration
    active_rack: Annotated[int, MostCommon] = 0
    allow_ttl_without_nsup: bool = False
    auto_revive: bool = False
    conflict_resolution_policy: ConflictResolutionPolicy | None = None
    conflict_resolve_writes: bool = False
    default_ttl: Annotated[int, MostCommon] = 0
    disable_write_dup_res: bool = False
    evict_tenths_pct: Annotated[int, MostCommon] = 0
    max_record_size: Annotated[int, MostCommon] = 0
    migrate_order: Annotated[int, MostCommon] = 0
    migrate_retransmit_ms: Annotated[int, MostCommon] = 0
    migrate_sleep: Annotated[int, Average] = 0
    nsup_period: Annotated[int, MostCommon] = 0
    nsup_threads: Annotated[int, MostCommon] = 0
    prefer_uniform_balance: Annotated[bool, And] = False
    rack_id: Annotated[int, MostCommon] = 0
    read_consistency_level_override: ReadConsistencyLevelOverride | None = None
    reject_non_xdr_writes: bool = False
    reject_xdr_writes: bool = False
    replication_factor: Annotated[int, MostCommon] = 0
    single_query_threads: Annotated[int, MostCommon] = 0
    stop_writes_sys_memory_pct: Annotated[int, MostCommon] = 0
    strong_consistency: bool = False
    strong_consistency_allow_expunge: bool = False
    tomb_raider_eligible_age: Annotated[int, MostCommon] = 0
    tomb_raider_period: Annotated[int, MostCommon] = 0
    transaction_pending_limit: Annotated[int, MostCommon] = 0
    truncate_threads: Annotated[int, MostCommon] = 0
    write_commit_level_override: WriteCommitLevelOverride | None = None
    xdr_bin_tombstone_ttl: Annotated[int, MostCommon] = 0

    storage_engine: StorageEngine | None = None
