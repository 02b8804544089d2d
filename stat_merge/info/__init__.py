"""Typed cluster info models and commands."""

from __future__ import annotations

from stat_merge.info.commands import AsyncInfoCommands, InfoCommands
from stat_merge.info.namespace import (
    CompressionAlgorithm,
    ConflictResolutionPolicy,
    NamespaceDetail,
    ReadConsistencyLevelOverride,
    StorageEngine,
    StorageEngineType,
    StorageFileDetail,
    WriteCommitLevelOverride,
)
from stat_merge.info.sets import SetDetail
from stat_merge.info.sindex import IndexState, IndexType, Sindex, SindexDetail

__all__ = [
    # Commands
    "InfoCommands",
    "AsyncInfoCommands",
    # Models
    "NamespaceDetail",
    "StorageEngine",
    "StorageFileDetail",
    "SetDetail",
    "Sindex",
    "SindexDetail",
    # Enums
    "StorageEngineType",
    "CompressionAlgorithm",
    "ConflictResolutionPolicy",
    "ReadConsistencyLevelOverride",
    "WriteCommitLevelOverride",
    "IndexState",
    "IndexType",
]
