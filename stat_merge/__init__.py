"""StatMerge - typed mapping and cluster-wide merging of node info responses."""

from __future__ import annotations

from stat_merge.core.config import AggregationConfig
from stat_merge.core.engine import InfoAggregator
from stat_merge.core.enums import FieldKind
from stat_merge.core.exceptions import (
    CoercionError,
    DescriptorError,
    MappingError,
    MergeConflictError,
    MergeError,
    SourceError,
    StatMergeError,
    UnknownKeyError,
)
from stat_merge.core.parser import parse_flat, parse_list, parse_multi
from stat_merge.core.policies import (
    Aggregate,
    And,
    Average,
    FirstOf,
    Maximum,
    MergePolicy,
    Minimum,
    MostCommon,
    MustMatch,
    Or,
)
from stat_merge.info.commands import AsyncInfoCommands, InfoCommands
from stat_merge.mapping.model import InfoMapper
from stat_merge.mapping.registry import DescriptorRegistry
from stat_merge.mapping.tags import Key, KeyMapping, Named, mapping, mappings
from stat_merge.merging.correlator import RecordCorrelator
from stat_merge.merging.merger import StatMerger
from stat_merge.sources.protocol import AsyncInfoSource, InfoSource
from stat_merge.sources.static import AsyncStaticInfoSource, StaticInfoSource

__all__ = [
    # Config
    "AggregationConfig",
    # Facade
    "InfoAggregator",
    "InfoCommands",
    "AsyncInfoCommands",
    # Parser
    "parse_flat",
    "parse_multi",
    "parse_list",
    # Mapping
    "InfoMapper",
    "DescriptorRegistry",
    "Key",
    "Named",
    "KeyMapping",
    "mapping",
    "mappings",
    # Merging
    "StatMerger",
    "RecordCorrelator",
    "MergePolicy",
    "Aggregate",
    "Average",
    "Minimum",
    "Maximum",
    "And",
    "Or",
    "MostCommon",
    "FirstOf",
    "MustMatch",
    # Sources
    "InfoSource",
    "AsyncInfoSource",
    "StaticInfoSource",
    "AsyncStaticInfoSource",
    # Enums
    "FieldKind",
    # Exceptions
    "StatMergeError",
    "DescriptorError",
    "MappingError",
    "UnknownKeyError",
    "CoercionError",
    "MergeError",
    "MergeConflictError",
    "SourceError",
]
