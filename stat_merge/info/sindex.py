"""Secondary indexes (``sindex-list``) and their statistics (``sindex-stat``)."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Annotated

from stat_merge.core.policies import Average, FirstOf, MustMatch
from stat_merge.mapping.tags import Key, Named


class IndexState(Enum):
    WO = "WO"
    RW = "RW"


class IndexType(Enum):
    STRING = "STRING"
    NUMERIC = "NUMERIC"
    GEOJSON = "GEOJSON"
    BLOB = "BLOB"
    MAPVALUES = "MAPVALUES"
    MAPKEYS = "MAPKEYS"
    LISTINDEXES = "LISTINDEXES"


@dataclass
class Sindex:
    """A secondary index as listed by one node.

    The definition must agree on every node. An index still building on
    any node (``WO``, write-only) is reported as building cluster-wide.
    """

    namespace: Annotated[str | None, Key, Named("ns")] = None
    index_name: Annotated[str | None, Key, Named("indexname")] = None
    set: Annotated[str | None, Key] = None
    bin: Annotated[str | None, Key] = None
    type: Annotated[IndexType | None, MustMatch] = None
    index_type: Annotated[str | None, MustMatch, Named("indextype")] = None
    context: str | None = None
    exp: str | None = None
    state: Annotated[IndexState | None, FirstOf("WO", "RW")] = None
    entries_per_bval: Annotated[int, Average] = 0


@dataclass
class SindexDetail:
    """Statistics of one secondary index."""

    entries: int = 0
    used_bytes: int = 0
    entries_per_bval: Annotated[int, Average] = 0
    entries_per_rec: Annotated[int, Average] = 0
    load_pct: Annotated[int, Average] = 0
    load_time: int = 0
    stat_gc_recs: int = 0
