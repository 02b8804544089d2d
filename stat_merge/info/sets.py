"""Set statistics (``sets``)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated

from stat_merge.core.policies import MostCommon, Or
from stat_merge.mapping.tags import Key, Named


@dataclass
class SetDetail:
    """One set of one namespace, identified by ``ns`` and ``set``."""

    namespace: Annotated[str | None, Key, Named("ns")] = None
    set: Annotated[str | None, Key] = None
    objects: int = 0
    tombstones: int = 0
    data_used_bytes: int = 0
    truncate_lut: Annotated[int, MostCommon] = 0
    sindexes: Annotated[int, MostCommon] = 0
    index_populating: Annotated[bool, Or] = False
    truncating: Annotated[bool, Or] = False
    default_read_touch_ttl_pct: Annotated[int, MostCommon] = 0
    default_ttl: Annotated[int, MostCommon] = 0
    disable_eviction: bool = False
    enable_index: bool = False
    stop_writes_count: Annotated[int, MostCommon] = 0
    stop_writes_size: Annotated[int, MostCommon] = 0
