"""Mapper protocol.

All mappers implement this interface. The aggregator calls map_one for
each parsed entity of a flat or multi-entity response.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol, TypeVar, runtime_checkable

T = TypeVar("T", covariant=True)


@runtime_checkable
class Mapper(Protocol[T]):
    """Base mapper protocol."""

    def map_one(self, data: Mapping[str, str]) -> T:
        """Map one key-value map to a target object."""
        ...

    def map_many(self, items: list[Mapping[str, str]]) -> list[T]:
        """Map several key-value maps to a list of target objects."""
        ...
