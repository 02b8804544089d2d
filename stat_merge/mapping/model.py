"""Key-value to typed object mapper.

Supports dataclasses, Pydantic models, and plain classes, provided they
can be instantiated without arguments.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Generic, TypeVar

from stat_merge.core.exceptions import UnknownKeyError
from stat_merge.core.parser import parse_flat, parse_multi
from stat_merge.mapping.builder import ObjectBuilder, new_instance
from stat_merge.mapping.registry import DescriptorRegistry, default_registry

T = TypeVar("T")

log = logging.getLogger(__name__)


class InfoMapper(Generic[T]):
    """Maps parsed info data onto instances of ``target_class``.

    Every raw key is rewritten by the target type's key mappings and then
    assigned through the object builder. Keys that resolve to no field, or
    to a field whose type has no text conversion, are logged and skipped;
    a malformed value for a known field aborts the whole object.

    Args:
        target_class: The class to construct from info data.
        registry: Descriptor registry. Defaults to the process-wide one.
    """

    def __init__(
        self,
        target_class: type[T],
        registry: DescriptorRegistry | None = None,
    ) -> None:
        self._target_class = target_class
        self._registry = registry if registry is not None else default_registry
        self._builder = ObjectBuilder(self._registry)
        # Fail fast on bad declarations
        self._descriptor = self._registry.get(target_class)

    @property
    def target_class(self) -> type[T]:
        return self._target_class

    def map_one(self, data: Mapping[str, str]) -> T:
        """Map a single key-value map to a target_class instance.

        Raises:
            CoercionError: If a known field receives a malformed value.
            MappingError: If target_class cannot be instantiated.
        """
        instance: Any = new_instance(self._target_class)
        for raw_key, value in data.items():
            path = self._descriptor.translate(raw_key)
            try:
                self._builder.set_path(instance, path, value)
            except UnknownKeyError:
                self._handle_unknown_key(path, value)
        return instance

    def map_many(self, items: list[Mapping[str, str]]) -> list[T]:
        """Map all key-value maps via map_one."""
        return [self.map_one(item) for item in items]

    def map_flat(self, raw: str | None) -> T:
        """Parse a flat response and map it."""
        return self.map_one(parse_flat(raw))

    def map_multi(self, raw: str | None) -> list[T]:
        """Parse a multi-entity response and map every entity."""
        return self.map_many(parse_multi(raw))

    def _handle_unknown_key(self, key: str, value: str) -> None:
        log.debug(
            "Unknown key encountered: %s = %s (target class: %s)",
            key,
            value,
            self._target_class.__name__,
        )
