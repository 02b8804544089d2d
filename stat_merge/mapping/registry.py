"""Descriptor registry - compiles and caches one TypeDescriptor per type.

Descriptors are immutable once built, so the cache only ever grows. Two
threads racing on the first use of a type may both compile it; the
duplicate is discarded and both callers receive the cached instance.
"""

from __future__ import annotations

from stat_merge.mapping.descriptor import TypeDescriptor
from stat_merge.mapping.fields import build_descriptor


class DescriptorRegistry:
    """Compute-if-absent cache of TypeDescriptors.

    No lock is taken: ``dict.get`` and ``dict.setdefault`` are atomic, and
    compiling a descriptor has no side effects.
    """

    def __init__(self) -> None:
        self._descriptors: dict[type, TypeDescriptor] = {}

    def get(self, target_class: type) -> TypeDescriptor:
        """Return the descriptor for ``target_class``, compiling it on first use.

        Raises:
            DescriptorError: If the class declarations are invalid.
        """
        descriptor = self._descriptors.get(target_class)
        if descriptor is None:
            descriptor = self._descriptors.setdefault(
                target_class, build_descriptor(target_class)
            )
        return descriptor

    def has(self, target_class: type) -> bool:
        """Check if a descriptor has already been compiled for a type."""
        return target_class in self._descriptors

    @property
    def types(self) -> list[type]:
        """All types with a compiled descriptor, sorted by qualified name."""
        return sorted(self._descriptors, key=lambda cls: f"{cls.__module__}.{cls.__qualname__}")

    def __len__(self) -> int:
        """Number of compiled descriptors."""
        return len(self._descriptors)


# Process-wide registry used when callers do not pass one
default_registry = DescriptorRegistry()
