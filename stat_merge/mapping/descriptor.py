"""Type descriptor data classes.

Frozen dataclasses describing a compiled target type. A descriptor is
built once per type by ``build_descriptor`` and shared read-only by every
mapping and merge that touches the type.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from stat_merge.core.enums import FieldKind
from stat_merge.core.policies import MergePolicy
from stat_merge.mapping.translator import RewriteRule, translate_key


@dataclass(frozen=True)
class FieldDescriptor:
    """Compiled metadata for one field of a target type."""

    name: str
    kind: FieldKind
    value_type: Any  # scalar/enum/nested type, or the element type of a list
    aliases: tuple[str, ...]
    element_kind: FieldKind | None = None  # lists only
    key: bool = False
    alias: str | None = None  # explicit Named(...) alias
    policy: MergePolicy | None = None  # declared or type default

    @property
    def is_list(self) -> bool:
        return self.kind is FieldKind.LIST


@dataclass(frozen=True)
class TypeDescriptor:
    """Compiled, validated descriptor for a target type."""

    target_class: type
    fields: tuple[FieldDescriptor, ...]
    aliases: Mapping[str, FieldDescriptor]  # read-only view
    rules: tuple[RewriteRule, ...] = ()
    key_fields: tuple[FieldDescriptor, ...] = field(default_factory=tuple)
    attributes: Mapping[str, FieldDescriptor] = field(default_factory=dict)

    def translate(self, key: str) -> str:
        """Rewrite a raw key with this type's rules."""
        return translate_key(self.rules, key)
