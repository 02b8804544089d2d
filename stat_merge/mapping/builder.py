"""Reflective object builder.

Assigns one string value to a live object along a canonical path such as
``storage-engine.files[0].filePath``. Intermediate objects and lists are
created on demand; index-addressed lists are padded with ``None`` until
the index exists.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import ValidationError

from stat_merge.core.enums import FieldKind
from stat_merge.core.exceptions import CoercionError, MappingError, UnknownKeyError
from stat_merge.mapping.descriptor import FieldDescriptor, TypeDescriptor
from stat_merge.mapping.fields import resolve_field
from stat_merge.mapping.registry import DescriptorRegistry, default_registry

# name[3]
_INDEXED_TOKEN = re.compile(r"^(.*)\[(\d+)\]$")

_TRUE_LITERALS = frozenset({"true"})
_FALSE_LITERALS = frozenset({"false"})

_TEXT_TYPES = (str, bool, int, float)


@dataclass(frozen=True)
class PathToken:
    """One segment of a canonical path."""

    name: str
    index: int | None = None


def parse_path(path: str) -> list[PathToken]:
    """Split a dotted canonical path into tokens."""
    tokens = []
    for part in path.split("."):
        match = _INDEXED_TOKEN.match(part)
        if match:
            tokens.append(PathToken(match.group(1), int(match.group(2))))
        else:
            tokens.append(PathToken(part))
    return tokens


def _parse_bool(text: str) -> bool:
    lowered = text.strip().lower()
    if lowered in _TRUE_LITERALS:
        return True
    if lowered in _FALSE_LITERALS:
        return False
    raise ValueError(f"not a boolean literal: {text!r}")


def is_convertible(value_type: Any) -> bool:
    """Whether text can be converted to ``value_type``."""
    if value_type in _TEXT_TYPES:
        return True
    return isinstance(value_type, type) and issubclass(value_type, Enum)


def coerce_scalar(value: str, value_type: Any, key: str) -> Any:
    """Convert text to ``value_type``.

    Raises:
        CoercionError: If the text is not a valid literal of the type, or
            the type has no text conversion.
    """
    type_name = getattr(value_type, "__name__", repr(value_type))
    try:
        if value_type is str:
            return value
        if value_type is bool:
            return _parse_bool(value)
        if value_type is int:
            return int(value)
        if value_type is float:
            return float(value)
        if isinstance(value_type, type) and issubclass(value_type, Enum):
            return value_type[value.replace("-", "_").upper()]
    except (ValueError, KeyError) as e:
        raise CoercionError(key, value, type_name) from e
    raise CoercionError(key, value, type_name)


def coerce_value(value: str, field: FieldDescriptor, key: str | None = None) -> Any:
    """Convert text to the type of a resolved field (element type for lists)."""
    return coerce_scalar(value, field.value_type, key or field.name)


def new_instance(target_class: type) -> Any:
    """Instantiate a target type with no arguments."""
    try:
        return target_class()
    except (TypeError, ValidationError) as e:
        raise MappingError(
            f"Cannot instantiate {target_class.__name__} without arguments: {e}"
        ) from e


def _grow(items: list[Any], index: int) -> None:
    while len(items) <= index:
        items.append(None)


class ObjectBuilder:
    """Applies canonical-path assignments to objects of registered types.

    Args:
        registry: Descriptor registry. Defaults to the process-wide one.
    """

    def __init__(self, registry: DescriptorRegistry | None = None) -> None:
        self._registry = registry if registry is not None else default_registry

    @property
    def registry(self) -> DescriptorRegistry:
        return self._registry

    def _resolve(
        self,
        descriptor: TypeDescriptor,
        token: PathToken,
        path: str,
        translate: bool,
    ) -> FieldDescriptor:
        name = descriptor.translate(token.name) if translate else token.name
        field = resolve_field(descriptor, name)
        if field is None:
            raise UnknownKeyError(path, descriptor.target_class.__name__)
        return field

    def set_path(self, root: Any, path: str, value: str) -> None:
        """Assign ``value`` to the field addressed by ``path`` under ``root``.

        The root type's rewrite rules are assumed to have been applied to
        ``path`` already; each nested type's own rules are applied to the
        tokens that address its fields.

        Raises:
            UnknownKeyError: If a token does not resolve to a usable field,
                or the field's type has no text conversion.
            CoercionError: If the value is not a valid literal of the
                resolved field's type.
        """
        tokens = parse_path(path)
        current = root
        descriptor = self._registry.get(type(root))

        for token in tokens[:-1]:
            field = self._resolve(descriptor, token, path, translate=current is not root)
            current = self._descend(current, field, token, path)
            descriptor = self._registry.get(type(current))

        token = tokens[-1]
        field = self._resolve(descriptor, token, path, translate=current is not root)
        self._assign(current, field, token, path, value)

    def _descend(self, current: Any, field: FieldDescriptor, token: PathToken, path: str) -> Any:
        owner = type(current).__name__
        if field.kind is FieldKind.NESTED:
            if token.index is not None:
                raise UnknownKeyError(path, owner, f"'{field.name}' is not a list")
            child = getattr(current, field.name, None)
            if child is None:
                child = new_instance(field.value_type)
                setattr(current, field.name, child)
            return child

        if field.kind is FieldKind.LIST and field.element_kind is FieldKind.NESTED:
            if token.index is None:
                raise UnknownKeyError(path, owner, f"'{field.name}' needs an index")
            items = getattr(current, field.name, None)
            if items is None:
                items = []
                setattr(current, field.name, items)
            _grow(items, token.index)
            if items[token.index] is None:
                items[token.index] = new_instance(field.value_type)
            return items[token.index]

        raise UnknownKeyError(path, owner, f"cannot descend into '{field.name}'")

    def _assign(
        self,
        current: Any,
        field: FieldDescriptor,
        token: PathToken,
        path: str,
        value: str,
    ) -> None:
        owner = type(current).__name__
        holds_values = FieldKind.NESTED not in (field.kind, field.element_kind)
        if holds_values and not is_convertible(field.value_type):
            type_name = getattr(field.value_type, "__name__", repr(field.value_type))
            raise UnknownKeyError(path, owner, f"no text conversion to {type_name}")

        if field.kind is FieldKind.LIST and field.element_kind is not FieldKind.NESTED:
            if token.index is None:
                raise UnknownKeyError(path, owner, f"'{field.name}' needs an index")
            converted = coerce_value(value, field, path)
            items = getattr(current, field.name, None)
            if items is None:
                items = []
                setattr(current, field.name, items)
            _grow(items, token.index)
            items[token.index] = converted
            return

        if field.kind in (FieldKind.NESTED, FieldKind.LIST):
            raise UnknownKeyError(path, owner, f"'{field.name}' is an object, not a value")
        if token.index is not None:
            raise UnknownKeyError(path, owner, f"'{field.name}' is not a list")

        setattr(current, field.name, coerce_value(value, field, path))
