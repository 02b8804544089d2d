"""Field discovery, alias generation and descriptor compilation.

Supports dataclasses, Pydantic models, and plain classes with annotated
attributes. Every field is reachable under:

1. its ``Named(...)`` alias, if declared, or
2. its words joined by ``-`` (config style) and by ``_`` (metric style):
   ``write_block_size`` answers to ``write-block-size`` and
   ``write_block_size``.

Tokens that match no alias are converted naively to the attribute
spelling (``filePath`` -> ``file_path``, ``storage-engine`` ->
``storage_engine``) to tolerate metric-name drift.
"""

from __future__ import annotations

import dataclasses
import inspect
import re
import types
from enum import Enum
from types import MappingProxyType
from typing import Annotated, Any, Union, get_args, get_origin, get_type_hints

from pydantic import BaseModel

from stat_merge.core.enums import FieldKind
from stat_merge.core.exceptions import DescriptorError
from stat_merge.core.policies import FirstOf, MergePolicy, MustMatch, default_policy
from stat_merge.mapping.descriptor import FieldDescriptor, TypeDescriptor
from stat_merge.mapping.tags import Key, Named, declared_mappings
from stat_merge.mapping.translator import compile_rules

_SCALAR_TYPES = (str, int, float, bool)

# Position before an internal capital letter
_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")
_WORD_SEPARATORS = re.compile(r"[-_]+")


def _get_field_names(cls: type) -> list[str]:
    """Extract field names from a class (dataclass, Pydantic, or plain)."""
    # Pydantic model
    if isinstance(cls, type) and issubclass(cls, BaseModel):
        return list(cls.model_fields.keys())

    # Dataclass
    if dataclasses.is_dataclass(cls):
        return [f.name for f in dataclasses.fields(cls)]

    # Plain class - use annotated public attributes, base classes first
    names: list[str] = []
    for klass in reversed(cls.__mro__):
        for name in inspect.get_annotations(klass):
            if not name.startswith("_") and name not in names:
                names.append(name)
    return names


def is_structured(value_type: Any) -> bool:
    """Whether ``value_type`` is a class built field by field."""
    if not isinstance(value_type, type) or value_type in _SCALAR_TYPES:
        return False
    if issubclass(value_type, Enum):
        return False
    if issubclass(value_type, BaseModel) or dataclasses.is_dataclass(value_type):
        return True
    return value_type.__module__ != "builtins" and bool(
        getattr(value_type, "__annotations__", None)
    )


def field_words(name: str) -> list[str]:
    """Split a field name into lower-case words on separators and capitals."""
    words: list[str] = []
    for part in _WORD_SEPARATORS.split(name):
        if part:
            words.extend(_CAMEL_BOUNDARY.sub(" ", part).lower().split())
    return words


def generated_aliases(name: str) -> tuple[str, ...]:
    """Config-style (dash) and metric-style (underscore) aliases for a field."""
    words = field_words(name)
    config_key = "-".join(words)
    metric_key = "_".join(words)
    if config_key == metric_key:
        return (config_key,)
    return (config_key, metric_key)


def attribute_spelling(token: str) -> str:
    """Naive conversion of a raw token to a snake_case attribute name."""
    return _CAMEL_BOUNDARY.sub("_", token.replace("-", "_")).lower()


def _unwrap(hint: Any) -> tuple[Any, list[Any]]:
    """Strip Annotated and Optional wrappers, collecting Annotated metadata."""
    markers: list[Any] = []
    while True:
        origin = get_origin(hint)
        if origin is Annotated:
            hint, *extras = get_args(hint)
            markers.extend(extras)
        elif origin is Union or origin is types.UnionType:
            args = [arg for arg in get_args(hint) if arg is not type(None)]
            if len(args) != 1:
                return hint, markers
            hint = args[0]
        else:
            return hint, markers


def _classify(hint: Any) -> tuple[FieldKind, Any, FieldKind | None]:
    """Return (kind, value_type, element_kind) for an unwrapped hint."""
    if hint is list or get_origin(hint) is list:
        args = get_args(hint)
        element, _ = _unwrap(args[0]) if args else (str, [])
        element_kind, element_type, _ = _classify(element)
        if element_kind is FieldKind.LIST:
            raise DescriptorError(f"Nested list type {hint!r} is not supported")
        return FieldKind.LIST, element_type, element_kind
    if isinstance(hint, type) and issubclass(hint, Enum):
        return FieldKind.ENUM, hint, None
    if is_structured(hint):
        return FieldKind.NESTED, hint, None
    return FieldKind.SCALAR, hint, None


def _policy_from_marker(marker: Any) -> MergePolicy | None:
    if isinstance(marker, MergePolicy):
        return marker
    if isinstance(marker, type) and issubclass(marker, MergePolicy):
        if inspect.isabstract(marker):
            raise DescriptorError(f"{marker.__name__} is not a concrete merge policy")
        if marker is FirstOf:
            raise DescriptorError("FirstOf must be given its priority order, e.g. FirstOf('WO', 'RW')")
        return marker()
    return None


def _build_field(cls: type, name: str, hint: Any) -> FieldDescriptor:
    base, markers = _unwrap(hint)
    kind, value_type, element_kind = _classify(base)

    key = False
    alias: str | None = None
    declared: MergePolicy | None = None
    for marker in markers:
        if marker is Key or isinstance(marker, Key):
            key = True
        elif isinstance(marker, Named):
            alias = marker.value
        else:
            policy = _policy_from_marker(marker)
            if policy is None:
                continue
            if declared is not None:
                raise DescriptorError(
                    f"{cls.__name__}.{name} declares more than one merge policy: "
                    f"{declared!r} and {policy!r}"
                )
            declared = policy

    check_type = list if kind is FieldKind.LIST else value_type
    if declared is not None and not declared.supports(check_type):
        raise DescriptorError(
            f"{cls.__name__}.{name}: merge policy {declared!r} does not support {check_type!r}"
        )

    if declared is not None:
        policy = declared
    elif key:
        # Identity fields never reduce
        policy = MustMatch()
    elif kind in (FieldKind.SCALAR, FieldKind.ENUM):
        policy = default_policy(value_type)
    else:
        policy = None

    return FieldDescriptor(
        name=name,
        kind=kind,
        value_type=value_type,
        aliases=(alias,) if alias is not None else generated_aliases(name),
        element_kind=element_kind,
        key=key,
        alias=alias,
        policy=policy,
    )


def build_descriptor(cls: type) -> TypeDescriptor:
    """Compile and validate the descriptor for ``cls``."""
    if not isinstance(cls, type):
        raise DescriptorError(f"Expected a class, got {cls!r}")

    try:
        hints = get_type_hints(cls, include_extras=True)
    except (NameError, TypeError) as e:
        raise DescriptorError(f"Cannot resolve type hints of {cls.__name__}: {e}") from e

    fields: list[FieldDescriptor] = []
    aliases: dict[str, FieldDescriptor] = {}
    for name in _get_field_names(cls):
        descriptor = _build_field(cls, name, hints.get(name, str))
        for alias in descriptor.aliases:
            other = aliases.get(alias)
            if other is not None:
                raise DescriptorError(
                    f"{cls.__name__}: alias '{alias}' is claimed by both "
                    f"'{other.name}' and '{descriptor.name}'"
                )
            aliases[alias] = descriptor
        fields.append(descriptor)

    return TypeDescriptor(
        target_class=cls,
        fields=tuple(fields),
        aliases=MappingProxyType(aliases),
        rules=compile_rules(declared_mappings(cls)),
        key_fields=tuple(f for f in fields if f.key),
        attributes=MappingProxyType({f.name: f for f in fields}),
    )


def resolve_field(descriptor: TypeDescriptor, token: str) -> FieldDescriptor | None:
    """Find the field a path token refers to, or None."""
    found = descriptor.aliases.get(token)
    if found is not None:
        return found
    found = descriptor.attributes.get(attribute_spelling(token))
    if found is not None:
        return found
    return descriptor.attributes.get(token)
