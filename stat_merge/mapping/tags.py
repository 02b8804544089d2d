"""Declarative tags for target types.

Field-level tags go into ``typing.Annotated`` metadata::

    @dataclass
    class SetDetail:
        namespace: Annotated[str | None, Key, Named("ns")] = None
        set: Annotated[str | None, Key] = None
        objects: int = 0

Class-level key rewrites use the ``mapping`` / ``mappings`` decorators.
Some raw keys are awkward: ``storage-engine=device`` sits next to
``storage-engine.defrag-lwm-pct``, so ``storage-engine`` has to become an
object of its own. The rules below rename the raw keys before any field
is assigned::

    @mappings(
        KeyMapping("storage-engine", "storage-engine.type"),
        KeyMapping(r"storage-engine.file\\[(\\d+)\\]", "storage-engine.files[$1].filePath"),
    )
    @dataclass
    class NamespaceDetail:
        ...

``from_`` is a regular expression that must match the whole raw key;
``$1``, ``$2``... in ``to`` are replaced by its capture groups.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeVar

C = TypeVar("C", bound=type)

MAPPINGS_ATTR = "__stat_mappings__"


class Key:
    """Marks a field as part of the identity used for cross-node correlation."""

    def __repr__(self) -> str:
        return "Key"


@dataclass(frozen=True)
class Named:
    """Overrides alias generation with one explicit raw key."""

    value: str


@dataclass(frozen=True)
class KeyMapping:
    """One regex rewrite of raw keys to canonical paths."""

    from_: str
    to: str


def mappings(*rules: KeyMapping) -> Callable[[C], C]:
    """Attach rewrite rules to a class, evaluated in declaration order.

    Stacked decorators keep top-to-bottom order: the outer decorator runs
    last, so its rules are placed in front of those already attached.
    """

    def decorate(cls: C) -> C:
        existing = cls.__dict__.get(MAPPINGS_ATTR, ())
        setattr(cls, MAPPINGS_ATTR, tuple(rules) + tuple(existing))
        return cls

    return decorate


def mapping(from_: str, to: str) -> Callable[[C], C]:
    """Attach a single rewrite rule to a class."""
    return mappings(KeyMapping(from_, to))


def declared_mappings(cls: type) -> tuple[KeyMapping, ...]:
    """Rules declared directly on ``cls`` (not inherited)."""
    return tuple(cls.__dict__.get(MAPPINGS_ATTR, ()))
