"""Merge policies.

A policy reduces the values one field took on every contributing node
into a single value. Policies double as declaration markers: put one in a
field's ``Annotated`` metadata, as a class or an instance::

    objects: Annotated[int, Aggregate] = 0
    state: Annotated[IndexState | None, FirstOf("WO", "RW")] = None

Fields without a declared policy get the type default from
``default_policy``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Any

from stat_merge.core.exceptions import DescriptorError, MergeConflictError


def _is_number_type(value_type: type | None) -> bool:
    return value_type in (int, float)


def _is_hashable_scalar(value_type: type | None) -> bool:
    if value_type in (str, int, float, bool):
        return True
    return isinstance(value_type, type) and issubclass(value_type, Enum)


class MergePolicy(ABC):
    """Base merge policy."""

    def supports(self, value_type: type) -> bool:
        """Whether this policy can reduce values of ``value_type``."""
        return True

    def reduce(
        self,
        values: list[Any],
        *,
        value_type: type | None = None,
        field_name: str = "value",
    ) -> Any:
        """Reduce per-node values to one. Returns None for no values."""
        if not values:
            return None
        return self._reduce(values, value_type, field_name)

    @abstractmethod
    def _reduce(self, values: list[Any], value_type: type | None, field_name: str) -> Any:
        """Reduce a non-empty list of values."""


@dataclass(frozen=True)
class Aggregate(MergePolicy):
    """Sum of all values."""

    def supports(self, value_type: type) -> bool:
        return _is_number_type(value_type)

    def _reduce(self, values: list[Any], value_type: type | None, field_name: str) -> Any:
        total = sum(values)
        return float(total) if value_type is float else total


@dataclass(frozen=True)
class Average(MergePolicy):
    """Arithmetic mean. Integer fields keep the truncated integer part."""

    def supports(self, value_type: type) -> bool:
        return _is_number_type(value_type)

    def _reduce(self, values: list[Any], value_type: type | None, field_name: str) -> Any:
        mean = sum(values) / len(values)
        return int(mean) if value_type is int else mean


@dataclass(frozen=True)
class Minimum(MergePolicy):
    """Smallest value."""

    def supports(self, value_type: type) -> bool:
        return _is_number_type(value_type)

    def _reduce(self, values: list[Any], value_type: type | None, field_name: str) -> Any:
        return min(values)


@dataclass(frozen=True)
class Maximum(MergePolicy):
    """Largest value."""

    def supports(self, value_type: type) -> bool:
        return _is_number_type(value_type)

    def _reduce(self, values: list[Any], value_type: type | None, field_name: str) -> Any:
        return max(values)


@dataclass(frozen=True)
class And(MergePolicy):
    """Logical AND across boolean values."""

    def supports(self, value_type: type) -> bool:
        return value_type is bool

    def _reduce(self, values: list[Any], value_type: type | None, field_name: str) -> Any:
        return all(values)


@dataclass(frozen=True)
class Or(MergePolicy):
    """Logical OR across boolean values."""

    def supports(self, value_type: type) -> bool:
        return value_type is bool

    def _reduce(self, values: list[Any], value_type: type | None, field_name: str) -> Any:
        return any(values)


@dataclass(frozen=True)
class MostCommon(MergePolicy):
    """Value with the highest occurrence count.

    When several values share the highest count any one of them may be
    returned; callers must not rely on which.
    """

    def supports(self, value_type: type) -> bool:
        return _is_hashable_scalar(value_type)

    def _reduce(self, values: list[Any], value_type: type | None, field_name: str) -> Any:
        return Counter(values).most_common(1)[0][0]


class FirstOf(MergePolicy):
    """Earliest entry of a priority order present anywhere in the values.

    Merging index states ``[RW, RW, RW, WO, RW]`` with ``FirstOf("WO", "RW")``
    returns ``WO`` even though ``RW`` is more frequent. Enum members are
    ranked by name. If no value is ranked the first value is returned.
    """

    def __init__(self, *order: str) -> None:
        if not order:
            raise DescriptorError("FirstOf requires at least one ranked value")
        self.order = tuple(order)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, FirstOf) and other.order == self.order

    def __hash__(self) -> int:
        return hash((FirstOf, self.order))

    def __repr__(self) -> str:
        return f"FirstOf{self.order!r}"

    def supports(self, value_type: type) -> bool:
        return _is_hashable_scalar(value_type)

    def _reduce(self, values: list[Any], value_type: type | None, field_name: str) -> Any:
        ranks = {name: rank for rank, name in enumerate(self.order)}
        best = None
        best_rank = len(ranks)
        for value in values:
            name = value.name if isinstance(value, Enum) else str(value)
            rank = ranks.get(name)
            if rank is not None and rank < best_rank:
                best, best_rank = value, rank
        return values[0] if best is None else best


@dataclass(frozen=True)
class MustMatch(MergePolicy):
    """All values must be identical; any disagreement is a MergeConflictError."""

    def _reduce(self, values: list[Any], value_type: type | None, field_name: str) -> Any:
        first = values[0]
        for value in values[1:]:
            if type(value) is not type(first) or value != first:
                raise MergeConflictError(field_name, list(values))
        return first


def default_policy(value_type: type) -> MergePolicy | None:
    """Type-based policy for fields that declare none.

    Returns None for types that merge structurally or pass through.
    """
    if value_type is bool:
        return And()
    if value_type is int:
        return Aggregate()
    if value_type is float:
        return Average()
    if value_type is str or (isinstance(value_type, type) and issubclass(value_type, Enum)):
        return MostCommon()
    return None
