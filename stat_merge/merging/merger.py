"""Merge policy engine.

Reduces N per-node instances of the same logical entity into one, field by
field, using each field's declared or type-default merge policy.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, TypeVar

from stat_merge.core.enums import FieldKind
from stat_merge.core.exceptions import MergeError
from stat_merge.core.policies import default_policy
from stat_merge.mapping.builder import new_instance
from stat_merge.mapping.descriptor import FieldDescriptor
from stat_merge.mapping.registry import DescriptorRegistry, default_registry

T = TypeVar("T")


class StatMerger:
    """Field-by-field reducer for lists of same-typed instances.

    Inputs are never modified; the merged result is a fresh instance.

    Fields merge as follows:
    1. a declared or type-default policy reduces the non-None values
    2. nested objects merge recursively
    3. lists merge column-wise by index
    4. anything else takes the first contributing value

    Args:
        registry: Descriptor registry. Defaults to the process-wide one.
    """

    def __init__(self, registry: DescriptorRegistry | None = None) -> None:
        self._registry = registry if registry is not None else default_registry

    def merge(self, instances: Sequence[T | None]) -> T | None:
        """Merge instances into one aggregate.

        Returns None if there is nothing to merge.

        Raises:
            MergeConflictError: If a MustMatch field disagrees.
            MergeError: If the instances are not all of one type.
        """
        present = [item for item in instances if item is not None]
        if not present:
            return None

        target_class = type(present[0])
        for item in present[1:]:
            if type(item) is not target_class:
                raise MergeError(
                    f"Cannot merge {type(item).__name__} with {target_class.__name__}"
                )

        descriptor = self._registry.get(target_class)
        result: Any = new_instance(target_class)
        for field in descriptor.fields:
            values = [getattr(item, field.name, None) for item in present]
            values = [value for value in values if value is not None]
            if values:
                setattr(result, field.name, self.merge_field(field, values))
        return result

    def merge_field(self, field: FieldDescriptor, values: list[Any]) -> Any:
        """Reduce the non-None per-node values of one field."""
        if field.policy is not None:
            value_type = list if field.is_list else field.value_type
            return field.policy.reduce(values, value_type=value_type, field_name=field.name)
        if field.kind is FieldKind.NESTED:
            return self.merge(values)
        if field.kind is FieldKind.LIST:
            return self._merge_lists(field, values)
        # Fallback: first contributing value
        return values[0]

    def _merge_lists(self, field: FieldDescriptor, lists: list[list[Any]]) -> list[Any]:
        longest = max(len(items) for items in lists)
        element_policy = None
        if field.element_kind is not FieldKind.NESTED:
            element_policy = default_policy(field.value_type)

        result: list[Any] = []
        for index in range(longest):
            column = [
                items[index]
                for items in lists
                if index < len(items) and items[index] is not None
            ]
            if field.element_kind is FieldKind.NESTED:
                result.append(self.merge(column))
            elif not column:
                result.append(None)
            elif element_policy is not None:
                result.append(
                    element_policy.reduce(
                        column,
                        value_type=field.value_type,
                        field_name=f"{field.name}[{index}]",
                    )
                )
            else:
                result.append(column[0])
        return result


_default_merger = StatMerger()


def merge(instances: Sequence[T | None]) -> T | None:
    """Merge instances using the process-wide descriptor registry."""
    return _default_merger.merge(instances)
