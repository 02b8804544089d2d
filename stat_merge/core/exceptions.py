"""StatMerge exception hierarchy.

Unknown keys are recoverable and handled inside the mapper. Coercion
failures and merge conflicts reach the caller as the types below.
"""

from __future__ import annotations

from typing import Any


class StatMergeError(Exception):
    """Base exception for all StatMerge errors."""


# --- Descriptors ---


class DescriptorError(StatMergeError):
    """Raised when a target type's declarations cannot be compiled."""


# --- Mapping ---


class MappingError(StatMergeError):
    """Base for mapping errors."""


class UnknownKeyError(MappingError):
    """Raised when a raw key does not resolve to a field of the target type."""

    def __init__(self, key: str, target_class: str, detail: str | None = None) -> None:
        self.key = key
        self.target_class = target_class
        message = f"Unknown key '{key}' for {target_class}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class CoercionError(MappingError):
    """Raised when a value cannot be converted to its resolved field's type."""

    def __init__(self, key: str, value: str, target_type: str) -> None:
        self.key = key
        self.value = value
        self.target_type = target_type
        super().__init__(f"Cannot convert '{value}' for key '{key}' to {target_type}")


# --- Merging ---


class MergeError(StatMergeError):
    """Base for merge errors."""


class MergeConflictError(MergeError):
    """Raised when a MustMatch field disagrees across nodes."""

    def __init__(self, field_name: str, values: list[Any]) -> None:
        self.field_name = field_name
        self.values = values
        super().__init__(f"Mismatch on field '{field_name}': {values}")


# --- Sources ---


class SourceError(StatMergeError):
    """Raised when an info source cannot serve a request."""
