"""Field kind enumeration."""

from __future__ import annotations

from enum import Enum


class FieldKind(Enum):
    """How a field is populated from text and merged across nodes."""

    SCALAR = "scalar"
    ENUM = "enum"
    NESTED = "nested"
    LIST = "list"
