"""Mapping layer - turn parsed info data into typed objects."""

from __future__ import annotations

from stat_merge.mapping.builder import ObjectBuilder, PathToken, coerce_value, parse_path
from stat_merge.mapping.descriptor import FieldDescriptor, TypeDescriptor
from stat_merge.mapping.fields import build_descriptor, generated_aliases, resolve_field
from stat_merge.mapping.model import InfoMapper
from stat_merge.mapping.registry import DescriptorRegistry, default_registry
from stat_merge.mapping.tags import Key, KeyMapping, Named, mapping, mappings
from stat_merge.mapping.translator import RewriteRule, compile_rule, translate_key

__all__ = [
    "InfoMapper",
    "ObjectBuilder",
    "PathToken",
    "parse_path",
    "coerce_value",
    "DescriptorRegistry",
    "default_registry",
    "TypeDescriptor",
    "FieldDescriptor",
    "build_descriptor",
    "generated_aliases",
    "resolve_field",
    "Key",
    "Named",
    "KeyMapping",
    "mapping",
    "mappings",
    "RewriteRule",
    "compile_rule",
    "translate_key",
]
