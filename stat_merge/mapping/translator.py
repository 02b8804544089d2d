"""Raw key translation.

Rewrites raw info keys into canonical paths using a type's ordered
``KeyMapping`` rules. The first rule whose pattern matches the whole key
wins; unmatched keys pass through unchanged.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable

from stat_merge.core.exceptions import DescriptorError
from stat_merge.mapping.tags import KeyMapping

# $1, $2, ... back-references in a replacement template
_BACKREF_PATTERN = re.compile(r"\$(\d+)")


@dataclass(frozen=True)
class RewriteRule:
    """A compiled KeyMapping."""

    pattern: re.Pattern[str]
    template: str

    def apply(self, key: str) -> str | None:
        """Return the rewritten key, or None if the pattern does not match."""
        match = self.pattern.fullmatch(key)
        if match is None:
            return None
        return match.expand(self.template)


def compile_rule(rule: KeyMapping) -> RewriteRule:
    """Compile a KeyMapping, converting ``$n`` references to ``\\g<n>``."""
    try:
        pattern = re.compile(rule.from_)
    except re.error as e:
        raise DescriptorError(f"Invalid key mapping pattern '{rule.from_}': {e}") from e

    template = rule.to.replace("\\", "\\\\")
    template = _BACKREF_PATTERN.sub(r"\\g<\1>", template)
    for ref in _BACKREF_PATTERN.findall(rule.to):
        if int(ref) > pattern.groups:
            raise DescriptorError(
                f"Key mapping '{rule.from_}' -> '{rule.to}' references group ${ref} "
                f"but the pattern has {pattern.groups} group(s)"
            )
    return RewriteRule(pattern=pattern, template=template)


def compile_rules(rules: Iterable[KeyMapping]) -> tuple[RewriteRule, ...]:
    """Compile rules, preserving their declaration order."""
    return tuple(compile_rule(rule) for rule in rules)


def translate_key(rules: Iterable[RewriteRule], key: str) -> str:
    """Rewrite ``key`` with the first fully matching rule."""
    for rule in rules:
        rewritten = rule.apply(key)
        if rewritten is not None:
            return rewritten
    return key
