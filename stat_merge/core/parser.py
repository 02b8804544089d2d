"""Info response parsing.

Two grammars are understood:

    flat:   key1=value1;key2=value2
    multi:  key1=value1:key2=value2;key3=value3:key4=value4

In the multi grammar every ``;`` chunk is one entity whose pairs are
joined with ``:``. Malformed chunks are dropped, never raised.
"""

from __future__ import annotations


def _parse_pairs(chunks: list[str]) -> dict[str, str]:
    """Split each chunk at its first ``=``; chunks without one are dropped."""
    result: dict[str, str] = {}
    for chunk in chunks:
        key, sep, value = chunk.partition("=")
        if not sep:
            continue
        # Later duplicates win
        result[key.strip()] = value.strip()
    return result


def parse_flat(raw: str | None) -> dict[str, str]:
    """Parse a single-entity response into a key-value map."""
    if not raw:
        return {}
    return _parse_pairs(raw.split(";"))


def parse_multi(raw: str | None) -> list[dict[str, str]]:
    """Parse a multi-entity response into one key-value map per entity."""
    if raw is None or not raw.strip():
        return []
    items = [item.strip() for item in raw.split(";")]
    return [_parse_pairs(item.split(":")) for item in items if item]


def parse_list(raw: str | None) -> list[str]:
    """Parse a comma-separated response such as ``namespaces`` or ``build``."""
    if not raw:
        return []
    return [value.strip() for value in raw.split(",") if value.strip()]
