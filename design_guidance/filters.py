"""
Filter strategies over topic tables.

Every function is a pure narrowing of one frozen table by one filter string.
Matching is boolean inclusion, case-insensitive (the filter is lower-cased,
never the data), and results keep the table's order. Results are
plain dict/list copies.
"""
from __future__ import annotations

import re
from typing import Any, Iterable, Mapping, Optional, Sequence

from .knowledge import thaw

_WS = re.compile(r"\s+")


def fold(needle: str) -> str:
    return needle.lower()


def slug(text: str) -> str:
    """'Visual Hierarchy' -> 'visual-hierarchy'."""
    return _WS.sub("-", text.strip()).lower()


def exact_key(table: Mapping[str, Any], key: str) -> Optional[Any]:
    """Sub-entry stored under ``key``, or None when the table has no such key."""
    key = fold(key)
    if key in table:
        return thaw(table[key])
    return None


def substring_on_keys(table: Mapping[str, Any], needle: str) -> dict[str, Any]:
    """Top-level entries whose key name contains ``needle``."""
    needle = fold(needle)
    return {k: thaw(v) for k, v in table.items() if needle in k.lower()}


def list_field_matches(value: str, needle: str) -> bool:
    """Hyphenated exact match ('bento-grid') or plain substring ('bento')."""
    needle = fold(needle)
    return slug(value) == needle or needle in value.lower()


def substring_on_list_field(
    entries: Sequence[Mapping[str, Any]], field: str, needle: str
) -> list[Any]:
    return [thaw(e) for e in entries if list_field_matches(e.get(field, ""), needle)]


def substring_on_fields(
    entries: Sequence[Mapping[str, Any]], fields: Iterable[str], needle: str
) -> list[Any]:
    """Entries where any of ``fields`` contains ``needle``."""
    needle = fold(needle)
    fields = tuple(fields)
    return [
        thaw(e)
        for e in entries
        if any(needle in str(e.get(f, "")).lower() for f in fields)
    ]


def tag_contains(
    entries: Sequence[Mapping[str, Any]], tags_field: str, needle: str
) -> list[Any]:
    """Entries having at least one tag that contains ``needle``."""
    needle = fold(needle)
    return [
        thaw(e)
        for e in entries
        if any(needle in tag.lower() for tag in e.get(tags_field, ()))
    ]


def field_contains(
    records: Mapping[str, Mapping[str, Any]], field: str, needle: str
) -> dict[str, Any]:
    needle = fold(needle)
    return {
        k: thaw(v) for k, v in records.items() if needle in str(v.get(field, "")).lower()
    }

