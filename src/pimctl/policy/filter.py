"""Item-level filtering for calendars, reminder lists and contact groups.

Three match strategies, any of which admits an item:

- name, case-insensitive
- identifier, case-insensitive
- name with decorative prefix stripped on both sides
  (``"Travel"`` matches ``"✈️ Travel"`` and vice versa)

``items`` is treated as a set for matching; duplicates are harmless.
"""

from __future__ import annotations

import unicodedata
from collections.abc import Callable, Iterable, Sequence
from typing import TypeVar

from pimctl.config.models import DomainFilterConfig, FilterMode

T = TypeVar("T")

# Variation selectors 15/16, zero-width joiner, combining enclosing keycap.
_JOINERS = frozenset({"\ufe0e", "\ufe0f", "\u200d", "\u20e3"})
_SYMBOL_CATEGORIES = frozenset({"So", "Sk"})
_TAG_RANGE = range(0xE0020, 0xE0080)


def is_allowed(name: str, id: str | None = None, *, config: DomainFilterConfig) -> bool:
    """Whether one item is visible/writable under *config*.

    Only the item gate; the domain's ``enabled`` flag is checked separately.
    """
    if config.mode is FilterMode.ALLOWLIST:
        return matches_any(name, id, config.items)
    if config.mode is FilterMode.BLOCKLIST:
        return not matches_any(name, id, config.items)
    return True


def matches_any(name: str, id: str | None, items: Iterable[str]) -> bool:
    """Whether any configured entry refers to the item *name* / *id*."""
    name_key = name.casefold()
    id_key = id.casefold() if id else None
    stripped_name = strip_decorative_prefix(name)

    for entry in items:
        entry_key = entry.casefold()
        if entry_key == name_key:
            return True
        if id_key is not None and entry_key == id_key:
            return True
        stripped_entry = strip_decorative_prefix(entry)
        if stripped_entry and stripped_entry == stripped_name:
            return True
    return False


def filter_items(
    items: Sequence[T],
    config: DomainFilterConfig,
    name_of: Callable[[T], str],
    id_of: Callable[[T], str | None] | None = None,
) -> Sequence[T]:
    """Keep the allowed items, preserving order.

    In ``all`` mode the input is returned as-is.
    """
    if config.mode is FilterMode.ALL:
        return items
    return [
        item
        for item in items
        if is_allowed(name_of(item), id_of(item) if id_of else None, config=config)
    ]


def strip_decorative_prefix(text: str) -> str:
    """Drop leading emoji/pictographs and whitespace, then casefold.

    Examples:
        >>> strip_decorative_prefix("✈️ Travel")
        'travel'
        >>> strip_decorative_prefix("🎉🎊 Party")
        'party'
        >>> strip_decorative_prefix("2024 Goals")
        '2024 goals'
    """
    start = 0
    for char in text:
        if not _is_decorative(char):
            break
        start += 1
    return text[start:].strip().casefold()


def _is_decorative(char: str) -> bool:
    if char.isspace() or char in _JOINERS:
        return True
    code = ord(char)
    if code < 0x80:
        return False
    return code in _TAG_RANGE or unicodedata.category(char) in _SYMBOL_CATEGORIES
