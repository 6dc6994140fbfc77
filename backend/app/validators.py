"""Shared input sanitizers for query parameters and API models."""

from __future__ import annotations

import re
from collections.abc import Iterable

LIST_DELIMITER = ";"
NAME_MAX_LENGTH = 120
TAG_MAX_LENGTH = 64
TAG_MAX_ITEMS = 20
CLOCK_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def _squash_whitespace(text: str) -> str:
    return " ".join(text.split())


def split_delimited(raw: str | None, *, delimiter: str = LIST_DELIMITER) -> list[str]:
    """Split a `a;b;c` style value, trimming pieces and dropping blank ones."""
    if not raw:
        return []
    return [piece.strip() for piece in raw.split(delimiter) if piece.strip()]


def dedupe_casefold(items: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    unique: list[str] = []
    for item in items:
        key = item.casefold()
        if key in seen:
            continue
        seen.add(key)
        unique.append(item)
    return unique


def normalize_display_name(value: str, *, field: str = "name") -> str:
    if not isinstance(value, str):  # pragma: no cover - Pydantic guards by default
        raise ValueError(f"{field} must be a string")
    cleaned = _squash_whitespace(value.strip())
    if not cleaned:
        raise ValueError(f"{field} cannot be blank")
    if len(cleaned) > NAME_MAX_LENGTH:
        raise ValueError(f"{field} must be <= {NAME_MAX_LENGTH} characters")
    return cleaned


def normalize_tag_names(
    value: str | Iterable[str] | None,
    *,
    field: str = "tags",
    max_items: int = TAG_MAX_ITEMS,
    max_length: int = TAG_MAX_LENGTH,
) -> list[str]:
    """
    Canonical tag names for storage: trimmed, lower-cased, unique.

    Accepts either a delimited string (`"Ayam; Nasi"`) or a list of names.
    """
    if value is None:
        return []
    pieces = split_delimited(value) if isinstance(value, str) else list(value)
    cleaned: list[str] = []
    for raw in pieces:
        if not isinstance(raw, str):
            raise ValueError(f"{field} entries must be strings")
        entry = _squash_whitespace(raw.strip()).lower()
        if not entry:
            continue
        if len(entry) > max_length:
            raise ValueError(f"{field} entry '{entry[:20]}' must be <= {max_length} characters")
        cleaned.append(entry)
    cleaned = dedupe_casefold(cleaned)
    if len(cleaned) > max_items:
        raise ValueError(f"{field} accepts at most {max_items} entries")
    return cleaned


def normalize_clock_time(value: str | None, *, field: str = "time") -> str | None:
    if value is None:
        return None
    cleaned = value.strip()
    if not cleaned:
        return None
    if not CLOCK_PATTERN.fullmatch(cleaned):
        raise ValueError(f"{field} must be a 24h clock time like 08:30")
    return cleaned


__all__ = [
    "LIST_DELIMITER",
    "NAME_MAX_LENGTH",
    "TAG_MAX_ITEMS",
    "TAG_MAX_LENGTH",
    "dedupe_casefold",
    "normalize_clock_time",
    "normalize_display_name",
    "normalize_tag_names",
    "split_delimited",
]
