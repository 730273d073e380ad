"""Helpers for turning user-supplied tag input into clean lists."""
from __future__ import annotations

import json
from collections.abc import Iterable


def parse_tags(raw: str | Iterable[str] | None, *, dedupe: bool = False) -> list[str]:
    """Normalize tag input into a list of trimmed, non-empty strings.

    Accepts a list, a JSON array string (as sent by multipart forms) or a
    comma-separated string. List elements are themselves split on commas, so
    repeated query keys and comma lists can be mixed. Order is preserved;
    with ``dedupe`` only the first occurrence of each tag is kept.

    Examples:
        >>> parse_tags(" a, b ,,a ")
        ['a', 'b', 'a']
        >>> parse_tags('["x", "y"]', dedupe=True)
        ['x', 'y']
        >>> parse_tags(["x", "y,z"])
        ['x', 'y', 'z']
    """
    if raw is None:
        return []

    if isinstance(raw, str):
        items: Iterable[object] = _split_tag_string(raw)
    else:
        items = [
            piece
            for element in raw
            for piece in (element.split(",") if isinstance(element, str) else [element])
        ]

    tags: list[str] = []
    seen: set[str] = set()
    for item in items:
        tag = str(item).strip()
        if not tag:
            continue
        if dedupe:
            if tag in seen:
                continue
            seen.add(tag)
        tags.append(tag)
    return tags


def _split_tag_string(raw: str) -> list[object]:
    text = raw.strip()
    if text.startswith("["):
        try:
            parsed = json.loads(text)
        except ValueError:
            parsed = None
        if isinstance(parsed, list):
            return parsed
    return text.split(",")
