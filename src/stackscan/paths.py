"""Shared helpers for recovering and normalizing stack frame paths."""
from __future__ import annotations

import re
from typing import List

SEPARATORS = "/\\"

_LEADING_PAREN = re.compile(r"^\(")
_TRAILING_PUNCTUATION = re.compile(r"[):?]+$")
_FORMATTED_MARKER = re.compile(r":formatted$")
_QUERY_SUFFIX = re.compile(r"\?[^/\\?]*$")
# SpiderMonkey "name@location" and anonymous "@scheme:..." frames.
_FUNCTION_PREFIX = re.compile(r"^(?:[^\s/\\@():]+@|@(?=[A-Za-z][\w+.-]*:))")


def count_separators(path: str | None) -> int:
    return sum(1 for ch in path or "" if ch in SEPARATORS)


def has_separator(path: str | None) -> bool:
    return count_separators(path) > 0


def _first_separator(text: str) -> int:
    for index, ch in enumerate(text):
        if ch in SEPARATORS:
            return index
    return -1


def normalize_path(path: str | None) -> str:
    """Strip wrapping parentheses, trailing ``):?`` and bundler suffixes."""
    cleaned = (path or "").strip()
    cleaned = _LEADING_PAREN.sub("", cleaned, count=1)
    cleaned = _TRAILING_PUNCTUATION.sub("", cleaned)
    cleaned = _FORMATTED_MARKER.sub("", cleaned)
    cleaned = _QUERY_SUFFIX.sub("", cleaned)
    return cleaned.strip()


def strip_function_prefix(path: str) -> str:
    """Drop a leading ``func@`` left by Firefox-style frames."""
    return _FUNCTION_PREFIX.sub("", path, count=1)


def extract_path(chunk: str, start: int) -> str | None:
    """Recover the path text that ends right before ``chunk[start]``.

    Walks backward collecting characters. A space is kept as part of the path
    only when a separator occurs somewhere before it in the chunk; otherwise it
    is the boundary between the method name and the path.
    """
    first_separator = _first_separator(chunk)
    collected: List[str] = []

    index = min(start, len(chunk)) - 1
    while index >= 0:
        ch = chunk[index]
        if ch != " ":
            collected.append(ch)
            index -= 1
            continue

        if not 0 <= first_separator < index:
            break

        while index >= 0 and chunk[index] == " ":
            collected.append(ch)
            index -= 1

    raw_path = "".join(reversed(collected))
    if not raw_path:
        return None

    path = strip_function_prefix(normalize_path(raw_path))
    return path or None
