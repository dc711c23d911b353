"""Locate and parse the trailing ``:line[:column]`` coordinate of a stack chunk.

The locator walks the chunk backward. Every digit it meets opens a new capture
of the contiguous ``[0-9:]`` run around it; the run is accepted only when its
tail is a well formed one- or two-number suffix. Rejected runs are skipped as a
whole and the walk carries on toward the start of the chunk.
"""
from __future__ import annotations

import logging
import re
import unicodedata
from dataclasses import dataclass
from typing import Tuple

log = logging.getLogger(__name__)

_ASCII_DIGITS = "0123456789"
_RUN_CHARS = _ASCII_DIGITS + ":"

# Tried in order; anchored at the end of the captured run.
_RUN_PATTERNS = (
    re.compile(r":([0-9]+):([0-9]+)$"),
    re.compile(r":([0-9]+)$"),
)

# Values JS engines and tools print where a number was expected.
_PLACEHOLDER_WORD = re.compile(r"NaN|undefined|null|-?Infinity")
_SIGNED_INTEGER = re.compile(r"-?[0-9]*")
_MALFORMED_SUFFIX = re.compile(r":(?P<first>[^:\s/\\()]*):(?P<second>[^:\s/\\()]*)\)?$")


@dataclass(frozen=True)
class CoordinateMatch:
    """A coordinate found in a chunk: ASCII text plus its start index."""
    text: str
    start: int

    @property
    def end(self) -> int:
        return self.start + len(self.text)


def to_ascii_digits(text: str) -> str:
    """Map every Unicode decimal digit to ASCII, one character for one."""
    if text.isascii():
        return text
    return "".join(str(unicodedata.decimal(ch)) if ch.isdecimal() else ch for ch in text)


def _is_symbol(ch: str) -> bool:
    # superscripts and other non-decimal digits are word characters but never a number here
    if ch.isdigit() and not ch.isdecimal():
        return True
    return not (ch.isalnum() or ch == "_" or ch.isspace() or ch in "/\\")


def is_placeholder(text: str) -> bool:
    """True for ``NaN``, ``undefined``, ``Infinity`` and runs of symbols such as ``?`` or emoji."""
    if _PLACEHOLDER_WORD.fullmatch(text):
        return True
    return bool(text) and all(_is_symbol(ch) for ch in text)


def _match_run(run: str) -> str | None:
    for pattern in _RUN_PATTERNS:
        match = pattern.search(run)
        if match is None:
            continue
        # colons left over mean an empty or third component
        if ":" in run[: match.start()]:
            return None
        return match.group(0)
    return None


def _is_terminated(scan: str, end: int) -> bool:
    return end >= len(scan) or scan[end] != ":"


def _follows_placeholder(scan: str, start: int, coordinate: str) -> bool:
    if coordinate.count(":") != 1:
        return False
    before = scan[:start]
    colon = before.rfind(":")
    if colon < 0:
        return False
    return is_placeholder(before[colon + 1 :])


def find_coordinate(chunk: str) -> CoordinateMatch | None:
    """Return the right-most valid coordinate of ``chunk``, or ``None``."""
    scan = to_ascii_digits(chunk or "")
    index = len(scan) - 1
    while index >= 0:
        if scan[index] not in _ASCII_DIGITS:
            index -= 1
            continue

        run_start = index
        while run_start > 0 and scan[run_start - 1] in _RUN_CHARS:
            run_start -= 1
        run = scan[run_start : index + 1]

        coordinate = _match_run(run)
        if coordinate is not None:
            start = index + 1 - len(coordinate)
            if _is_terminated(scan, index + 1) and not _follows_placeholder(scan, start, coordinate):
                return CoordinateMatch(text=coordinate, start=start)

        log.debug("rejected coordinate run %r in %r", run, chunk)
        index = run_start - 1

    return None


def locate_coordinate(chunk: str) -> str | None:
    match = find_coordinate(chunk)
    return match.text if match else None


def find_malformed_coordinate(chunk: str) -> int | None:
    """Start index of a trailing ``:A:B`` suffix made of placeholders, if any.

    Used to recover the path of frames such as ``/src/app.ts:NaN:12`` whose
    coordinate is unusable.
    """
    match = _MALFORMED_SUFFIX.search(chunk or "")
    if match is None:
        return None
    parts = match.group("first", "second")
    if not all(_SIGNED_INTEGER.fullmatch(part) or is_placeholder(part) for part in parts):
        return None
    return match.start()


def parse_coordinate(coordinate: str | None) -> Tuple[int | None, int | None]:
    """Split ``:L:C`` / ``:L`` into integers; the column defaults to 1."""
    if not coordinate:
        return None, None
    parts = coordinate.split(":")[1:]
    if not parts or not all(part.isdecimal() for part in parts):
        return None, None
    numbers = [int(part) for part in parts]
    line = numbers[0]
    column = numbers[1] if len(numbers) > 1 else 1
    return line, column
