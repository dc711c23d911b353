"""Turn raw JavaScript stack trace lines into :class:`Frame` values."""
from __future__ import annotations

import re
from typing import List

from .coordinates import find_coordinate, find_malformed_coordinate, parse_coordinate
from .frames import Candidate, Frame
from .paths import extract_path
from .ranking import rank_candidates

# "at " at the start or between whitespace.
_RE_CHUNK_DELIMITER = re.compile(r"^at\s+|\sat\s+")
# Same, plus the ", " closing an eval origin. Only used on eval frames so a
# path such as "C:\Apps (x86), Inc\a.js" stays in one chunk.
_RE_EVAL_CHUNK_DELIMITER = re.compile(r"^at\s+|\sat\s+|(?<=\)),\s+")
_RE_EVAL_ORIGIN = re.compile(r"\beval\s+at\s")
_RE_LEADING_AT = re.compile(r"^at(?:\s+|$)")
_RE_PARENS_ONLY = re.compile(r"[()\s]+")
_RE_HEADER = re.compile(r"(?:Uncaught\s+)?[\w$.]*(?:Error|Exception)(?::|$)")


def split_chunks(raw: str) -> List[str]:
    text = (raw or "").strip()
    delimiter = _RE_EVAL_CHUNK_DELIMITER if _RE_EVAL_ORIGIN.search(text) else _RE_CHUNK_DELIMITER
    chunks = delimiter.split(text)
    return [chunk.strip() for chunk in chunks if chunk.strip()]


def extract_candidate(chunk: str, index: int = 0) -> Candidate | None:
    """Run coordinate location and path recovery over a single chunk."""
    match = find_coordinate(chunk)
    if match is not None:
        return Candidate(path=extract_path(chunk, match.start), coordinate=match.text, index=index)

    start = find_malformed_coordinate(chunk)
    if start is not None:
        path = extract_path(chunk, start)
        if path:
            return Candidate(path=path, coordinate=None, index=index)

    return None


def select_candidate(raw: str) -> Candidate | None:
    """Pick the candidate that best describes ``raw``.

    Only candidates carrying a coordinate compete; when none does, the
    right-most candidate with a malformed coordinate is returned.
    """
    candidates = [
        candidate
        for candidate in (extract_candidate(chunk, i) for i, chunk in enumerate(split_chunks(raw)))
        if candidate is not None
    ]
    located = [candidate for candidate in candidates if candidate.coordinate is not None]

    if not located:
        return candidates[-1] if candidates else None
    if len(located) == 1:
        return located[0]
    return rank_candidates(located)


def extract_method(raw: str, path: str | None) -> str | None:
    """Return the text preceding ``path`` in ``raw`` as the method name."""
    if not path:
        return None

    index = (raw or "").find(path)
    if index <= 0:
        return None

    before = raw[:index].strip()
    before = _RE_LEADING_AT.sub("", before, count=1)
    if before.endswith("("):
        before = before[:-1].strip()
    if before.endswith("@"):
        before = before[:-1].strip()

    if not before or _RE_PARENS_ONLY.fullmatch(before):
        return None
    return before


def parse_line(raw: str) -> Frame | None:
    """Parse one stack line; ``None`` means no coordinate could be located.

    A line whose only coordinate is malformed (``/src/app.ts:NaN:12``) also
    gives ``None``. Its recovered path is available from :func:`select_candidate`.
    """
    line_text = (raw or "").strip()
    candidate = select_candidate(line_text)
    if candidate is None or candidate.coordinate is None:
        return None

    line, column = parse_coordinate(candidate.coordinate)
    return Frame(
        method=extract_method(line_text, candidate.path),
        path=candidate.path,
        line=line,
        column=column,
        coordinate=candidate.coordinate,
    )


def split_stack(text: str) -> List[str]:
    """Drop the ``Error: ...`` header and blank lines from a stack text."""
    body = (text or "").lstrip()
    first, _, rest = body.partition("\n")
    if _RE_HEADER.match(first.strip()):
        body = rest
    return [line.strip() for line in body.splitlines() if line.strip()]


def parse_stack(text: str) -> List[Frame]:
    frames: List[Frame] = []
    for line in split_stack(text):
        frame = parse_line(line)
        if frame is not None:
            frames.append(frame)
    return frames
