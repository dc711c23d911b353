"""Find frames in a parsed stack by method name or index."""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Callable, Iterable, Sequence, Tuple, Union

from .frames import Frame
from .runtime import RuntimeSource, normalize_runtime, resolve_runtime
from .stackparse import parse_stack

log = logging.getLogger(__name__)

LookupResult = Tuple[int, Frame]
MethodTarget = Union[str, re.Pattern]


def _method_matches(method: str, target: MethodTarget) -> bool:
    if isinstance(target, str):
        return method == target
    return target.search(method) is not None


def find_method(frames: Sequence[Frame], method: MethodTarget, offset: int = 0) -> LookupResult | None:
    """Return ``(index, frame)`` for the first frame whose method matches.

    When ``offset`` lands inside the stack the shifted frame is returned
    instead; an out of range offset falls back to the match itself.
    """
    for index, frame in enumerate(frames):
        if not frame.method or not _method_matches(frame.method, method):
            continue
        shifted = index + offset
        if offset and 0 <= shifted < len(frames):
            return shifted, frames[shifted]
        return index, frame
    return None


def lookup(stack: str, method: MethodTarget, offset: int = 0) -> LookupResult | None:
    frames = parse_stack(stack)
    if not frames:
        return None
    return find_method(frames, method, offset)


@dataclass(frozen=True)
class MethodLookup:
    stack: str
    method: MethodTarget
    offset: int = 0
    runtime: str | None = None
    predicate: Callable[[LookupResult], bool] | None = None


@dataclass(frozen=True)
class IndexLookup:
    stack: str
    index: int
    runtime: str | None = None
    predicate: Callable[[LookupResult], bool] | None = None


def _resolve(entry: Union[MethodLookup, IndexLookup], frames: Sequence[Frame]) -> LookupResult | None:
    if isinstance(entry, MethodLookup):
        return find_method(frames, entry.method, entry.offset)
    if 0 <= entry.index < len(frames):
        return entry.index, frames[entry.index]
    return None


def adaptive_lookup(
    lookups: Iterable[Union[MethodLookup, IndexLookup]],
    runtime: RuntimeSource = None,
) -> LookupResult | None:
    """Try each lookup in order and return the first accepted result.

    Entries pinned to a runtime are skipped unless it matches the one supplied
    by the caller.
    """
    current = resolve_runtime(runtime)
    for entry in lookups:
        if entry.runtime and normalize_runtime(entry.runtime) != current:
            log.debug("skipping lookup for runtime %s (current: %s)", entry.runtime, current)
            continue

        frames = parse_stack(entry.stack)
        if not frames:
            continue

        result = _resolve(entry, frames)
        if result is None:
            continue
        if entry.predicate is not None and not entry.predicate(result):
            continue
        return result

    return None
