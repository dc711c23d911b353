"""Runtime names and the injectable detector used to gate lookups.

Nothing here inspects the current process. Callers decide which runtime a
stack came from, either by naming it or by passing a detector.
"""
from __future__ import annotations

from typing import Callable, Iterable, Literal, Protocol, Tuple, Union

from .frames import Frame

Runtime = Literal["node", "browser", "deno", "bun", "unknown"]
RUNTIMES: Tuple[str, ...] = ("node", "browser", "deno", "bun", "unknown")

_PATH_MARKERS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("bun", ("bun:",)),
    ("deno", ("ext:", "deno:")),
    ("node", ("node:", "internal/")),
    ("browser", ("http://", "https://")),
)


class RuntimeDetector(Protocol):
    def __call__(self) -> str:
        ...


RuntimeSource = Union[str, RuntimeDetector, Callable[[], str], None]


def normalize_runtime(name: str | None) -> str:
    cleaned = (name or "").strip().lower()
    return cleaned if cleaned in RUNTIMES else "unknown"


def fixed_runtime(name: str) -> RuntimeDetector:
    runtime = normalize_runtime(name)

    def _detect() -> str:
        return runtime

    return _detect


def resolve_runtime(source: RuntimeSource) -> str:
    if source is None:
        return "unknown"
    if isinstance(source, str):
        return normalize_runtime(source)
    return normalize_runtime(source())


def infer_runtime(frames: Iterable[Frame]) -> str:
    """Guess the runtime from the module ids that appear in frame paths."""
    paths = [frame.path for frame in frames if frame.path]
    for runtime, prefixes in _PATH_MARKERS:
        if any(path.startswith(prefixes) for path in paths):
            return runtime
    return "unknown"
