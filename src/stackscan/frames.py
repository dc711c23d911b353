"""Value types produced by the stack line parser."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class Frame:
    """One parsed call site.

    ``line`` is only ``None`` when no coordinate was found; ``column`` falls
    back to 1 when the coordinate carried a line number only.
    """
    method: str | None = None
    path: str | None = None
    line: int | None = None
    column: int | None = None
    coordinate: str | None = None

    @property
    def full_path(self) -> str | None:
        joined = "".join(part for part in (self.path, self.coordinate) if part)
        return joined or None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "method": self.method,
            "path": self.path,
            "line": self.line,
            "column": self.column,
            "coordinate": self.coordinate,
            "full_path": self.full_path,
        }

    @classmethod
    def from_line(cls, raw: str) -> "Frame | None":
        from .stackparse import parse_line

        return parse_line(raw)


@dataclass(frozen=True)
class Candidate:
    """Path/coordinate extracted from one chunk of a line, ``index`` is the chunk position."""
    path: str | None
    coordinate: str | None
    index: int = 0
