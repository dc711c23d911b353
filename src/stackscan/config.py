"""Configuration loading for stackscan."""
from __future__ import annotations

import os
import sys
from dataclasses import dataclass

from .runtime import RUNTIMES

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


@dataclass(frozen=True)
class StackScanConfig:
    runtime: str | None
    max_frames: int
    host: str
    port: int
    log_level: str


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        print(f"[warn] {name}={raw!r} is not an integer; using {default}", file=sys.stderr)
        return default


def _resolve_runtime() -> str | None:
    raw = (os.getenv("STACKSCAN_RUNTIME") or "").strip().lower()
    return raw if raw in RUNTIMES else None


def _resolve_log_level() -> str:
    raw = (os.getenv("STACKSCAN_LOG_LEVEL") or "WARNING").strip().upper()
    if raw not in _LOG_LEVELS:
        print(f"[warn] unknown STACKSCAN_LOG_LEVEL {raw!r}; using WARNING", file=sys.stderr)
        return "WARNING"
    return raw


def load_config() -> StackScanConfig:
    return StackScanConfig(
        runtime=_resolve_runtime(),
        max_frames=max(1, _int_env("STACKSCAN_MAX_FRAMES", 50)),
        host=os.getenv("STACKSCAN_HOST", "0.0.0.0"),
        port=_int_env("STACKSCAN_PORT", 8000),
        log_level=_resolve_log_level(),
    )
