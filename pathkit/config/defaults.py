"""pathkit config defaults.

No side effects on import beyond reading the environment.
"""

from __future__ import annotations

import os


def _env(name: str, default: str) -> str:
    if not name.startswith("PK_"):
        raise ValueError(f"Only PK_* env vars are allowed, got: {name}")
    return os.getenv(name, default)


def _env_optional(name: str) -> str | None:
    raw = _env(name, "").strip()
    return raw or None


def _env_int(name: str, default: int) -> int:
    raw = _env(name, str(default))
    try:
        return int(raw)
    except Exception:
        return default


def _env_float(name: str, default: float) -> float:
    raw = _env(name, str(default))
    try:
        return float(raw)
    except Exception:
        return default


# Linux gives up with ELOOP after 40 symlink expansions
DEFAULT_MAX_SYMLINKS = 40
DEFAULT_MAX_DEPTH = 512
DEFAULT_LOG_LEVEL = "warning"
DEFAULT_NATIVE_TIMEOUT = 10.0
