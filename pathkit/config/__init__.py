"""pathkit centralized configuration for runtime settings.

All settings are backed by environment variables following the PK_* naming convention.

Example:
    >>> from pathkit.config import settings
    >>> settings.max_symlinks
    40

Environment Variables:
    PK_MAX_SYMLINKS: Symlink expansions allowed before a cycle is reported (default: 40)
    PK_MAX_DEPTH: Resolution steps allowed beyond one per path component (default: 512)
    PK_LOG_LEVEL: Minimum structured log level (default: warning)
    PK_LOG_DIR: Directory for JSON-lines log files (default: unset)
    PK_NATIVE_TOOL: Native canonicalization tool to use; "none" disables (default: probe)
    PK_NATIVE_TIMEOUT: Seconds allowed for the native tool (default: 10.0)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from pathkit.config.defaults import (
    DEFAULT_LOG_LEVEL,
    DEFAULT_MAX_DEPTH,
    DEFAULT_MAX_SYMLINKS,
    DEFAULT_NATIVE_TIMEOUT,
    _env,
    _env_float,
    _env_int,
    _env_optional,
)


@dataclass(frozen=True)
class Settings:
    """Runtime settings for pathkit.

    Frozen to prevent accidental mutation at runtime. Use ``load_settings()``
    to pick up environment changes made after import.
    """

    max_symlinks: int = DEFAULT_MAX_SYMLINKS
    max_depth: int = DEFAULT_MAX_DEPTH
    log_level: str = DEFAULT_LOG_LEVEL
    log_dir: Optional[str] = None
    native_tool: Optional[str] = None
    native_timeout: float = DEFAULT_NATIVE_TIMEOUT

    @property
    def native_disabled(self) -> bool:
        return (self.native_tool or "").lower() == "none"


def load_settings() -> Settings:
    """Build a ``Settings`` instance from the current environment."""
    max_symlinks = _env_int("PK_MAX_SYMLINKS", DEFAULT_MAX_SYMLINKS)
    max_depth = _env_int("PK_MAX_DEPTH", DEFAULT_MAX_DEPTH)
    return Settings(
        max_symlinks=max_symlinks if max_symlinks >= 0 else DEFAULT_MAX_SYMLINKS,
        max_depth=max_depth if max_depth > 0 else DEFAULT_MAX_DEPTH,
        log_level=_env("PK_LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().lower() or DEFAULT_LOG_LEVEL,
        log_dir=_env_optional("PK_LOG_DIR"),
        native_tool=_env_optional("PK_NATIVE_TOOL"),
        native_timeout=_env_float("PK_NATIVE_TIMEOUT", DEFAULT_NATIVE_TIMEOUT),
    )


# Module-level instance for convenient access
settings = load_settings()

__all__ = [
    "settings",
    "Settings",
    "load_settings",
]
