# tests/conftest.py
# Isolate tests from PK_* settings in the caller's environment and provide symlink sandboxes.

from __future__ import annotations

import os
from pathlib import Path

import pytest

from pathkit.logging import StructuredLogger
from pathkit.resolver import PathResolver

_SETTINGS_VARS = (
    "PK_MAX_SYMLINKS",
    "PK_MAX_DEPTH",
    "PK_LOG_LEVEL",
    "PK_LOG_DIR",
    "PK_NATIVE_TOOL",
    "PK_NATIVE_TIMEOUT",
)


@pytest.fixture(autouse=True)
def clean_settings_env(monkeypatch):
    """Drop PK_* overrides so every test starts from the documented defaults."""
    for name in _SETTINGS_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def base(tmp_path: Path) -> Path:
    """Sandbox directory with its own ancestors already canonical."""
    # tmp_path may sit under a symlink (e.g. /var -> /private/var on macOS)
    return Path(os.path.realpath(tmp_path))


@pytest.fixture
def tree(base: Path) -> Path:
    """Build a small tree of directories, files and symlinks under ``base``.

    Layout::

        a/            c (file)
        a/b -> x/y    (absolute symlink to a directory)
        a/rel -> ../d (relative symlink)
        d/            file.txt
        x/y/          c (file)
        top -> a      (relative symlink to a directory)
    """
    (base / "a").mkdir()
    (base / "a" / "c").write_text("a/c")
    (base / "x" / "y").mkdir(parents=True)
    (base / "x" / "y" / "c").write_text("x/y/c")
    (base / "d").mkdir()
    (base / "d" / "file.txt").write_text("d")
    os.symlink(str(base / "x" / "y"), str(base / "a" / "b"))
    os.symlink("../d", str(base / "a" / "rel"))
    os.symlink("a", str(base / "top"))
    return base


@pytest.fixture
def resolver() -> PathResolver:
    return PathResolver(max_symlinks=40, max_depth=512)


@pytest.fixture
def traced_resolver(tmp_path: Path):
    """Resolver whose debug trace is written to a JSON-lines file; yields (resolver, log path)."""
    log_path = tmp_path / "trace.jsonl"
    logger = StructuredLogger("resolver", session_id="test", output_file=log_path, enable_console=False)
    yield PathResolver(logger=logger), log_path
    logger.close()
