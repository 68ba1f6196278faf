from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class ResolvedPath:
    """
    Canonical absolute path produced by a canonicalizer.
    No ``.``/``..`` segments and no symlink components remain.
    """

    _p: str

    def as_path(self) -> Path:
        return Path(self._p)

    def __fspath__(self) -> str:
        return self._p

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self._p

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"ResolvedPath({self._p!r})"
