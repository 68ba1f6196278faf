"""Built-in canonical path resolution.

``PathResolver`` turns any path (relative, symlinked, or not yet created) into
its canonical absolute form. It works one trailing component at a time:

- the parent directory is made absolute and lexically normalized, the way a
  shell ``cd DIR; pwd`` reports it, falling back to the literal directory
  string when it cannot be entered;
- a trailing ``.`` or ``..`` defers to the resolution of that directory;
- a symlink is replaced by its target and resolved again;
- anything else is appended, unchanged, to the resolved parent.

Only read-only queries are made (``lstat``, ``readlink``, ``stat``, ``getcwd``).
The working directory is never changed, so a resolver may be shared between
threads. Symlink expansions and total recursion are both bounded; exceeding
either raises ``CycleDetected``.
"""

from __future__ import annotations

import os
import posixpath
from typing import Optional, Tuple, Union

from pathkit.config import Settings, load_settings
from pathkit.logging import StructuredLogger, null_logger

from ._types import ResolvedPath

ROOT = "/"


class ResolutionError(RuntimeError):
    """Raised when a path cannot be canonicalized because of the environment."""


class CycleDetected(ResolutionError):
    """Raised when resolution exceeds its symlink or recursion bound."""

    def __init__(self, path: str, limit: int, what: str = "symbolic links") -> None:
        super().__init__(f"too many levels of {what} resolving {path!r} (limit {limit})")
        self.path = path
        self.limit = limit


def is_root(path: str) -> bool:
    return bool(path) and not path.strip("/")


def split_path(path: str) -> Tuple[str, str]:
    """Split ``path`` into ``(dirname, basename)`` like the shell utilities.

    Trailing slashes are ignored and a bare name has dirname ``"."``.
    """
    stripped = path.rstrip("/")
    if not stripped:
        return (ROOT, ROOT) if path else (".", "")
    head, tail = posixpath.split(stripped)
    if not head:
        return ".", tail
    return head.rstrip("/") or ROOT, tail


def join_path(parent: str, name: str) -> str:
    """Join ``name`` onto ``parent`` without doubling the separator at the root."""
    if parent.endswith("/"):
        return parent + name
    return f"{parent}/{name}"


class PathResolver:
    """Recursive canonicalizer with bounded symlink following.

    Args:
        max_symlinks: Symlink expansions allowed along one resolution chain.
        max_depth: Recursion steps allowed beyond one per path component.
        logger: Receives one ``debug`` record per resolution step.
    """

    def __init__(
        self,
        *,
        max_symlinks: Optional[int] = None,
        max_depth: Optional[int] = None,
        logger: Optional[StructuredLogger] = None,
        config: Optional[Settings] = None,
    ) -> None:
        cfg = config or load_settings()
        self.max_symlinks = cfg.max_symlinks if max_symlinks is None else max_symlinks
        self.max_depth = cfg.max_depth if max_depth is None else max_depth
        if self.max_symlinks < 0 or self.max_depth < 1:
            raise ValueError("max_symlinks must be >= 0 and max_depth >= 1")
        self._log = logger or null_logger("resolver")

    def resolve(self, path: Union[str, "os.PathLike[str]"]) -> ResolvedPath:
        raw = os.fspath(path)
        if not isinstance(raw, str):
            raise TypeError("path must be str or a str path-like")
        path = raw or "."
        limit = self.max_depth + self._component_count(path)
        try:
            resolved = self._resolve(path, 0, 0, limit)
        except RecursionError as exc:
            raise CycleDetected(raw, limit, "recursion") from exc
        return ResolvedPath(resolved)

    def _resolve(self, path: str, depth: int, links: int, limit: int) -> str:
        if depth > limit:
            raise CycleDetected(path, limit, "recursion")
        if is_root(path):
            self._trace("root", path, depth, links)
            return ROOT

        dirname, name = split_path(path)
        if name == "..":
            dirname, name = path, "."
        absdir = self._absdir(dirname)

        if name == ".":
            if absdir == path:
                # untraversable "x/.." would otherwise resolve to itself
                absdir = self._lexical(path)
            self._trace("directory", path, depth, links, dir=dirname, absdir=absdir)
            return self._resolve(absdir, depth + 1, links, limit)

        entry = join_path(absdir, name)
        if os.path.islink(entry):
            if links >= self.max_symlinks:
                raise CycleDetected(path, self.max_symlinks)
            target = self._readlink(entry)
            self._trace("symlink", path, depth, links, dir=dirname, absdir=absdir, target=target)
            if not target.startswith("/"):
                # relative targets are taken from the directory holding the link
                target = join_path(self._resolve(absdir, depth + 1, links, limit), target)
            # each hop may lengthen the path; symlinks are bounded separately
            limit += self._component_count(target)
            return self._resolve(target, depth + 1, links + 1, limit)

        if absdir == ROOT:
            self._trace("top-level", path, depth, links, name=name)
            return ROOT + name

        self._trace("component", path, depth, links, dir=dirname, absdir=absdir, name=name)
        return join_path(self._resolve(absdir, depth + 1, links, limit), name)

    def _absdir(self, dirname: str) -> str:
        candidate = self._lexical(dirname)
        if os.path.isdir(candidate) and os.access(candidate, os.X_OK):
            return candidate
        self._log.debug("directory not traversable, using it literally", dir=dirname)
        return dirname

    @staticmethod
    def _component_count(path: str) -> int:
        count = sum(1 for part in path.split("/") if part)
        if not path.startswith("/"):
            try:
                count += sum(1 for part in os.getcwd().split("/") if part)
            except OSError:
                pass
        return count

    @staticmethod
    def _lexical(path: str) -> str:
        if not path.startswith("/"):
            try:
                cwd = os.getcwd()
            except OSError as exc:
                raise ResolutionError(f"cannot determine working directory: {exc.strerror}") from exc
            path = join_path(cwd, path)
        normalized = posixpath.normpath(path)
        # POSIX normpath keeps a leading "//"
        return ROOT + normalized.lstrip("/")

    @staticmethod
    def _readlink(entry: str) -> str:
        try:
            return os.readlink(entry)
        except OSError as exc:
            raise ResolutionError(f"cannot read symbolic link {entry!r}: {exc.strerror}") from exc

    def _trace(self, step: str, path: str, depth: int, links: int, **context: object) -> None:
        self._log.debug("resolve step", step=step, path=path, depth=depth, links=links, **context)


_default: Optional[PathResolver] = None


def resolve(path: Union[str, "os.PathLike[str]"]) -> ResolvedPath:
    """Resolve ``path`` with a resolver configured from ``PK_*`` settings."""
    global _default
    if _default is None:
        _default = PathResolver()
    return _default.resolve(path)


__all__ = [
    "PathResolver",
    "ResolutionError",
    "CycleDetected",
    "resolve",
    "split_path",
    "join_path",
    "is_root",
]
