"""Canonicalizer implementations and startup discovery.

A platform tool (``realpath`` or ``readlink -f``) is preferred when installed;
otherwise the built-in ``PathResolver`` does the work.
"""

from __future__ import annotations

import os
import shutil
import subprocess
from typing import Callable, Iterable, Optional, Protocol, Sequence, Tuple, runtime_checkable

from pathkit.config import Settings, load_settings
from pathkit.logging import StructuredLogger, null_logger

from ._types import ResolvedPath
from .core import PathResolver, ResolutionError

# (executable, extra arguments) in probe order
NATIVE_TOOLS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("realpath", ()),
    ("grealpath", ()),
    ("readlink", ("-f",)),
)

BUILTIN_COMMAND = "canonpath"


class NativeToolError(ResolutionError):
    """Raised when the native canonicalization tool fails."""

    def __init__(self, tool: str, returncode: Optional[int], stderr: str = "") -> None:
        detail = stderr.strip() or f"exit status {returncode}"
        super().__init__(f"{tool}: {detail}")
        self.tool = tool
        self.returncode = returncode
        self.stderr = stderr


@runtime_checkable
class Canonicalizer(Protocol):
    """Path canonicalization capability."""

    name: str

    def canonicalize(self, path: str) -> ResolvedPath:
        """Return the canonical absolute form of ``path``."""
        ...

    def command(self, path: str) -> list[str]:
        """Return the equivalent external command line for ``path``."""
        ...


class BuiltinCanonicalizer:
    """Canonicalizer backed by the built-in ``PathResolver``."""

    name = "builtin"

    def __init__(self, resolver: Optional[PathResolver] = None) -> None:
        self.resolver = resolver or PathResolver()

    def canonicalize(self, path: str) -> ResolvedPath:
        return self.resolver.resolve(path)

    def command(self, path: str) -> list[str]:
        return [BUILTIN_COMMAND, "--test", "--", path]


class NativeCanonicalizer:
    """Canonicalizer that runs a platform tool such as ``realpath``."""

    def __init__(
        self,
        executable: str,
        args: Sequence[str] = (),
        *,
        timeout: Optional[float] = None,
        logger: Optional[StructuredLogger] = None,
    ) -> None:
        self.executable = executable
        self.args = tuple(args)
        self.timeout = timeout
        self.name = executable
        self._log = logger or null_logger("canonicalizer")

    def command(self, path: str) -> list[str]:
        return [self.executable, *self.args, "--", path]

    def canonicalize(self, path: str) -> ResolvedPath:
        cmd = self.command(path)
        self._log.debug("running native tool", cmd=cmd)
        try:
            proc = subprocess.run(
                cmd,
                capture_output=True,
                timeout=self.timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as exc:
            raise NativeToolError(self.executable, None, f"timed out after {exc.timeout}s") from exc
        except OSError as exc:
            raise NativeToolError(self.executable, None, exc.strerror or str(exc)) from exc

        # raw bytes: filenames need not be valid in the locale encoding
        stdout = os.fsdecode(proc.stdout)
        if proc.returncode != 0:
            raise NativeToolError(self.executable, proc.returncode, os.fsdecode(proc.stderr))
        out = stdout.rstrip("\n")
        if not out:
            raise NativeToolError(self.executable, proc.returncode, "empty output")
        return ResolvedPath(out)


def discover(
    prefer_builtin: bool = False,
    tools: Optional[Iterable[Tuple[str, Sequence[str]]]] = None,
    which: Optional[Callable[[str], Optional[str]]] = None,
    resolver: Optional[PathResolver] = None,
    config: Optional[Settings] = None,
    logger: Optional[StructuredLogger] = None,
) -> Canonicalizer:
    """Pick a canonicalizer: the first installed native tool, else the built-in one.

    ``PK_NATIVE_TOOL`` replaces the candidate list with a single executable;
    the value ``none`` disables native discovery.
    """
    cfg = config or load_settings()
    log = logger or null_logger("canonicalizer")
    which = which or shutil.which

    if prefer_builtin or cfg.native_disabled:
        log.debug("using builtin resolver", forced=prefer_builtin)
        return BuiltinCanonicalizer(resolver)

    if tools is None:
        if cfg.native_tool:
            args = ("-f",) if cfg.native_tool.endswith("readlink") else ()
            tools = ((cfg.native_tool, args),)
        else:
            tools = NATIVE_TOOLS

    for name, args in tools:
        found = which(name)
        if found:
            log.debug("found native tool", tool=name, executable=found)
            return NativeCanonicalizer(found, args, timeout=cfg.native_timeout, logger=log)
        log.debug("native tool not installed", tool=name)

    return BuiltinCanonicalizer(resolver)


__all__ = [
    "Canonicalizer",
    "BuiltinCanonicalizer",
    "NativeCanonicalizer",
    "NativeToolError",
    "NATIVE_TOOLS",
    "discover",
]
