"""Canonical path resolution for pathkit."""

from ._types import ResolvedPath
from .canonicalizer import (
    BuiltinCanonicalizer,
    Canonicalizer,
    NativeCanonicalizer,
    NativeToolError,
    discover,
)
from .core import CycleDetected, PathResolver, ResolutionError, resolve

__all__ = [
    "ResolvedPath",
    "PathResolver",
    "ResolutionError",
    "CycleDetected",
    "NativeToolError",
    "Canonicalizer",
    "BuiltinCanonicalizer",
    "NativeCanonicalizer",
    "discover",
    "resolve",
]
