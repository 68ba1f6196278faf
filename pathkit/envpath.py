"""Split PATH-like environment variables into their entries."""

from __future__ import annotations

import os
from typing import List, Mapping, Optional

DEFAULT_VAR = "PATH"
SEPARATOR = ":"


def split_path_var(value: Optional[str], sep: str = SEPARATOR) -> List[str]:
    """Split ``value`` on ``sep``, keeping empty entries and their order.

    A missing or empty value has no entries.
    """
    if not value:
        return []
    return value.split(sep)


def read_path_var(name: str = DEFAULT_VAR, environ: Optional[Mapping[str, str]] = None) -> List[str]:
    env = os.environ if environ is None else environ
    return split_path_var(env.get(name))


__all__ = ["split_path_var", "read_path_var", "DEFAULT_VAR", "SEPARATOR"]
