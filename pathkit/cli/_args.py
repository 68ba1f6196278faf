"""Argument parsing shared by the pathkit command-line tools."""

from __future__ import annotations

import argparse
import sys
from typing import Any

from pathkit import __version__


class CliParser(argparse.ArgumentParser):
    """``ArgumentParser`` with ``-h/-?/--help``, ``-V/--version`` and a custom usage-error status."""

    def __init__(self, *args: Any, usage_status: int = 2, **kwargs: Any) -> None:
        kwargs["add_help"] = False
        super().__init__(*args, **kwargs)
        self.usage_status = usage_status
        self.add_argument(
            "-h", "-?", "--help", action="help", help="show this help message and exit"
        )
        self.add_argument(
            "-V", "--version", action="version", version=f"%(prog)s {__version__}"
        )

    def error(self, message: str) -> None:  # type: ignore[override]
        self.print_usage(sys.stderr)
        self.exit(self.usage_status, f"{self.prog}: error: {message}\n")
