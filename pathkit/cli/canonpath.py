"""Print the canonical absolute form of each PATH.

Usage: canonpath [-q] [-t] [-X] [-d] PATH [PATH ...]

A platform tool (``realpath``, ``readlink -f``) is used when installed, unless
``--test`` selects the built-in resolver.
"""

from __future__ import annotations

import shlex
import sys
from typing import List, Optional

from pathkit.cli._args import CliParser
from pathkit.config import load_settings
from pathkit.logging import LogLevel, create_logger
from pathkit.resolver import NativeCanonicalizer, PathResolver, ResolutionError, discover

USAGE_STATUS = 3
FAILURE_STATUS = 1


def build_parser() -> CliParser:
    ap = CliParser(
        prog="canonpath",
        description="Resolve paths to their canonical absolute form, following symbolic links.",
        usage_status=USAGE_STATUS,
    )
    ap.add_argument(
        "-q", "--quiet", action="store_true", help="do not print the note about the native tool"
    )
    ap.add_argument(
        "-t", "--test", action="store_true", help="use the built-in resolver even if a native tool exists"
    )
    ap.add_argument(
        "-X", "--noexec", action="store_true", help="print the equivalent command instead of running it"
    )
    ap.add_argument(
        "-d", "--debug", action="store_true", help="trace resolution steps as JSON lines on stderr"
    )
    ap.add_argument("paths", nargs="+", metavar="PATH", help="path to canonicalize")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    cfg = load_settings()

    level = LogLevel.DEBUG if args.debug else LogLevel.parse(cfg.log_level, LogLevel.WARNING)
    log = create_logger("canonpath", log_dir=cfg.log_dir, min_level=level)
    try:
        resolver = PathResolver(config=cfg, logger=log)
        canon = discover(prefer_builtin=args.test, resolver=resolver, config=cfg, logger=log)
        if isinstance(canon, NativeCanonicalizer) and not args.quiet:
            print(
                f"canonpath: note: using {canon.name}; pass --test for the built-in resolver",
                file=sys.stderr,
            )

        status = 0
        for path in args.paths:
            if args.noexec:
                print(shlex.join(canon.command(path)))
                continue
            try:
                print(canon.canonicalize(path))
            except ResolutionError as exc:
                log.info("resolution failed", path=path, canonicalizer=canon.name, error=str(exc))
                print(f"canonpath: {exc}", file=sys.stderr)
                status = FAILURE_STATUS
        return status
    finally:
        log.close()


if __name__ == "__main__":
    raise SystemExit(main())
