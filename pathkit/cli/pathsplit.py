"""Print the entries of a PATH-like environment variable, one per line.

Usage: pathsplit [-l] [NAME]
"""

from __future__ import annotations

from typing import List, Optional

from pathkit.cli._args import CliParser
from pathkit.envpath import DEFAULT_VAR, read_path_var
from pathkit.logging import create_logger

USAGE_STATUS = 1


def build_parser() -> CliParser:
    ap = CliParser(
        prog="pathsplit",
        description="Print the entries of a colon-separated environment variable, one per line.",
        usage_status=USAGE_STATUS,
    )
    ap.add_argument("-l", "--list", action="store_true", help="list the entries (default)")
    ap.add_argument(
        "name",
        nargs="?",
        default=DEFAULT_VAR,
        metavar="NAME",
        help=f"environment variable to split (default: {DEFAULT_VAR})",
    )
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    log = create_logger("pathsplit")
    try:
        entries = read_path_var(args.name)
        log.debug("split variable", name=args.name, entries=len(entries))
        for entry in entries:
            print(entry)
    finally:
        log.close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
