"""
VarPretty command line entry point.

Usage:
    varpretty SNAPSHOT.json                 interactive prompt
    varpretty SNAPSHOT.json -c "pp cfg"     run one command and exit
"""

import argparse
import logging
import sys
from dataclasses import replace
from typing import List, Optional

from . import __version__
from .commands import CommandError, run_command
from .config import load_settings
from .repl_ui import run_repl
from .snapshot import SnapshotError, load_snapshot

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="varpretty",
        description="Pretty print Go variable snapshots captured by a debugger.",
    )
    parser.add_argument("snapshot", help="snapshot JSON file (Delve variable records)")
    parser.add_argument(
        "-c", "--command", action="append", default=[],
        help="run COMMAND and exit (may be repeated)",
    )
    parser.add_argument(
        "--full-types", action="store_true",
        help="show full import paths in type names",
    )
    parser.add_argument(
        "--simple", action="store_true",
        help="plain prompt without completion or history",
    )
    parser.add_argument("--log-level", help="logging level (default: WARNING)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    settings = load_settings()
    if args.full_types:
        settings = replace(settings, full_types=True)
    if args.simple:
        settings = replace(settings, simple_mode=True)
    if args.log_level:
        settings = replace(settings, log_level=args.log_level.upper())

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        snapshot = load_snapshot(args.snapshot)
    except SnapshotError as e:
        print(f"[VarPretty] Error: {e}", file=sys.stderr)
        return 1

    if not args.command:
        run_repl(snapshot, settings)
        return 0

    status = 0
    for line in args.command:
        try:
            print(run_command(snapshot, line, settings))
        except CommandError as e:
            print(f"[VarPretty] Error: {e}", file=sys.stderr)
            status = 1
    return status


if __name__ == "__main__":
    sys.exit(main())
