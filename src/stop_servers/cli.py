"""Command-line entry point for stop-servers."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from .logging_config import setup_logging
from .report_formatter import HELP_EPILOG
from .server_stopper import run_stop_servers_sync

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stop-servers",
        description="🛑 Dynamic Development Server Stopper",
        epilog=HELP_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--dry-run",
        "-n",
        action="store_true",
        help="Show what would be stopped without actually stopping",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Show detailed information about all processes found",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the tool and return the process exit status."""
    args, unknown = build_parser().parse_known_args(argv)
    setup_logging(verbose=args.verbose)
    if unknown:
        logger.debug("Ignoring unrecognised arguments: %s", " ".join(unknown))

    if args.dry_run:
        print("🔍 DRY RUN MODE - No servers will actually be stopped\n")
    else:
        print("🛑 Stopping all development servers...\n")

    try:
        run_stop_servers_sync(dry_run=args.dry_run, verbose=args.verbose)
    except Exception as exc:
        logger.debug("Unhandled error while stopping servers", exc_info=True)
        print(f"❌ An error occurred: {exc}", file=sys.stderr)
        return 1
    return 0


def run() -> None:
    sys.exit(main())


__all__ = ["build_parser", "main", "run"]
