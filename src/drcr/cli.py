"""Command line interface for drcr."""

import argparse
import os
import sys
from pathlib import Path

from drcr import __version__
from drcr.errors import LedgerError
from drcr.ledger import LedgerStore
from drcr.logging_setup import configure_logging
from drcr.render import write_reports
from drcr.report import prepare_reports

OUTPUT_ENV = "DRCR_OUTPUT"


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="drcr",
        description="Periodic balance reports from plain text double-entry ledgers",
    )
    parser.add_argument(
        "-v", "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-o", "--output",
        type=Path,
        default=None,
        help=f"Directory where reports are written (default: {OUTPUT_ENV} env var)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: DRCR_LOG_LEVEL env var or WARNING)",
    )
    parser.add_argument(
        "ledgers",
        nargs="+",
        type=Path,
        metavar="LEDGER",
        help="Ledger files, read in the given order",
    )
    return parser


def resolve_output_dir(args) -> Path | None:
    """Resolve the output directory from -o or the DRCR_OUTPUT env var."""
    if args.output is not None:
        return args.output
    env_output = os.environ.get(OUTPUT_ENV)
    if env_output:
        return Path(env_output)
    return None


def read_ledgers(paths: list[Path]) -> LedgerStore:
    """Read all ledger files into one store. The first error stops reading."""
    store = LedgerStore()
    for path in paths:
        store.read_file(path)
    return store


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    output_dir = resolve_output_dir(args)
    if output_dir is None:
        print(f"Error: No output directory specified. Use -o or set {OUTPUT_ENV} environment variable.", file=sys.stderr)
        return 1
    if not output_dir.is_dir():
        print(f"Error: Output directory '{output_dir}' does not exist.", file=sys.stderr)
        return 1

    try:
        store = read_ledgers(args.ledgers)
    except LedgerError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: Cannot read ledger: {e}", file=sys.stderr)
        return 1

    chains = prepare_reports(store)
    try:
        paths = write_reports(chains, output_dir)
    except OSError as e:
        print(f"Error: Cannot write report: {e}", file=sys.stderr)
        return 1

    print(f"Wrote {len(paths)} reports from {len(store.transactions)} transactions to '{output_dir}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
