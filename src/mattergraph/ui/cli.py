from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from mattergraph.adapters.reports import BatchLoadError
from mattergraph.app import build_mind_map_from_file, write_mind_map
from mattergraph.config import ConfigurationError, configure_logging, get_log_level

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Resolve matter reports into a mind map")
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Logging level name (defaults to MATTERGRAPH_LOG_LEVEL or INFO)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    build = subparsers.add_parser("build", help="Build the mind map for one batch document")
    build.add_argument("input", type=str, help="Path to the batch snapshot JSON document")
    build.add_argument(
        "--output",
        "-o",
        type=str,
        help="Write the mind map to this path instead of stdout",
    )
    build.add_argument(
        "--indent",
        type=int,
        default=2,
        help="JSON indentation, 0 for compact output (default: %(default)s)",
    )

    return parser.parse_args(list(argv))


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    try:
        configure_logging(level=parsed_args.log_level or get_log_level())
        if parsed_args.indent < 0:
            raise ValueError("Indent must be non-negative")  # noqa: TRY301
    except (ConfigurationError, ValueError):
        log.exception("CLI validation error")
        sys.exit(2)

    indent = parsed_args.indent or None
    try:
        if parsed_args.command == "build":
            if parsed_args.output:
                write_mind_map(parsed_args.input, parsed_args.output, indent=indent)
            else:
                sys.stdout.write(build_mind_map_from_file(parsed_args.input, indent=indent))
                sys.stdout.write("\n")
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
    except (BatchLoadError, ConfigurationError):
        log.exception("Cannot build mind map")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error during resolution")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
