"""kubedepscan Command Line Interface.

Scans a project directory (the current directory by default) for
deprecated Kubernetes APIs and exits non-zero when anything is found.
"""

from __future__ import annotations

import argparse
import sys
from typing import TYPE_CHECKING

from kubedepscan.config.settings import get_settings
from kubedepscan.errors import KubeDepScanError
from kubedepscan.observability.logging import configure_logging, get_logger
from kubedepscan.report import ConsoleReport, make_console, render_json
from kubedepscan.scanner import DeprecatedApiScanner
from kubedepscan.version import __version__

if TYPE_CHECKING:
    from argparse import Namespace


EXIT_OK = 0
EXIT_ISSUES_FOUND = 1
EXIT_USAGE_ERROR = 2

_VERBOSITY_LEVELS = {1: "INFO", 2: "DEBUG"}

log = get_logger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="kubedepscan",
        description="kubedepscan - Kubernetes deprecated API scanner",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Checks:
  1. YAML/JSON manifests for deprecated apiVersion/kind pairs
  2. Go code for deprecated client-go imports and API usage
  3. go.mod for very old k8s.io dependencies
  Pluto is used for an additional scan when it is on PATH.

Exit codes:
  0  no deprecated APIs found
  1  one or more potential issues found
  2  invalid invocation

Examples:
  kubedepscan                  Scan the current directory
  kubedepscan ./deploy         Scan another directory
  kubedepscan --format json    Machine-readable output
        """,
    )

    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity on stderr (-v: info, -vv: debug)",
    )

    parser.add_argument(
        "root",
        nargs="?",
        default=".",
        help="Directory to scan (default: current directory)",
    )

    parser.add_argument(
        "--format",
        choices=["text", "json"],
        default="text",
        help="Report format (default: text)",
    )

    parser.add_argument(
        "--no-pluto",
        action="store_true",
        help="Skip the Pluto advanced scan even if Pluto is installed",
    )

    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable coloured output",
    )

    return parser


def setup_logging(args: Namespace) -> None:
    """Configure logging from settings, raised by -v flags."""
    observability = get_settings().observability
    level = _VERBOSITY_LEVELS.get(min(args.verbose, 2), observability.log_level)
    configure_logging(level=level, format_type=observability.log_format)


def run_scan(args: Namespace) -> int:
    """Run the scan and print the report."""
    scanner = DeprecatedApiScanner(use_advanced_scanner=False if args.no_pluto else None)

    try:
        result = scanner.scan(args.root)
    except KubeDepScanError as e:
        log.error("scan_failed", **e.to_dict())
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_USAGE_ERROR

    if args.format == "json":
        print(render_json(result))
    else:
        ConsoleReport(make_console(no_color=args.no_color)).render(result)

    return EXIT_OK if result.passed else EXIT_ISSUES_FOUND


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)
    setup_logging(args)
    return run_scan(args)


if __name__ == "__main__":
    sys.exit(main())
