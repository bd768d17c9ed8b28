# ruff: noqa: T201

from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from schemadiff.app import (
    compare_entity_files,
    compare_entity_versions,
    compare_versions,
    list_versions,
)
from schemadiff.config import ConfigurationError, configure_logging
from schemadiff.report import (
    entity_diff_payload,
    render_entity_comparison,
    render_version_comparison,
    render_versions,
    to_json,
    version_comparison_payload,
)

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Compare versions of a schema corpus")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("versions", help="List published versions, newest first")

    summary = subparsers.add_parser("summary", help="Added, removed and modified entities")
    summary.add_argument(
        "from_version",
        nargs="?",
        help="Version to compare from (defaults to the second newest)",
    )
    summary.add_argument(
        "to_version",
        nargs="?",
        help="Version to compare to (defaults to the newest)",
    )
    summary.add_argument("--json", action="store_true", help="Emit JSON instead of text")

    entity = subparsers.add_parser("entity", help="Field-level diff of one entity")
    entity.add_argument("from_version", help="Version to compare from")
    entity.add_argument("to_version", help="Version to compare to")
    entity.add_argument("name", help="Entity name as listed in the corpus index")
    entity.add_argument("--json", action="store_true", help="Emit JSON instead of text")

    files = subparsers.add_parser("files", help="Field-level diff of two entity documents")
    files.add_argument("old_path", help="Path to the old entity JSON document")
    files.add_argument("new_path", help="Path to the new entity JSON document")
    files.add_argument("--json", action="store_true", help="Emit JSON instead of text")

    args = parser.parse_args(list(argv))
    if args.command == "summary" and args.from_version and args.to_version is None:
        parser.error("summary needs both versions or neither")
    return args


def _run(args: argparse.Namespace) -> str:
    if args.command == "versions":
        return render_versions(list_versions())
    if args.command == "summary":
        comparison = compare_versions(args.from_version, args.to_version)
        if args.json:
            return to_json(version_comparison_payload(comparison))
        return render_version_comparison(comparison)
    if args.command in {"entity", "files"}:
        if args.command == "entity":
            result = compare_entity_versions(args.from_version, args.to_version, args.name)
        else:
            result = compare_entity_files(args.old_path, args.new_path)
        if args.json:
            return to_json(entity_diff_payload(result.diff))
        return render_entity_comparison(result)
    raise ValueError(f"Unsupported command: {args.command}")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        output = _run(parsed_args)
    except (ConfigurationError, ValueError):
        log.exception("Invalid invocation")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error during comparison")
        sys.exit(1)

    print(output)


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
