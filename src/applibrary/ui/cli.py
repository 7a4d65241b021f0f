# ruff: noqa: T201

from __future__ import annotations

import argparse
import logging
import sys
from datetime import UTC, datetime
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from applibrary.app import build_catalog_source, build_installed_state, show_library
from applibrary.config import ConfigurationError, configure_logging
from applibrary.domain.catalog import load_catalog
from applibrary.domain.errors import LibraryError
from applibrary.domain.model import NEVER_UPDATED, Action, ActionStatus, ActionType

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from applibrary.domain.catalog import Catalog
    from applibrary.domain.library import LibrarySnapshot

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Reconcile the app library")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    catalog = subparsers.add_parser("catalog", help="List the store catalog")
    _add_catalog_arguments(catalog)

    library = subparsers.add_parser("library", help="Show the reconciled library")
    _add_catalog_arguments(library)
    library.add_argument(
        "--install-root",
        type=Path,
        help="Directory holding one sub-directory per installed app (defaults to config)",
    )
    library.add_argument(
        "--action",
        dest="actions",
        action="append",
        default=[],
        metavar="ID=TYPE:STATUS",
        help="Current action for an app, e.g. com.acme.spaceshooter=install:committed",
    )

    return parser.parse_args(list(argv))


def _add_catalog_arguments(parser: argparse.ArgumentParser) -> None:
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--catalog-path",
        type=Path,
        help="JSON catalog document to load instead of the bundled catalog",
    )
    source.add_argument(
        "--remote",
        action="store_true",
        help="Fetch the catalog from APPLIBRARY_CATALOG_URL",
    )


def _parse_action(value: str) -> Action:
    identifier, sep, rest = value.partition("=")
    action_type, sep2, status = rest.partition(":")
    if not (sep and sep2 and identifier.strip()):
        raise ValueError(f"Invalid action {value!r}, expected ID=TYPE:STATUS")
    try:
        return Action(
            identifier=identifier.strip(),
            type=ActionType(action_type.strip().lower()),
            status=ActionStatus(status.strip().lower()),
        )
    except ValueError as exc:
        raise ValueError(f"Invalid action {value!r}: {exc}") from exc


def _format_timestamp(updated_at: int) -> str:
    if updated_at == NEVER_UPDATED:
        return "-"
    return datetime.fromtimestamp(updated_at / 1000, tz=UTC).isoformat(timespec="seconds")


def _print_catalog(catalog: Catalog) -> None:
    for identifier, item in catalog.items():
        print(f"{identifier:<40} {item.label:<24} {item.publisher}")


def _print_library(library: LibrarySnapshot) -> None:
    for identifier, entry in library.items():
        print(
            f"{identifier:<40} {entry.item.label:<24} {entry.status.value:<13} "
            f"{_format_timestamp(entry.updated_at)}"
        )


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    parsed_args: argparse.Namespace
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
        actions = [_parse_action(value) for value in getattr(parsed_args, "actions", [])]
    except ValueError:
        configure_logging(level=logging.INFO)
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        configure_logging(level=logging.DEBUG if parsed_args.verbose else None)
        source = build_catalog_source(
            catalog_path=parsed_args.catalog_path,
            remote=parsed_args.remote,
        )
        if parsed_args.command == "catalog":
            _print_catalog(load_catalog(source))
        elif parsed_args.command == "library":
            library = show_library(
                catalog_source=source,
                installed_state=build_installed_state(install_root=parsed_args.install_root),
                actions=actions,
            )
            _print_library(library)
    except (ConfigurationError, LibraryError) as exc:
        log.error(f"{type(exc).__name__}: {exc}")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    print("\nClosed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
