from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING, Any

from dotenv import load_dotenv

from sipster.app import bootstrap, create, delete, get_by_id, search, update
from sipster.config import configure_logging
from sipster.domain.errors import (
    CatalogError,
    DuplicateName,
    NotFound,
    PersistenceFailure,
    ValidationFailure,
)
from sipster.ui.schema import BeverageView, SearchView, parse_beverage_payload

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from pydantic import BaseModel

log = logging.getLogger(__name__)

EXIT_FAILURE = 1
EXIT_VALIDATION = 2
EXIT_NOT_FOUND = 3
EXIT_DUPLICATE = 4

_EXIT_CODES: tuple[tuple[type[CatalogError], int], ...] = (
    (ValidationFailure, EXIT_VALIDATION),
    (NotFound, EXIT_NOT_FOUND),
    (DuplicateName, EXIT_DUPLICATE),
    (PersistenceFailure, EXIT_FAILURE),
)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Manage the Sipster beverage catalog")
    subparsers = parser.add_subparsers(dest="command", required=True)

    search_cmd = subparsers.add_parser("search", help="Search local and TheCocktailDB beverages")
    search_cmd.add_argument("term", type=str, help="Case-insensitive name fragment")
    search_cmd.add_argument(
        "--local-only",
        action="store_true",
        help="Skip TheCocktailDB and return stored beverages only",
    )

    show = subparsers.add_parser("show", help="Show one stored beverage")
    show.add_argument("beverage_id", type=int, help="Beverage id")

    create_cmd = subparsers.add_parser("create", help="Create a beverage from a JSON payload")
    create_cmd.add_argument(
        "--file",
        type=str,
        required=True,
        help="Path to the JSON payload ('-' reads standard input)",
    )

    update_cmd = subparsers.add_parser("update", help="Replace a beverage from a JSON payload")
    update_cmd.add_argument("beverage_id", type=int, help="Beverage id")
    update_cmd.add_argument(
        "--file",
        type=str,
        required=True,
        help="Path to the JSON payload ('-' reads standard input)",
    )

    delete_cmd = subparsers.add_parser("delete", help="Delete a stored beverage")
    delete_cmd.add_argument("beverage_id", type=int, help="Beverage id")

    subparsers.add_parser("bootstrap", help="Seed an empty catalog with sample data")

    return parser.parse_args(list(argv))


def _read_json(source: str) -> Any:
    try:
        text = sys.stdin.read() if source == "-" else Path(source).read_text(encoding="utf-8")
    except OSError as exc:
        raise ValidationFailure("file", f"cannot read {source}: {exc}") from exc
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValidationFailure("file", f"invalid JSON: {exc}") from exc


def _emit(model: BaseModel) -> None:
    sys.stdout.write(model.model_dump_json(by_alias=True, indent=2) + "\n")


def _exit_code_for(exc: CatalogError) -> int:
    for error_type, code in _EXIT_CODES:
        if isinstance(exc, error_type):
            return code
    return EXIT_FAILURE


def _run(args: argparse.Namespace) -> None:
    if args.command == "search":
        result = search(args.term, include_external=not args.local_only)
        _emit(SearchView.from_domain(result))
    elif args.command == "show":
        _emit(BeverageView.from_domain(get_by_id(args.beverage_id)))
    elif args.command == "create":
        payload = parse_beverage_payload(_read_json(args.file))
        beverage = create(payload)
        log.info("Created beverage %s", beverage.id)
        _emit(BeverageView.from_domain(beverage))
    elif args.command == "update":
        payload = parse_beverage_payload(_read_json(args.file))
        update(args.beverage_id, payload)
        log.info("Updated beverage %s", args.beverage_id)
    elif args.command == "delete":
        delete(args.beverage_id)
        log.info("Deleted beverage %s", args.beverage_id)
    elif args.command == "bootstrap":
        seeded = bootstrap()
        log.info("Bootstrap %s", "seeded the catalog" if seeded else "skipped, catalog not empty")
    else:
        raise ValidationFailure("command", f"Unsupported command: {args.command}")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    configure_logging()
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)

    try:
        _run(parsed_args)
    except CatalogError as exc:
        code = _exit_code_for(exc)
        if code == EXIT_FAILURE:
            log.exception("Fatal error during %s", parsed_args.command)
        else:
            log.error("%s failed: %s", parsed_args.command, exc)  # noqa: TRY400
        sys.exit(code)
    except Exception:
        log.exception("Fatal error during %s", parsed_args.command)
        sys.exit(EXIT_FAILURE)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console-script entry point."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
