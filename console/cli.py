"""Console interface for spendlog."""

from __future__ import annotations

import argparse
import logging
import sys
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Iterable, List, Optional

from spendlog.config import Settings, configure_collation, configure_logging
from spendlog.controller import Controller
from spendlog.exceptions import PersistenceError, RecordNotFoundError, ValidationError
from spendlog.models import Record
from spendlog.views import format_amount

logger = logging.getLogger(__name__)


def _parse_amount(value: str) -> str:
    try:
        amount = Decimal(value)
    except InvalidOperation as exc:
        raise argparse.ArgumentTypeError("Amount must be a numeric value") from exc
    if not amount.is_finite() or amount <= 0:
        raise argparse.ArgumentTypeError("Amount must be greater than zero")
    return value


def _format_record(record: Record, symbol: str) -> str:
    return (
        f"[{record.id}] {record.description}\n"
        f"  Category: {record.category} | Amount: {format_amount(record.amount, symbol)}\n"
    )


def _print_records(records: Iterable[Record], controller: Controller) -> None:
    records = list(records)
    if not records:
        print("No records found.")
        return
    print(f"Found {len(records)} records (total {controller.current_total():.2f}):")
    for record in records:
        print(_format_record(record, controller.currency_symbol))


def handle_command(args: argparse.Namespace, controller: Controller) -> None:
    symbol = controller.currency_symbol
    if args.command == "add":
        record = controller.add_or_edit(
            {"description": args.description, "amount": args.amount, "category": args.category}
        )
        print("Record added:\n" + _format_record(record, symbol))
    elif args.command == "edit":
        fields = controller.begin_edit(args.id)
        changes = {
            "description": args.description,
            "amount": args.amount,
            "category": args.category,
        }
        fields.update({k: v for k, v in changes.items() if v is not None})
        try:
            record = controller.add_or_edit(fields)
        except ValidationError:
            controller.cancel_edit()
            raise
        print("Record updated:\n" + _format_record(record, symbol))
    elif args.command == "delete":
        removed = controller.delete(args.id)
        if removed is None:
            print(f"Record {args.id} was already gone.")
        else:
            print(f"Record {args.id} deleted.")
    elif args.command == "clear":
        if not args.yes:
            answer = input("Clear all records? [y/N] ")
            if answer.strip().lower() not in {"y", "yes"}:
                print("Aborted.")
                return
        controller.clear_all()
        print("All records cleared.")
    elif args.command == "list":
        _print_records(controller.set_filter(args.filter), controller)
    elif args.command == "sort":
        _print_records(controller.sort_by(args.key), controller)
    elif args.command == "total":
        controller.set_filter(args.filter)
        text = controller.summary_text()
        print(text or "No records yet.")


def build_parser() -> argparse.ArgumentParser:
    settings = Settings.from_env()
    parser = argparse.ArgumentParser(prog="spendlog", description="Spendlog expense records CLI")
    parser.add_argument(
        "--data-dir",
        default=settings.data_dir,
        type=Path,
        help="Directory to store JSON data (default: $SPENDLOG_DATA_DIR or ./data)",
    )
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        help="Logging level (default: $SPENDLOG_LOG_LEVEL or INFO)",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    add = commands.add_parser("add", help="Add a new record")
    add.add_argument("description")
    add.add_argument("amount", type=_parse_amount)
    add.add_argument("category")

    edit = commands.add_parser("edit", help="Edit an existing record in place")
    edit.add_argument("id")
    edit.add_argument("--description")
    edit.add_argument("--amount", type=_parse_amount)
    edit.add_argument("--category")

    delete = commands.add_parser("delete", help="Delete a record")
    delete.add_argument("id")

    clear = commands.add_parser("clear", help="Delete every record")
    clear.add_argument("--yes", action="store_true", help="Do not ask for confirmation")

    list_parser = commands.add_parser("list", help="List records")
    list_parser.add_argument("--filter", default="", help="Category substring to match")

    sort = commands.add_parser("sort", help="Reorder stored records")
    sort.add_argument("key", choices=["amount", "category"])

    total = commands.add_parser("total", help="Show the total spent")
    total.add_argument("--filter", default="", help="Category substring to match")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        configure_logging(args.log_level)
    except ValueError as exc:
        parser.error(str(exc))
        return 2
    configure_collation()

    logger.debug("Using data directory %s", args.data_dir)
    settings = Settings.from_env()
    try:
        controller = Controller.from_directory(args.data_dir, settings)
        handle_command(args, controller)
    except ValidationError as exc:
        print(f"Validation error: {exc}", file=sys.stderr)
        return 1
    except RecordNotFoundError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    except PersistenceError as exc:
        print(f"Storage error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
