#!/usr/bin/env python3
"""
Unified CLI for single-vehicle maintenance tracking.

Commands:
  status  - Show what maintenance is due at the current mileage
  history - View the maintenance log
  log     - Record maintenance items (and the purchase date)
  delete  - Remove one log entry
  reset   - Remove the purchase date and the whole log
  rules   - List the maintenance rules
"""

import argparse
import logging
import sys
from datetime import date
from pathlib import Path
from tabulate import tabulate
from typing import List, Optional

from upkeep import (
    DueAssessment,
    ServiceEvent,
    UpkeepError,
    ValidationError,
    DEFAULT_CATALOG,
    load_catalog,
    LogbookStore,
    submit_maintenance,
    query_due,
    list_log,
    delete_log,
    reset,
)
from upkeep.config import Config, configure_logging
from upkeep.service import parse_input_date

logger = logging.getLogger(__name__)

# =============================================================================
# Formatting helpers
# =============================================================================


def format_km(km: Optional[int]) -> str:
    """Format mileage for display."""
    return f"{km:,}" if km is not None else "-"


def format_remaining(remaining: Optional[int], unit: str) -> str:
    """Format a remaining amount, flagging overdue values."""
    if remaining is None:
        return "-"
    if remaining <= 0:
        return f"due ({abs(remaining):,} {unit} over)" if remaining else "due"
    return f"{remaining:,} {unit}"


# =============================================================================
# Status command
# =============================================================================


def make_status_table(assessments: List[DueAssessment]) -> List[List[str]]:
    """Convert assessments to table rows."""
    rows = []
    for a in assessments:
        t = a.time_status
        m = a.mileage_status
        rows.append(
            [
                a.item_name,
                "DUE" if a.is_due else "ok",
                t.basis_label if t else "-",
                t.next_due_date.isoformat() if t else "-",
                format_remaining(t.days_remaining if t else None, "d"),
                m.basis_label if m else "-",
                format_km(m.next_due_mileage if m else None),
                format_remaining(m.distance_remaining if m else None, "km"),
            ]
        )
    return rows


def cmd_status(args, store: LogbookStore, catalog):
    """Show what maintenance is due at the current mileage."""
    today = parse_input_date(args.date, "--date") if args.date else date.today()
    result = query_due(store, args.mileage, catalog=catalog, today=today)

    print(f"Current mileage: {args.mileage:,} km (as of {today.isoformat()})")
    print(f"Rules: {len(catalog)}")
    print()

    if result.suggestions:
        print("DUE:")
        for suggestion in result.suggestions:
            print(f"  {suggestion}")
    else:
        print("Nothing due.")
    print()

    headers = [
        "Item",
        "Status",
        "Time basis",
        "Due (date)",
        "Remaining (time)",
        "Mileage basis",
        "Due (km)",
        "Remaining (km)",
    ]
    print(tabulate(make_status_table(result.assessments), headers=headers, tablefmt="simple"))

    if args.debug:
        print()
        print(f"Query date: {result.debug.query_date.isoformat()}")
        for line in result.debug.time_based + result.debug.mileage_based:
            print(f"  {line}")

    return 0


# =============================================================================
# History command
# =============================================================================


def make_history_table(entries: List[ServiceEvent]) -> List[List[str]]:
    """Convert log entries to table rows."""
    return [[str(e.id), e.date, format_km(e.mileage), e.item_name] for e in entries]


def cmd_history(args, store: LogbookStore, catalog):
    """View the maintenance log."""
    purchase_date = store.get_purchase_date()
    entries = list_log(store)
    total = len(entries)

    if args.item:
        entries = [e for e in entries if args.item.lower() in e.item_name.lower()]

    print(f"Purchase date: {purchase_date.isoformat() if purchase_date else '-'}")
    print(f"Total entries: {total}")
    if args.item:
        print(f"Showing: {len(entries)} (filtered)")
    print()

    if not entries:
        print("No log entries found.")
        return 0

    headers = ["ID", "Date", "Mileage", "Item"]
    print(tabulate(make_history_table(entries), headers=headers, tablefmt="simple"))
    return 0


# =============================================================================
# Log command
# =============================================================================


def cmd_log(args, store: LogbookStore, catalog):
    """Record maintenance items."""
    known = {rule.name for rule in catalog}
    unknown = [item for item in args.items if item not in known]
    if unknown and not args.force:
        print(f"Error: Unknown item(s): {', '.join(unknown)}")
        print("\nAvailable items:")
        for rule in catalog:
            print(f"  {rule.name}")
        print("\nUse --force to log them anyway.")
        return 1

    if not args.items and not args.purchase_date:
        print("Error: Give at least one item or --purchase-date")
        return 1

    entry_date = (args.date or date.today().isoformat()) if args.items else None

    print(f"Adding log entries to {store.filename}:")
    if args.purchase_date:
        print(f"  Purchase date: {args.purchase_date}")
    if args.items:
        print(f"  Date:    {entry_date}")
        print(f"  Mileage: {format_km(args.mileage)}")
        print(f"  Items:   {', '.join(args.items)}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    result = submit_maintenance(
        store,
        purchase_date=args.purchase_date,
        maintenance_date=entry_date,
        mileage=args.mileage,
        items=args.items,
    )
    if args.purchase_date and not result.purchase_date_set:
        print("Purchase date already recorded; left unchanged.")
    print(f"Saved {len(result.events)} entries.")
    return 0


# =============================================================================
# Delete / reset commands
# =============================================================================


def cmd_delete(args, store: LogbookStore, catalog):
    """Remove one log entry."""
    if not delete_log(store, args.id):
        print(f"Error: No log entry with ID {args.id}")
        return 1
    print(f"Deleted entry {args.id}.")
    return 0


def cmd_reset(args, store: LogbookStore, catalog):
    """Remove the purchase date and the whole log."""
    if not args.yes:
        print("Refusing to clear the logbook without --yes")
        return 1
    reset(store)
    print("Purchase date and all log entries deleted.")
    return 0


# =============================================================================
# Rules command
# =============================================================================


def cmd_rules(args, store: LogbookStore, catalog):
    """List the maintenance rules."""
    print(f"Rules: {len(catalog)}")
    print()
    rows = [[rule.name, rule.interval_text] for rule in catalog]
    print(tabulate(rows, headers=["Item", "Interval"], tablefmt="simple"))
    return 0


# =============================================================================
# Main
# =============================================================================


COMMANDS = {
    "status": cmd_status,
    "history": cmd_history,
    "log": cmd_log,
    "delete": cmd_delete,
    "reset": cmd_reset,
    "rules": cmd_rules,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Vehicle maintenance tracker",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s logbook.yaml log 机油 空气滤芯 --mileage 12000 --date 2024-05-01
  %(prog)s logbook.yaml log --purchase-date 2023-11-20
  %(prog)s logbook.yaml status --mileage 16000
  %(prog)s logbook.yaml status --mileage 16000 --debug
  %(prog)s logbook.yaml history --item 机油
  %(prog)s logbook.yaml delete 3
  %(prog)s logbook.yaml rules
""",
    )
    parser.add_argument(
        "data_file",
        type=Path,
        nargs="?",
        help="Path to logbook YAML file (default: $UPKEEP_DATA_FILE or logbook.yaml)",
    )
    parser.add_argument(
        "--catalog",
        type=Path,
        help="Rule catalog YAML file (default: built-in rules)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        help="Logging level (default: $UPKEEP_LOG_LEVEL or INFO)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # Status subcommand
    status_parser = subparsers.add_parser(
        "status", help="Show what maintenance is due at the current mileage"
    )
    status_parser.add_argument(
        "--mileage",
        type=int,
        required=True,
        help="Current odometer reading in km",
    )
    status_parser.add_argument(
        "--date",
        type=str,
        help="Evaluate as of this date, YYYY-MM-DD (default: today)",
    )
    status_parser.add_argument(
        "--debug",
        action="store_true",
        help="Also print every time and mileage projection",
    )

    # History subcommand
    history_parser = subparsers.add_parser("history", help="View the maintenance log")
    history_parser.add_argument(
        "--item",
        type=str,
        help="Filter to items containing text (case-insensitive)",
    )

    # Log subcommand
    log_parser = subparsers.add_parser("log", help="Record maintenance items")
    log_parser.add_argument(
        "items",
        nargs="*",
        help="Item names (e.g., 机油 空气滤芯); omit to record only the purchase date",
    )
    log_parser.add_argument(
        "--mileage",
        type=int,
        help="Mileage at time of service in km (required with items)",
    )
    log_parser.add_argument(
        "--date",
        type=str,
        help="Service date in YYYY-MM-DD format (default: today)",
    )
    log_parser.add_argument(
        "--purchase-date",
        type=str,
        help="Vehicle purchase date, recorded only if none is on file",
    )
    log_parser.add_argument(
        "--force",
        action="store_true",
        help="Allow items that are not in the rule catalog",
    )
    log_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be added without saving",
    )

    # Delete subcommand
    delete_parser = subparsers.add_parser("delete", help="Remove one log entry")
    delete_parser.add_argument("id", type=int, help="Log entry ID (see history)")

    # Reset subcommand
    reset_parser = subparsers.add_parser(
        "reset", help="Remove the purchase date and the whole log"
    )
    reset_parser.add_argument(
        "--yes",
        action="store_true",
        help="Confirm deleting everything",
    )

    # Rules subcommand
    subparsers.add_parser("rules", help="List the maintenance rules")

    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    config = Config(
        data_file=str(args.data_file) if args.data_file else None,
        catalog_file=str(args.catalog) if args.catalog else None,
        log_level=args.log_level,
    )
    configure_logging(config.log_level)

    store = LogbookStore(config.data_file)
    try:
        catalog = load_catalog(config.catalog_file) if config.catalog_file else DEFAULT_CATALOG
        return COMMANDS[args.command](args, store, catalog)
    except ValidationError as e:
        print(f"Error: {e}")
        return 1
    except UpkeepError as e:
        logger.error("%s failed: %s", args.command, e, exc_info=True)
        print(f"Internal error: {e}")
        return 2


if __name__ == "__main__":
    sys.exit(main() or 0)
