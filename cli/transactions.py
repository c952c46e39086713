#!/usr/bin/env python3

import sys
from pathlib import Path

from cli.owner import resolve_owner
from ingestion import get_ingestion_module, module_for_path
from logger import get_logger

logger = get_logger()


def cmd_import(args, services):
    """Import normalized transactions from a CSV or JSON file into the active period.

    Args:
        args: Parsed command-line arguments with file and optional format
        services: Services container
    """
    path = Path(args.file)
    if not path.exists():
        logger.error(f"File not found: {args.file}")
        sys.exit(1)

    try:
        if args.format:
            ingestion_module = get_ingestion_module(args.format)
        else:
            ingestion_module = module_for_path(path)
    except ValueError as e:
        logger.error(str(e))
        sys.exit(1)

    user, account = resolve_owner(services)

    with open(path, "r", encoding="utf-8", newline="") as f:
        records = ingestion_module.ingest(f)

    logger.info(f"\nParsed {len(records)} transactions from {path.name}")
    if not records:
        logger.info("No transactions to import.")
        return

    added = services.budget.import_transactions(user.user_id, account.account_id, records)

    logger.info(f"✓ Successfully imported {added} transactions")
    if added < len(records):
        logger.info(f"  ({len(records) - added} duplicate transaction(s) skipped)")


def cmd_list(args, services):
    """List the active period's transactions, newest first."""
    user, account = resolve_owner(services)
    transactions = services.budget.list_active_transactions(
        user.user_id, account.account_id
    )

    if not transactions:
        logger.info("No transactions in the active period.")
        return

    names = {c.category_id: c.name for c in services.categories.find_all(user.user_id)}

    logger.info(
        f"\n{'Date':<12} {'Amount':>10}  {'Merchant':<24} {'Category':<20} ID"
    )
    logger.info("=" * 100)
    for t in transactions:
        category = names.get(t.category_id, "?") + ("*" if t.is_manual_override else "")
        logger.info(
            f"{t.date.isoformat():<12} {t.amount:>10.2f}  {t.merchant_name[:24]:<24} "
            f"{category[:20]:<20} {t.transaction_id}"
        )
    logger.info(f"\nTotal transactions: {len(transactions)} (* = set manually)")


def cmd_categorize(args, services):
    """Move a transaction to another category."""
    user, account = resolve_owner(services)
    transaction = services.budget.update_transaction_category(
        user.user_id, account.account_id, args.transaction_id, args.category_id
    )
    logger.info(
        f"✓ Transaction {transaction.transaction_id} moved to category {transaction.category_id}"
    )


def setup_parser(subparsers):
    """Setup transactions subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "transactions",
        help="Import and manage transactions",
        description="Import normalized transactions and re-categorize them",
    )

    transactions_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available transaction commands",
        dest="subcommand",
        required=True,
    )

    # transactions import
    import_parser = transactions_subparsers.add_parser(
        "import",
        help="Import transactions into the active period",
        description="Import normalized transactions; already imported ones are skipped",
        epilog="""
CSV columns: external_id,date,amount,merchant_name,description[,original_category]
JSON: a list of objects with the same keys, or {"transactions": [...]}
        """,
    )
    import_parser.add_argument("file", help="Path to a .csv or .json file")
    import_parser.add_argument(
        "--format",
        default=None,
        help="File format (csv or json); guessed from the suffix by default",
    )
    import_parser.set_defaults(func=cmd_import)

    # transactions list
    list_parser = transactions_subparsers.add_parser(
        "list", help="List transactions of the active period"
    )
    list_parser.set_defaults(func=cmd_list)

    # transactions categorize
    categorize_parser = transactions_subparsers.add_parser(
        "categorize", help="Assign a transaction to a category"
    )
    categorize_parser.add_argument("transaction_id", help="Transaction ID")
    categorize_parser.add_argument("category_id", help="Category ID")
    categorize_parser.set_defaults(func=cmd_categorize)
