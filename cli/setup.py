#!/usr/bin/env python3

from datetime import date
from decimal import Decimal

from models.budget_period import PeriodType
from logger import get_logger

logger = get_logger()


def cmd_setup(args, services):
    """Initialize the user, account, default category and active period."""
    result = services.budget.setup(
        period_type=args.period_type,
        anchor_date=args.anchor_date,
        starting_balance=args.starting_balance,
    )

    logger.info("\nSetup complete")
    logger.info("=" * 80)
    logger.info(f"User ID: {result.user.user_id}")
    logger.info(
        f"Account: {result.account.bank_name} {result.account.account_name} "
        f"({result.account.currency}, ID: {result.account.account_id})"
    )
    logger.info(
        f"Period: {result.period.start_date} to {result.period.end_date} "
        f"({result.period.period_type.value}, ID: {result.period.period_id})"
    )
    if not result.created_period:
        logger.info("  (existing active period reused)")
    logger.info(f"Categories: {result.categories_count}")


def setup_parser(subparsers):
    """Setup the setup subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "setup",
        help="Initialize storage (safe to run repeatedly)",
        description="Create the user, account, default category and active period if missing",
    )
    parser.add_argument(
        "--period-type",
        choices=[t.value for t in PeriodType],
        default=None,
        help="Period recurrence policy (default: from config)",
    )
    parser.add_argument(
        "--anchor-date",
        type=date.fromisoformat,
        default=None,
        help="Anchor date in YYYY-MM-DD format (default: from config, then today)",
    )
    parser.add_argument(
        "--starting-balance",
        type=Decimal,
        default=None,
        help="Starting balance of a newly created period",
    )
    parser.set_defaults(func=cmd_setup)
