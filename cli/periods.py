#!/usr/bin/env python3

from decimal import Decimal

from cli.owner import resolve_owner
from logger import get_logger

logger = get_logger()


def cmd_show(args, services):
    """Show the active period with spending per category."""
    user, account = resolve_owner(services)
    overview = services.budget.get_active_period_with_summaries(
        user.user_id, account.account_id
    )
    period = overview.period

    logger.info(f"\nPeriod {period.start_date} to {period.end_date} (ID: {period.period_id})")
    logger.info(f"Starting balance: {period.starting_balance:.2f} {account.currency}")
    logger.info(f"Current balance:  {overview.closing_balance:.2f} {account.currency}")
    logger.info("=" * 80)
    logger.info(f"{'Category':<30} {'Limit':>12} {'Spent':>12} {'Remaining':>12} {'%':>6}")
    logger.info("-" * 80)
    for summary in overview.category_summaries:
        logger.info(
            f"{summary.name:<30} {summary.monthly_limit:>12.2f} {summary.spent:>12.2f} "
            f"{summary.remaining:>12.2f} {summary.percentage:>5}%"
        )


def cmd_list(args, services):
    """List all periods of the account, newest first."""
    user, account = resolve_owner(services)
    records = services.periods.find_all(user.user_id, account.account_id)

    if not records:
        logger.info("No periods found.")
        return

    logger.info("\nPeriods:")
    logger.info("=" * 80)
    for record in records:
        period = record.period
        state = type(services.periods.classify(record)).__name__
        logger.info(f"ID: {period.period_id}")
        logger.info(f"Dates: {period.start_date} to {period.end_date} ({state})")
        logger.info(f"Type: {period.period_type.value} (anchor {period.anchor_date})")
        logger.info(f"Transactions: {len(record.transactions)}")
        logger.info("-" * 80)

    logger.info(f"\nTotal periods: {len(records)}")


def cmd_rollover(args, services):
    """Open the next period if the current one has ended."""
    user, account = resolve_owner(services)
    period = services.budget.rollover(
        user.user_id, account.account_id, current_balance=args.balance
    )

    if period is None:
        logger.info("Current period is still active; nothing to do.")
        return

    logger.info(
        f"✓ Opened period {period.start_date} to {period.end_date} "
        f"with starting balance {period.starting_balance:.2f}"
    )


def setup_parser(subparsers):
    """Setup periods subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "periods",
        help="Inspect budget periods",
        description="Show the active period, list history and roll over to the next period",
    )

    periods_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available period commands",
        dest="subcommand",
        required=True,
    )

    show_parser = periods_subparsers.add_parser(
        "show", help="Show the active period with category spending"
    )
    show_parser.set_defaults(func=cmd_show)

    list_parser = periods_subparsers.add_parser("list", help="List all periods")
    list_parser.set_defaults(func=cmd_list)

    rollover_parser = periods_subparsers.add_parser(
        "rollover", help="Create the next period when the current one has ended"
    )
    rollover_parser.add_argument(
        "--balance",
        type=Decimal,
        default=None,
        help="Starting balance (default: closing balance of the previous period)",
    )
    rollover_parser.set_defaults(func=cmd_rollover)
