#!/usr/bin/env python3
"""
Budget ledger CLI - track spending against category limits per budget period.

Usage:
    python -m cli <command> <subcommand> [options]

Commands:
    setup        Initialize user, account, default category and active period
    periods      Show the active period, list history, roll over
    transactions Import and re-categorize transactions
    categories   Manage spending categories

Examples:
    python -m cli setup --period-type FIXED_DATE --anchor-date 2024-12-01
    python -m cli periods show
    python -m cli transactions import feed.csv
    python -m cli categories create Groceries --limit 300
"""

import sys
import argparse
from cli import categories, periods, setup, transactions
from config import load_config
from services.base import Services
from logger import setup_logging


def main():
    """Main CLI entry point with subcommands."""
    parser = argparse.ArgumentParser(
        prog="cli",
        description="Budget ledger - spending against category limits per period",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
        required=True,
    )

    # Register each command's subparser
    setup.setup_parser(subparsers)
    periods.setup_parser(subparsers)
    transactions.setup_parser(subparsers)
    categories.setup_parser(subparsers)

    args = parser.parse_args()

    if hasattr(args, "func"):
        try:
            config = load_config()
            setup_logging(config)

            # Create services container for dependency injection
            services = Services(config)
            args.func(args, services)
        except Exception as e:
            print(f"Error: {e}")
            sys.exit(1)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
