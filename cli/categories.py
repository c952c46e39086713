#!/usr/bin/env python3

from decimal import Decimal

from cli.owner import resolve_owner
from logger import get_logger

logger = get_logger()


def cmd_list(args, services):
    """List the user's categories."""
    user, _ = resolve_owner(services)
    if args.all:
        categories = services.categories.find_all(user.user_id)
    else:
        categories = services.categories.find_active(user.user_id)

    if not categories:
        logger.info("No categories found.")
        return

    logger.info("\nCategories:")
    logger.info("=" * 80)
    for category in categories:
        logger.info(f"ID: {category.category_id}")
        name = category.name + (" (default)" if category.is_default else "")
        logger.info(f"Name: {name}")
        logger.info(f"Monthly limit: {category.monthly_limit:.2f}")
        if category.archived_at:
            logger.info(f"Archived: {category.archived_at.isoformat()}")
        logger.info("-" * 80)

    logger.info(f"\nTotal categories: {len(categories)}")


def cmd_create(args, services):
    """Create a new category."""
    user, _ = resolve_owner(services)
    category = services.budget.create_category(user.user_id, args.name, args.limit)

    logger.info(f"\n✓ Category created successfully with ID: {category.category_id}")
    logger.info(f"  Name: {category.name}")
    logger.info(f"  Monthly limit: {category.monthly_limit:.2f}")


def cmd_update(args, services):
    """Rename a category or change its limit."""
    user, _ = resolve_owner(services)
    category = services.budget.update_category(
        user.user_id, args.category_id, name=args.name, monthly_limit=args.limit
    )
    logger.info(
        f"✓ Category '{category.name}' updated (limit {category.monthly_limit:.2f})"
    )


def cmd_archive(args, services):
    """Archive a category."""
    user, _ = resolve_owner(services)
    category = services.budget.archive_category(user.user_id, args.category_id)
    logger.info(f"✓ Category '{category.name}' archived.")


def setup_parser(subparsers):
    """Setup categories subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "categories",
        help="Manage categories",
        description="Create, list, update and archive spending categories",
    )

    categories_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available category commands",
        dest="subcommand",
        required=True,
    )

    # categories list
    list_parser = categories_subparsers.add_parser("list", help="List categories")
    list_parser.add_argument(
        "--all", action="store_true", help="Include archived categories"
    )
    list_parser.set_defaults(func=cmd_list)

    # categories create
    create_parser = categories_subparsers.add_parser(
        "create", help="Create a new category"
    )
    create_parser.add_argument("name", help="Category name, e.g. Groceries")
    create_parser.add_argument(
        "--limit", type=Decimal, required=True, help="Monthly spending limit"
    )
    create_parser.set_defaults(func=cmd_create)

    # categories update
    update_parser = categories_subparsers.add_parser(
        "update", help="Rename a category or change its limit"
    )
    update_parser.add_argument("category_id", help="ID of the category to update")
    update_parser.add_argument("--name", default=None, help="New name")
    update_parser.add_argument(
        "--limit", type=Decimal, default=None, help="New monthly spending limit"
    )
    update_parser.set_defaults(func=cmd_update)

    # categories archive
    archive_parser = categories_subparsers.add_parser(
        "archive", help="Archive a category (the default category cannot be archived)"
    )
    archive_parser.add_argument("category_id", help="ID of the category to archive")
    archive_parser.set_defaults(func=cmd_archive)
