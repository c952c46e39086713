"""Canonical document paths.

Layout:
    user.json
    accounts/{account_id}.json
    categories/categories.json
    periods/{period_id}.json
"""

USER_FILE = "user.json"
ACCOUNTS_FOLDER = "accounts"
CATEGORIES_FOLDER = "categories"
CATEGORIES_FILE = f"{CATEGORIES_FOLDER}/categories.json"
PERIODS_FOLDER = "periods"


def account_path(account_id: str) -> str:
    return f"{ACCOUNTS_FOLDER}/{account_id}.json"


def period_path(period_id: str) -> str:
    return f"{PERIODS_FOLDER}/{period_id}.json"
