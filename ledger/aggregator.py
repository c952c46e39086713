"""Per-category spending summaries for a period."""

from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Iterable, List

from models.category import Category, CategorySummary
from models.transaction import Transaction


def spending_by_category(transactions: Iterable[Transaction]) -> Dict[str, Decimal]:
    """Total spending (absolute value of negative amounts) keyed by category_id."""
    totals: Dict[str, Decimal] = {}
    for transaction in transactions:
        if transaction.is_expense:
            totals[transaction.category_id] = (
                totals.get(transaction.category_id, Decimal("0")) + abs(transaction.amount)
            )
    return totals


def percentage_of(spent: Decimal, limit: Decimal) -> int:
    """Spent as a whole percentage of the limit, rounded half up; 0 without a limit."""
    if limit <= 0:
        return 0
    return int((spent / limit * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def summarize(
    transactions: Iterable[Transaction], categories: Iterable[Category]
) -> List[CategorySummary]:
    """Summarize spending against each category's limit.

    Income (positive amounts) is ignored. One summary is returned per
    category, in the order given.

    Args:
        transactions: Transactions of a single period.
        categories: Categories to summarize.

    Returns:
        List of CategorySummary objects.
    """
    spent_by_category = spending_by_category(transactions)

    summaries = []
    for category in categories:
        spent = spent_by_category.get(category.category_id, Decimal("0"))
        limit = category.monthly_limit
        summaries.append(
            CategorySummary(
                category_id=category.category_id,
                name=category.name,
                monthly_limit=limit,
                spent=spent,
                remaining=max(Decimal("0"), limit - spent),
                percentage=percentage_of(spent, limit),
            )
        )
    return summaries
