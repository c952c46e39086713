"""Merging ingested transactions into a period and manual re-categorization.

external_id is the deduplication key: a transaction already present in a
period is never replaced or modified by a later import, which is what keeps
manual category overrides intact across re-imports.
"""

import dataclasses
from collections import Counter
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List, MutableMapping, Optional, Set

from errors import DuplicateExternalId, NotFound
from logger import get_logger
from models.common import utc_now
from models.transaction import Transaction

logger = get_logger()


@dataclass(frozen=True)
class MergeResult:
    merged: List[Transaction]
    added_count: int


def build_external_id_set(transactions: Iterable[Transaction]) -> Set[str]:
    return {t.external_id for t in transactions}


def filter_duplicates(
    incoming: Iterable[Transaction], existing: Iterable[Transaction]
) -> List[Transaction]:
    """Return the incoming transactions whose external_id is not yet known.

    The first occurrence wins when the same external_id appears more than
    once in the incoming batch.
    """
    seen = build_external_id_set(existing)
    unique = []
    for transaction in incoming:
        if transaction.external_id in seen:
            continue
        seen.add(transaction.external_id)
        unique.append(transaction)
    return unique


def validate_no_duplicates(transactions: Iterable[Transaction]) -> None:
    """Check that no two transactions share an external_id.

    Raises:
        DuplicateExternalId: If any external_id occurs more than once.
    """
    counts = Counter(t.external_id for t in transactions)
    duplicates = [external_id for external_id, n in counts.items() if n > 1]
    if duplicates:
        raise DuplicateExternalId(duplicates)


def merge(existing: List[Transaction], incoming: List[Transaction]) -> MergeResult:
    """Merge newly ingested transactions into a period's transactions.

    Existing transactions keep their order and are returned unchanged; new
    ones are appended in the order they arrived. Merging the same batch twice
    adds nothing the second time.

    Args:
        existing: Transactions already stored in the period.
        incoming: Transactions from the latest import.

    Returns:
        MergeResult with the merged list and the number of transactions added.

    Raises:
        DuplicateExternalId: If the merged list is not unique by external_id.
    """
    new_transactions = filter_duplicates(incoming, existing)
    merged = list(existing) + new_transactions

    validate_no_duplicates(merged)

    added_count = len(merged) - len(existing)
    skipped = len(incoming) - added_count
    if skipped:
        logger.debug(f"Skipped {skipped} already imported transaction(s)")

    return MergeResult(merged=merged, added_count=added_count)


def recategorize(
    transactions: MutableMapping[str, Transaction],
    transaction_id: str,
    new_category_id: str,
    now: Optional[datetime] = None,
) -> Transaction:
    """Assign a transaction to a category chosen by the user.

    The transaction is marked as a manual override. The updated copy replaces
    the entry in the mapping and is returned.

    Args:
        transactions: Period transactions keyed by transaction_id.
        transaction_id: Transaction to update.
        new_category_id: Category chosen by the user.
        now: Timestamp for updated_at (defaults to the current UTC time).

    Raises:
        NotFound: If transaction_id is not in the mapping.
    """
    current = transactions.get(transaction_id)
    if current is None:
        raise NotFound(f"Transaction {transaction_id} not found")

    updated = dataclasses.replace(
        current,
        category_id=new_category_id,
        is_manual_override=True,
        updated_at=now or utc_now(),
    )
    transactions[transaction_id] = updated
    return updated
