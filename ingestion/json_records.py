import json
import logging
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import List, TextIO

from models.transaction import IncomingTransaction

logger = logging.getLogger("ledger.ingestion")


def item_to_record(item: dict) -> IncomingTransaction:
    """Convert one JSON object to an IncomingTransaction.

    Raises:
        ValueError: If required fields are missing or invalid
    """
    external_id = str(item.get("external_id") or "").strip()
    date_str = str(item.get("date") or "").strip()
    amount_value = item.get("amount")

    if not external_id or not date_str or amount_value is None:
        raise ValueError(
            f"Missing required fields: external_id='{external_id}', "
            f"date='{date_str}', amount={amount_value!r}"
        )

    try:
        amount = Decimal(str(amount_value))
    except InvalidOperation:
        raise ValueError(f"Invalid amount: {amount_value!r}")
    if not amount.is_finite():
        raise ValueError(f"Invalid amount: {amount_value!r}")

    return IncomingTransaction(
        external_id=external_id,
        date=date.fromisoformat(date_str),
        amount=amount,
        merchant_name=item.get("merchant_name") or "",
        description=item.get("description") or "",
        original_category=item.get("original_category") or None,
    )


def ingest(source: TextIO) -> List[IncomingTransaction]:
    """
    Ingest normalized transactions from JSON.

    Accepts either a list of transaction objects or {"transactions": [...]}.

    Raises:
        ValueError: If the document is not valid JSON or has the wrong shape
    """
    try:
        # parse_float keeps amounts exact
        data = json.load(source, parse_float=Decimal)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON: {e}")

    if isinstance(data, dict):
        data = data.get("transactions")
    if not isinstance(data, list):
        raise ValueError("Expected a list of transactions or {\"transactions\": [...]}")

    records = []
    for index, item in enumerate(data):
        if not isinstance(item, dict):
            logger.warning(f"Skipping malformed item {index}: {item!r}")
            continue
        try:
            records.append(item_to_record(item))
        except ValueError as e:
            logger.error(f"Error processing item {index}: {item} - {e}")
            continue

    logger.info(f"Successfully ingested {len(records)} transactions")
    return records
