import csv
import logging
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Dict, List, TextIO

from models.transaction import IncomingTransaction

logger = logging.getLogger("ledger.ingestion")

_CSV_HEADERS = ["external_id", "date", "amount", "merchant_name", "description"]
_OPTIONAL_HEADERS = ["original_category"]


def row_to_record(row: Dict[str, str]) -> IncomingTransaction:
    """Convert a CSV row to an IncomingTransaction.

    Args:
        row: CSV row keyed by header, as produced by csv.DictReader

    Returns:
        IncomingTransaction object

    Raises:
        ValueError: If required fields are missing or invalid
    """
    external_id = (row.get("external_id") or "").strip()
    date_str = (row.get("date") or "").strip()
    amount_str = (row.get("amount") or "").strip().replace(",", "")

    if not external_id or not date_str or not amount_str:
        raise ValueError(
            f"Missing required fields: external_id='{external_id}', "
            f"date='{date_str}', amount='{amount_str}'"
        )

    try:
        amount = Decimal(amount_str)
    except InvalidOperation:
        raise ValueError(f"Invalid amount: '{amount_str}'")
    if not amount.is_finite():
        raise ValueError(f"Invalid amount: '{amount_str}'")

    original_category = (row.get("original_category") or "").strip() or None

    return IncomingTransaction(
        external_id=external_id,
        date=date.fromisoformat(date_str),
        amount=amount,
        merchant_name=(row.get("merchant_name") or "").strip(),
        description=(row.get("description") or "").strip(),
        original_category=original_category,
    )


def ingest(source: TextIO) -> List[IncomingTransaction]:
    """
    Ingest normalized transactions from CSV.

    Expected format:
    - Header row: external_id,date,amount,merchant_name,description[,original_category]
    - Dates in ISO format (YYYY-MM-DD), amounts signed (negative for spending)

    Raises:
        ValueError: If the header row is missing a required column
    """
    reader = csv.DictReader(source)
    headers = reader.fieldnames or []
    missing = [h for h in _CSV_HEADERS if h not in headers]
    if missing:
        raise ValueError(
            f"Missing CSV columns: {missing}\nExpected: {_CSV_HEADERS + _OPTIONAL_HEADERS}"
        )

    records = []
    # Header is line 1
    for line_num, row in enumerate(reader, start=2):
        try:
            records.append(row_to_record(row))
        except ValueError as e:
            logger.error(f"Error processing line {line_num}: {row} - {e}")
            continue

    logger.info(f"Successfully ingested {len(records)} transactions")
    return records
