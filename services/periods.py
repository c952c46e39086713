"""Period service: budget period lifecycle and period record persistence.

A period for an account is in one of three states relative to today:

- NoPeriod: no stored period contains today.
- Active: the period's [start_date, end_date) contains today. Only an active
  period accepts new or re-categorized transactions.
- Historical: any other stored period. Superseded periods are never written
  again.
"""

from datetime import date
from decimal import Decimal
from typing import Callable, List, Optional

from errors import NotFound, ValidationError
from ledger import aggregator, transaction_ledger
from ledger.period_calculator import compute_bounds
from logger import get_logger
from models.budget_period import (
    Active,
    BudgetPeriod,
    Historical,
    NoPeriod,
    PeriodState,
    PeriodType,
)
from models.category import Category, CategorySummary
from models.period_record import PeriodRecord
from models.transaction import Transaction
from store import paths

logger = get_logger()


class PeriodService:
    """Service for managing budget periods and their transactions.

    Each period is stored with its transactions as periods/{period_id}.json.

    Args:
        store: DocumentStore holding the period documents.
        today: Callable returning the current date.
    """

    def __init__(self, store, today: Callable[[], date] = date.today):
        self.store = store
        self.today = today

    def find(self, period_id: str) -> Optional[PeriodRecord]:
        """Get a period record by ID.

        Returns:
            PeriodRecord if found, None otherwise.
        """
        document = self.store.read(paths.period_path(period_id))
        return PeriodRecord.from_dict(document) if document else None

    def get(self, period_id: str) -> PeriodRecord:
        """Get a period record by ID.

        Raises:
            NotFound: If the period does not exist.
        """
        record = self.find(period_id)
        if record is None:
            raise NotFound(f"Period {period_id} not found")
        return record

    def _save(self, record: PeriodRecord) -> None:
        self.store.write(paths.period_path(record.period_id), record.to_dict())

    def find_all(self, user_id: str, account_id: str) -> List[PeriodRecord]:
        """Get all period records of an account.

        Returns:
            List of PeriodRecord objects, newest start_date first.
        """
        records = []
        for period_id in self.store.list(paths.PERIODS_FOLDER):
            record = self.find(period_id)
            if record is None:
                continue
            if record.period.user_id == user_id and record.period.account_id == account_id:
                records.append(record)
        return sorted(records, key=lambda r: r.period.start_date, reverse=True)

    def find_latest(self, user_id: str, account_id: str) -> Optional[PeriodRecord]:
        """Get the account's period with the latest start_date."""
        records = self.find_all(user_id, account_id)
        return records[0] if records else None

    def classify(self, record: PeriodRecord) -> PeriodState:
        """Tag a record as Active or Historical relative to today."""
        if record.period.contains(self.today()):
            return Active(record)
        return Historical(record)

    def get_state(self, user_id: str, account_id: str) -> PeriodState:
        """Get the lifecycle state of an account today.

        Returns:
            Active(record) for the period containing today, or NoPeriod().
        """
        today = self.today()
        for record in self.find_all(user_id, account_id):
            if record.period.contains(today):
                return Active(record)
        return NoPeriod()

    def get_current(self, user_id: str, account_id: str) -> Optional[PeriodRecord]:
        """Get the period record that contains today.

        Returns:
            PeriodRecord if one is active, None otherwise.
        """
        state = self.get_state(user_id, account_id)
        return state.record if isinstance(state, Active) else None

    def should_create_next(
        self,
        user_id: str,
        account_id: str,
        period_type: PeriodType,
        anchor_date: date,
    ) -> bool:
        """Check whether a new period has to be created for today.

        True when no period is active, or when today has reached the active
        period's end_date.
        """
        current = self.get_current(user_id, account_id)
        if current is None:
            return True
        return self.today() >= current.period.end_date

    def create_next(
        self,
        user_id: str,
        account_id: str,
        period_type: PeriodType,
        anchor_date: date,
        current_balance: Decimal,
    ) -> BudgetPeriod:
        """Create and persist the period containing today.

        The previous period is left untouched; it becomes history because it
        no longer contains today.

        Args:
            user_id: Owner of the period.
            account_id: Account the period belongs to.
            period_type: Recurrence policy.
            anchor_date: Reference date for the recurrence.
            current_balance: Account balance, stored as starting_balance.

        Returns:
            The created BudgetPeriod.

        Raises:
            ValidationError: If the new period would overlap an existing one.
        """
        period_type = PeriodType(period_type)
        bounds = compute_bounds(self.today(), period_type, anchor_date)

        existing = self.find_all(user_id, account_id)
        for record in existing:
            if record.period.overlaps(bounds.start_date, bounds.end_date):
                raise ValidationError(
                    f"Period {bounds.start_date} to {bounds.end_date} overlaps "
                    f"existing period {record.period_id} "
                    f"({record.period.start_date} to {record.period.end_date})"
                )
        if existing and existing[0].period.end_date != bounds.start_date:
            logger.warning(
                f"New period starts {bounds.start_date} but the previous one ended "
                f"{existing[0].period.end_date}"
            )

        period = BudgetPeriod(
            user_id=user_id,
            account_id=account_id,
            start_date=bounds.start_date,
            end_date=bounds.end_date,
            starting_balance=Decimal(str(current_balance)),
            period_type=period_type,
            anchor_date=anchor_date,
        )
        self._save(PeriodRecord(period=period))

        logger.info(
            f"Created {period_type.value} period {period.period_id} "
            f"({period.start_date} to {period.end_date})"
        )
        return period

    def _get_writable(self, period_id: str) -> PeriodRecord:
        state = self.classify(self.get(period_id))
        if not state.writable:
            raise ValidationError(f"Period {period_id} is no longer active and is read-only")
        return state.record

    def add_transactions(self, period_id: str, incoming: List[Transaction]) -> int:
        """Add ingested transactions to an active period, skipping known ones.

        Args:
            period_id: Target period.
            incoming: Transactions from the latest import.

        Returns:
            Number of transactions actually added.

        Raises:
            NotFound: If the period does not exist.
            ValidationError: If the period is not active.
            DuplicateExternalId: If the merge produced duplicate external_ids.
        """
        record = self._get_writable(period_id)
        result = transaction_ledger.merge(record.transaction_list(), incoming)

        if result.added_count:
            record.transactions = PeriodRecord.index(result.merged)
            self._save(record)

        logger.info(
            f"Added {result.added_count} of {len(incoming)} transaction(s) to period {period_id}"
        )
        return result.added_count

    def update_transaction_category(
        self, period_id: str, transaction_id: str, category_id: str
    ) -> Transaction:
        """Re-categorize a transaction in an active period as a manual override.

        Raises:
            NotFound: If the period or transaction does not exist.
            ValidationError: If the period is not active.
        """
        record = self._get_writable(period_id)
        try:
            updated = transaction_ledger.recategorize(
                record.transactions, transaction_id, category_id
            )
        except NotFound:
            raise NotFound(
                f"Transaction {transaction_id} not found in period {period_id}"
            ) from None

        self._save(record)
        return updated

    def get_transactions(
        self, period_id: str, category_id: Optional[str] = None
    ) -> List[Transaction]:
        """Get a period's transactions, optionally only those of one category.

        Raises:
            NotFound: If the period does not exist.
        """
        transactions = self.get(period_id).transaction_list()
        if category_id:
            return [t for t in transactions if t.category_id == category_id]
        return transactions

    def closing_balance(self, record: PeriodRecord) -> Decimal:
        """Starting balance plus the net of all the period's transactions."""
        return record.period.starting_balance + sum(
            (t.amount for t in record.transactions.values()), Decimal("0")
        )

    def summarize(self, period_id: str, categories: List[Category]) -> List[CategorySummary]:
        """Summarize a period's spending against the given categories.

        Raises:
            NotFound: If the period does not exist.
        """
        return aggregator.summarize(self.get(period_id).transaction_list(), categories)
