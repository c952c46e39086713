"""Budget service: the operations the presentation layer calls.

Ties the user, account, category and period services together: first-run
setup, the active period overview, importing transactions and the category
management actions.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import List, Optional

from errors import NotFound, ValidationError
from logger import get_logger
from models.account import Account
from models.budget_period import BudgetPeriod, PeriodType
from models.category import Category, CategorySummary
from models.transaction import IncomingTransaction, Transaction
from models.user import User

logger = get_logger()


@dataclass(frozen=True)
class SetupResult:
    user: User
    account: Account
    period: BudgetPeriod
    categories_count: int
    created_period: bool


@dataclass(frozen=True)
class PeriodOverview:
    """The active period with its per-category spending."""

    period: BudgetPeriod
    category_summaries: List[CategorySummary]
    closing_balance: Decimal

    def to_dict(self) -> dict:
        return {
            "period": self.period.to_dict(),
            "category_summaries": [s.to_dict() for s in self.category_summaries],
            "closing_balance": float(self.closing_balance),
        }


class BudgetService:
    """Facade over the individual services for UI/API callers.

    Args:
        config: Application configuration (defaults for setup).
        users: UserService.
        accounts: AccountService.
        categories: CategoryService.
        periods: PeriodService.
    """

    def __init__(self, config, users, accounts, categories, periods):
        self.config = config
        self.users = users
        self.accounts = accounts
        self.categories = categories
        self.periods = periods

    def setup(
        self,
        period_type: Optional[PeriodType] = None,
        anchor_date: Optional[date] = None,
        starting_balance: Optional[Decimal] = None,
    ) -> SetupResult:
        """Initialize the user, account, default category and active period.

        Every step is find-or-create, so running setup again changes nothing
        while a period is active. When earlier periods exist but none is
        active, their policy and closing balance are carried over unless
        given explicitly.

        Args:
            period_type: Recurrence policy; defaults to the configured one.
            anchor_date: Recurrence anchor; defaults to the configured one, then today.
            starting_balance: Balance of a newly created period; defaults to the configured one.

        Returns:
            SetupResult describing the entities in place after setup.
        """
        user = self.users.get_or_create()
        account = self.accounts.get_or_create_for_user(
            user.user_id,
            self.config.bank_name,
            self.config.account_name,
            self.config.currency,
        )
        categories = self.categories.ensure_default(user.user_id)

        created_period = False
        current = self.periods.get_current(user.user_id, account.account_id)
        if current is None:
            latest = self.periods.find_latest(user.user_id, account.account_id)
            if latest is not None:
                period_type = period_type or latest.period.period_type
                anchor_date = anchor_date or latest.period.anchor_date
                if starting_balance is None:
                    starting_balance = self.periods.closing_balance(latest)

            period_type = PeriodType(period_type or self.config.period_type)
            anchor_date = anchor_date or self.config.anchor_date or self.periods.today()
            if starting_balance is None:
                starting_balance = self.config.starting_balance

            period = self.periods.create_next(
                user.user_id, account.account_id, period_type, anchor_date, starting_balance
            )
            created_period = True
        else:
            period = current.period

        logger.info(
            f"Setup complete: user {user.user_id}, account {account.account_id}, "
            f"period {period.period_id}"
        )
        return SetupResult(
            user=user,
            account=account,
            period=period,
            categories_count=len(categories),
            created_period=created_period,
        )

    def _require_current(self, user_id: str, account_id: str):
        record = self.periods.get_current(user_id, account_id)
        if record is None:
            raise NotFound("No active period found. Run setup first.")
        return record

    def get_active_period_with_summaries(self, user_id: str, account_id: str) -> PeriodOverview:
        """Get the active period and spending for each active category.

        Raises:
            NotFound: If no period is active.
        """
        record = self._require_current(user_id, account_id)
        categories = self.categories.find_active(user_id)
        summaries = self.periods.summarize(record.period_id, categories)
        return PeriodOverview(
            period=record.period,
            category_summaries=summaries,
            closing_balance=self.periods.closing_balance(record),
        )

    def list_active_transactions(self, user_id: str, account_id: str) -> List[Transaction]:
        """Get the active period's transactions, newest date first.

        Raises:
            NotFound: If no period is active.
        """
        record = self._require_current(user_id, account_id)
        return sorted(record.transaction_list(), key=lambda t: t.date, reverse=True)

    def create_category(self, user_id: str, name, monthly_limit) -> Category:
        return self.categories.create(user_id, name, monthly_limit)

    def update_category(
        self, user_id: str, category_id: str, name=None, monthly_limit=None
    ) -> Category:
        return self.categories.update(
            user_id, category_id, name=name, monthly_limit=monthly_limit
        )

    def archive_category(self, user_id: str, category_id: str) -> Category:
        return self.categories.archive(user_id, category_id)

    def update_transaction_category(
        self, user_id: str, account_id: str, transaction_id: str, category_id: str
    ) -> Transaction:
        """Manually move a transaction of the active period to another category.

        Raises:
            ValidationError: If category_id is missing or the category is archived.
            NotFound: If there is no active period, or the category or
                transaction does not exist.
        """
        if not category_id:
            raise ValidationError("category_id is required")

        category = self.categories.find(category_id)
        if category is None or category.user_id != user_id:
            raise NotFound(f"Category {category_id} not found")
        if category.is_archived:
            raise ValidationError(f"Category '{category.name}' is archived")

        record = self._require_current(user_id, account_id)
        return self.periods.update_transaction_category(
            record.period_id, transaction_id, category_id
        )

    def import_transactions(
        self, user_id: str, account_id: str, records: List[IncomingTransaction]
    ) -> int:
        """Import normalized feed records into the active period.

        New transactions are assigned the default category; records whose
        external_id is already in the period are skipped.

        Returns:
            Number of transactions added.

        Raises:
            ValidationError: If a record has no external_id or its amount is not finite.
            NotFound: If there is no active period or no default category.
        """
        missing = [r for r in records if not r.external_id]
        if missing:
            raise ValidationError(f"{len(missing)} record(s) have no external_id")
        non_finite = [r.external_id for r in records if not r.amount.is_finite()]
        if non_finite:
            raise ValidationError(
                f"Invalid amount for record(s): {', '.join(non_finite)}"
            )

        record = self._require_current(user_id, account_id)
        default_category = self.categories.find_default(user_id)
        if default_category is None:
            raise NotFound("No default category found. Run setup first.")

        outside = [r for r in records if not record.period.contains(r.date)]
        if outside:
            logger.warning(
                f"{len(outside)} record(s) are dated outside period "
                f"{record.period.start_date} to {record.period.end_date}"
            )

        transactions = [
            Transaction.from_incoming(
                r, user_id, account_id, record.period_id, default_category.category_id
            )
            for r in records
        ]
        return self.periods.add_transactions(record.period_id, transactions)

    def rollover(
        self, user_id: str, account_id: str, current_balance: Optional[Decimal] = None
    ) -> Optional[BudgetPeriod]:
        """Open the next period if the latest one has ended.

        The new period reuses the latest period's type and anchor date. Its
        starting balance defaults to the latest period's closing balance.

        Returns:
            The created BudgetPeriod, or None if a period is still active.

        Raises:
            NotFound: If the account has no periods yet.
        """
        latest = self.periods.find_latest(user_id, account_id)
        if latest is None:
            raise NotFound("No periods found. Run setup first.")

        period_type = latest.period.period_type
        anchor_date = latest.period.anchor_date
        if not self.periods.should_create_next(user_id, account_id, period_type, anchor_date):
            logger.info(f"Period {latest.period_id} is still active")
            return None

        if current_balance is None:
            current_balance = self.periods.closing_balance(latest)

        return self.periods.create_next(
            user_id, account_id, period_type, anchor_date, current_balance
        )
