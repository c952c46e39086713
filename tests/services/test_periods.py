from datetime import date
from decimal import Decimal

import pytest

from errors import DuplicateExternalId, NotFound, StorageError, ValidationError
from models.budget_period import Active, Historical, NoPeriod, PeriodType
from services.periods import PeriodService
from store import paths
from tests.helpers import make_transaction

USER = "user-1"
ACCOUNT = "account-1"


def _create(
    services,
    anchor=date(2024, 12, 1),
    balance="500.00",
    period_type=PeriodType.FIXED_DATE,
):
    return services.periods.create_next(
        USER, ACCOUNT, period_type, anchor, Decimal(balance)
    )


def _transactions(period_id, *external_ids, amount="-10.00"):
    return [make_transaction(x, amount=amount, period_id=period_id) for x in external_ids]


class TestLifecycle:
    """Tests for period state transitions."""

    def test_no_period(self, services):
        """Test that an account without periods is in NoPeriod."""
        assert isinstance(services.periods.get_state(USER, ACCOUNT), NoPeriod)
        assert services.periods.get_current(USER, ACCOUNT) is None
        assert services.periods.should_create_next(
            USER, ACCOUNT, PeriodType.FIXED_DATE, date(2024, 12, 1)
        )

    def test_create_next_makes_active_period(self, services):
        """Test that create_next persists a period containing today."""
        period = _create(services)

        state = services.periods.get_state(USER, ACCOUNT)
        assert isinstance(state, Active)
        assert state.record.period_id == period.period_id
        assert period.start_date == date(2024, 12, 1)
        assert period.end_date == date(2025, 1, 1)
        assert period.starting_balance == Decimal("500.00")
        assert state.record.transactions == {}

    def test_should_not_create_while_active(self, services):
        """Test that no new period is needed while one is active."""
        _create(services)

        assert not services.periods.should_create_next(
            USER, ACCOUNT, PeriodType.FIXED_DATE, date(2024, 12, 1)
        )

    def test_transition_when_end_date_reached(self, services, clock):
        """Test that reaching end_date requires and creates a contiguous next period."""
        clock.current = date(2024, 11, 25)
        old = _create(services, anchor=date(2024, 11, 20))
        assert old.end_date == date(2024, 12, 20)
        services.periods.add_transactions(old.period_id, _transactions(old.period_id, "a"))
        before = services.store.read(paths.period_path(old.period_id))

        clock.current = old.end_date
        assert services.periods.should_create_next(
            USER, ACCOUNT, PeriodType.FIXED_DATE, date(2024, 11, 20)
        )
        new = services.periods.create_next(
            USER, ACCOUNT, PeriodType.FIXED_DATE, date(2024, 11, 20), Decimal("490.00")
        )

        assert new.start_date == old.end_date
        assert new.end_date == date(2025, 1, 20)
        assert services.store.read(paths.period_path(old.period_id)) == before
        assert services.periods.get_current(USER, ACCOUNT).period_id == new.period_id

    def test_classify(self, services, clock):
        """Test Active and Historical tagging."""
        period = _create(services)
        record = services.periods.get(period.period_id)

        assert isinstance(services.periods.classify(record), Active)
        clock.current = date(2025, 1, 1)
        assert isinstance(services.periods.classify(record), Historical)
        assert isinstance(services.periods.get_state(USER, ACCOUNT), NoPeriod)

    def test_create_next_rejects_overlap(self, services):
        """Test that a second period over the same dates is rejected."""
        _create(services)

        with pytest.raises(ValidationError, match="overlaps"):
            _create(services, anchor=date(2024, 12, 15))

        assert len(services.periods.find_all(USER, ACCOUNT)) == 1

    def test_gap_is_allowed(self, services, clock):
        """Test that a period after a gap is created (with a warning)."""
        _create(services)
        clock.current = date(2025, 3, 5)

        period = _create(services)

        assert period.start_date == date(2025, 3, 1)
        assert len(services.periods.find_all(USER, ACCOUNT)) == 2

    def test_income_anchored(self, services):
        """Test creating an INCOME_ANCHORED period."""
        period = _create(
            services, anchor=date(2024, 12, 25), period_type=PeriodType.INCOME_ANCHORED
        )

        assert period.start_date == date(2024, 11, 25)
        assert period.end_date == date(2024, 12, 25)
        assert period.period_type == PeriodType.INCOME_ANCHORED


class TestQueries:
    """Tests for finding periods."""

    def test_find_all_filters_by_owner(self, services, clock):
        """Test that periods of other accounts are not returned."""
        _create(services)
        services.periods.create_next(
            USER, "account-2", PeriodType.FIXED_DATE, date(2024, 12, 1), Decimal("0")
        )

        assert len(services.periods.find_all(USER, ACCOUNT)) == 1
        assert len(services.periods.find_all(USER, "account-2")) == 1
        assert services.periods.find_all("user-2", ACCOUNT) == []

    def test_find_all_newest_first(self, services, clock):
        """Test ordering by start_date descending."""
        first = _create(services)
        clock.current = date(2025, 1, 10)
        second = _create(services)

        records = services.periods.find_all(USER, ACCOUNT)

        assert [r.period_id for r in records] == [second.period_id, first.period_id]
        assert services.periods.find_latest(USER, ACCOUNT).period_id == second.period_id

    def test_get_unknown_period(self, services):
        """Test that get raises NotFound and find returns None."""
        assert services.periods.find("missing") is None
        with pytest.raises(NotFound):
            services.periods.get("missing")


class TestTransactions:
    """Tests for adding and re-categorizing transactions."""

    def test_add_transactions(self, services):
        """Test that transactions are stored in the period document."""
        period = _create(services)

        added = services.periods.add_transactions(
            period.period_id, _transactions(period.period_id, "a", "b")
        )

        assert added == 2
        stored = services.periods.get_transactions(period.period_id)
        assert [t.external_id for t in stored] == ["a", "b"]

    def test_add_same_batch_twice(self, services, store):
        """Test that re-importing adds nothing and does not rewrite the document."""
        period = _create(services)
        services.periods.add_transactions(
            period.period_id, _transactions(period.period_id, "a", "b")
        )
        writes = len(store.writes)

        added = services.periods.add_transactions(
            period.period_id, _transactions(period.period_id, "a", "b")
        )

        assert added == 0
        assert len(store.writes) == writes
        assert len(services.periods.get_transactions(period.period_id)) == 2

    def test_add_to_historical_period_rejected(self, services, clock):
        """Test that a period that has ended is read-only."""
        period = _create(services)
        clock.current = date(2025, 1, 2)

        with pytest.raises(ValidationError, match="read-only"):
            services.periods.add_transactions(
                period.period_id, _transactions(period.period_id, "a")
            )

    def test_add_to_unknown_period(self, services):
        """Test that an unknown period raises NotFound."""
        with pytest.raises(NotFound):
            services.periods.add_transactions("missing", [])

    def test_add_detects_corrupt_document(self, services, store):
        """Test that a stored document with duplicate external_ids is reported."""
        period = _create(services)
        document = store.read(paths.period_path(period.period_id))
        document["transactions"] = [
            t.to_dict() for t in _transactions(period.period_id, "a", "a")
        ]
        store.write(paths.period_path(period.period_id), document)

        with pytest.raises(DuplicateExternalId):
            services.periods.add_transactions(
                period.period_id, _transactions(period.period_id, "b")
            )

    def test_update_transaction_category(self, services):
        """Test that a manual category is persisted."""
        period = _create(services)
        batch = _transactions(period.period_id, "a", "b")
        services.periods.add_transactions(period.period_id, batch)

        updated = services.periods.update_transaction_category(
            period.period_id, batch[1].transaction_id, "groceries"
        )

        assert updated.is_manual_override is True
        stored = {t.external_id: t for t in services.periods.get_transactions(period.period_id)}
        assert stored["b"].category_id == "groceries"
        assert stored["b"].is_manual_override is True
        assert stored["a"].category_id == "default"

    def test_manual_override_survives_reimport(self, services):
        """Test that re-importing the same external_id keeps the user's category."""
        period = _create(services)
        batch = _transactions(period.period_id, "a", "b")
        services.periods.add_transactions(period.period_id, batch)
        services.periods.update_transaction_category(
            period.period_id, batch[0].transaction_id, "groceries"
        )

        services.periods.add_transactions(
            period.period_id, _transactions(period.period_id, "a", "b", "c")
        )

        stored = {t.external_id: t for t in services.periods.get_transactions(period.period_id)}
        assert len(stored) == 3
        assert stored["a"].category_id == "groceries"
        assert stored["a"].is_manual_override is True

    def test_update_unknown_transaction(self, services):
        """Test NotFound for an unknown transaction."""
        period = _create(services)

        with pytest.raises(NotFound, match="not found in period"):
            services.periods.update_transaction_category(period.period_id, "missing", "x")

    def test_update_historical_period_rejected(self, services, clock):
        """Test that transactions of past periods cannot be re-categorized."""
        period = _create(services)
        batch = _transactions(period.period_id, "a")
        services.periods.add_transactions(period.period_id, batch)
        clock.current = date(2025, 1, 1)

        with pytest.raises(ValidationError):
            services.periods.update_transaction_category(
                period.period_id, batch[0].transaction_id, "groceries"
            )

    def test_get_transactions_by_category(self, services):
        """Test filtering a period's transactions by category."""
        period = _create(services)
        batch = _transactions(period.period_id, "a", "b")
        services.periods.add_transactions(period.period_id, batch)
        services.periods.update_transaction_category(
            period.period_id, batch[0].transaction_id, "groceries"
        )

        found = services.periods.get_transactions(period.period_id, "groceries")

        assert [t.external_id for t in found] == ["a"]

    def test_closing_balance(self, services):
        """Test starting balance plus net transactions."""
        period = _create(services, balance="500.00")
        services.periods.add_transactions(
            period.period_id,
            _transactions(period.period_id, "a", "b", amount="-45.50")
            + _transactions(period.period_id, "c", amount="1200.00"),
        )

        record = services.periods.get(period.period_id)

        assert services.periods.closing_balance(record) == Decimal("1609.00")


class TestStorageFailures:
    """Tests for store errors."""

    def test_write_failure_propagates(self, store, clock):
        """Test that a StorageError from the store reaches the caller unchanged."""

        class FailingStore(type(store)):
            def write(self, path, document):
                raise StorageError(path, "backend unavailable")

        periods = PeriodService(FailingStore(), today=clock)

        with pytest.raises(StorageError, match="backend unavailable"):
            periods.create_next(
                USER, ACCOUNT, PeriodType.FIXED_DATE, date(2024, 12, 1), Decimal("0")
            )
