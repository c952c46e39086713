"""Shared pytest fixtures for all tests."""

import copy
import json
from datetime import date
from decimal import Decimal

import pytest

from config import Config
from services.base import Services
from store.base import DocumentStore


class InMemoryDocumentStore(DocumentStore):
    """Document store keeping JSON documents in a dict.

    Documents are round-tripped through json so tests see exactly what a
    real backend would persist.
    """

    def __init__(self):
        self.documents = {}
        self.writes = []

    def read(self, path):
        if path not in self.documents:
            return None
        return json.loads(self.documents[path])

    def write(self, path, document):
        self.documents[path] = json.dumps(document)
        self.writes.append(path)

    def list(self, prefix):
        prefix = prefix.rstrip("/") + "/"
        return sorted(
            p[len(prefix) : -len(".json")]
            for p in self.documents
            if p.startswith(prefix) and "/" not in p[len(prefix) :] and p.endswith(".json")
        )

    def snapshot(self, path):
        return copy.deepcopy(self.read(path))


class FixedClock:
    """Callable returning a settable 'today'."""

    def __init__(self, today: date):
        self.current = today

    def __call__(self) -> date:
        return self.current


@pytest.fixture
def store():
    """Create an empty in-memory document store.

    Returns:
        InMemoryDocumentStore: Fresh store.
    """
    return InMemoryDocumentStore()


@pytest.fixture
def clock():
    """A clock fixed at 2024-12-20 that tests can move."""
    return FixedClock(date(2024, 12, 20))


@pytest.fixture
def test_config(tmp_path):
    """Create a test configuration pointing to a temporary directory.

    Args:
        tmp_path: pytest tmp_path fixture for temporary directory.

    Returns:
        Config: Test configuration object.
    """
    return Config(
        base_dir=tmp_path / "ledger",
        store_dir=tmp_path / "ledger" / "store",
        log_level="DEBUG",
        log_dir=tmp_path / "ledger" / "logs",
        period_type="FIXED_DATE",
        anchor_date=date(2024, 12, 1),
        starting_balance=Decimal("1000.00"),
        bank_name="Test Bank",
        account_name="Current Account",
        currency="GBP",
    )


@pytest.fixture
def services(test_config, store, clock):
    """Create a Services container backed by the in-memory store and fixed clock.

    Returns:
        Services: Services container for testing.
    """
    return Services(test_config, store=store, today=clock)


@pytest.fixture
def owner(services):
    """Run setup and return (user_id, account_id) for the active period."""
    result = services.budget.setup()
    return result.user.user_id, result.account.account_id
