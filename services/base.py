"""Base services container for dependency injection."""

from datetime import date

from config import Config
from store.filesystem import FileDocumentStore


class Services:
    """Container for all application services.

    This class provides a centralized way to access all services and makes
    it easy to inject an in-memory store and a fixed clock for testing.

    Args:
        config: Application configuration object.
        store: Optional document store for testing. If provided, config.store_dir is ignored.
        today: Optional callable returning the current date.
    """

    def __init__(self, config: Config, store=None, today=None):
        """Initialize services with configuration.

        Args:
            config: Config object containing application configuration.
            store: Optional DocumentStore for dependency injection (testing).
                   If None, creates a FileDocumentStore from config.
            today: Optional callable returning today's date (defaults to date.today).
        """
        self.config = config
        self.store = store if store is not None else FileDocumentStore.from_config(config)
        self.today = today or date.today

        # Lazy import to avoid circular dependencies
        from services.users import UserService
        from services.accounts import AccountService
        from services.categories import CategoryService
        from services.periods import PeriodService
        from services.budget import BudgetService

        self.users = UserService(self.store)
        self.accounts = AccountService(self.store)
        self.categories = CategoryService(self.store)
        self.periods = PeriodService(self.store, today=self.today)
        self.budget = BudgetService(
            config, self.users, self.accounts, self.categories, self.periods
        )
