"""Account service for document store operations."""

from typing import List, Optional

from errors import ValidationError
from logger import get_logger
from models.account import Account
from store import paths

logger = get_logger()


class AccountService:
    """Service for managing accounts.

    Each account is stored as accounts/{account_id}.json.
    """

    def __init__(self, store):
        """Initialize the account service.

        Args:
            store: DocumentStore holding the account documents.
        """
        self.store = store

    def find_all(self) -> List[Account]:
        """Get all accounts.

        Returns:
            List of Account objects, ordered by created_at.
        """
        accounts = []
        for account_id in self.store.list(paths.ACCOUNTS_FOLDER):
            document = self.store.read(paths.account_path(account_id))
            if document:
                accounts.append(Account.from_dict(document))
        return sorted(accounts, key=lambda a: a.created_at)

    def find(self, account_id: str) -> Optional[Account]:
        """Get a single account by ID.

        Args:
            account_id: The account ID to find.

        Returns:
            Account object if found, None otherwise.
        """
        document = self.store.read(paths.account_path(account_id))
        return Account.from_dict(document) if document else None

    def find_for_user(self, user_id: str) -> Optional[Account]:
        """Get the account belonging to a user.

        Only one account per user is supported, so the oldest one is returned.

        Args:
            user_id: Owner of the account.

        Returns:
            Account object if the user has one, None otherwise.
        """
        for account in self.find_all():
            if account.user_id == user_id:
                return account
        return None

    def create(
        self, user_id: str, bank_name: str, account_name: str, currency: str
    ) -> Account:
        """Create a new account.

        Args:
            user_id: Owner of the account.
            bank_name: Name of the bank, e.g. "Barclays".
            account_name: Name of the account, e.g. "Current Account".
            currency: ISO 4217 currency code, e.g. "GBP".

        Returns:
            The created Account object.

        Raises:
            ValidationError: If a field is empty or the currency is not a 3-letter code.
        """
        if not bank_name or not account_name:
            raise ValidationError("bank_name and account_name are required")
        if not currency or len(currency) != 3 or not currency.isalpha():
            raise ValidationError(f"Invalid currency code: {currency!r}")

        account = Account(
            user_id=user_id,
            bank_name=bank_name,
            account_name=account_name,
            currency=currency.upper(),
        )
        self.store.write(paths.account_path(account.account_id), account.to_dict())
        logger.info(f"Created account {account.account_id} ({bank_name} {account_name})")
        return account

    def get_or_create_for_user(
        self, user_id: str, bank_name: str, account_name: str, currency: str
    ) -> Account:
        """Return the user's account, creating it if the user has none."""
        account = self.find_for_user(user_id)
        if account:
            return account
        return self.create(user_id, bank_name, account_name, currency)
