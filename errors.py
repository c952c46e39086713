"""Exception types raised by the ledger."""


class LedgerError(Exception):
    """Base class for all ledger errors."""


class NotFound(LedgerError):
    """A referenced user, account, period, category or transaction does not exist."""


class ValidationError(LedgerError):
    """Input was missing or malformed, or the operation is not allowed.

    Raised before anything is written.
    """


class DuplicateExternalId(LedgerError):
    """Two transactions in one period share an external_id.

    Indicates a bug in the ingestion source or the merge logic, not a user error.
    """

    def __init__(self, external_ids):
        self.external_ids = list(external_ids)
        super().__init__(
            f"Duplicate external_ids found in transactions: {', '.join(self.external_ids)}"
        )


class StorageError(LedgerError):
    """The document store failed to read or write a document."""

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(f"Storage error for '{path}': {message}")
