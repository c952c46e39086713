"""Document store contract the ledger depends on."""

from abc import ABC, abstractmethod
from typing import List, Optional


class DocumentStore(ABC):
    """Abstract key/value store of JSON documents.

    Paths are slash-separated and relative to the store root, e.g.
    "periods/<period_id>.json". Every write replaces the whole document.
    Backends raise errors.StorageError when a read or write fails; the
    ledger does not retry.
    """

    @abstractmethod
    def read(self, path: str) -> Optional[dict]:
        """Read a document.

        Args:
            path: Document path.

        Returns:
            The document, or None if it does not exist.
        """

    @abstractmethod
    def write(self, path: str, document: dict) -> None:
        """Create or replace a document.

        Args:
            path: Document path.
            document: JSON-serializable dictionary.
        """

    @abstractmethod
    def list(self, prefix: str) -> List[str]:
        """List the ids of the documents stored under a folder.

        Args:
            prefix: Folder path, e.g. "periods".

        Returns:
            Document ids (file names without the .json suffix), sorted.
        """
