"""Document store backed by JSON files on the local filesystem."""

import json
import os
import tempfile
from pathlib import Path
from typing import List, Optional

from config import Config
from errors import StorageError
from logger import get_logger
from store.base import DocumentStore

logger = get_logger()


class FileDocumentStore(DocumentStore):
    """Stores each document as a JSON file below a root directory.

    Args:
        root: Directory holding the documents.
    """

    def __init__(self, root: Path):
        self.root = Path(root)

    @classmethod
    def from_config(cls, config: Config) -> "FileDocumentStore":
        return cls(config.store_dir)

    def _resolve(self, path: str) -> Path:
        resolved = (self.root / path).resolve()
        if not resolved.is_relative_to(self.root.resolve()):
            raise StorageError(path, "path escapes the store root")
        return resolved

    def read(self, path: str) -> Optional[dict]:
        file_path = self._resolve(path)
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                return json.load(f)
        except FileNotFoundError:
            return None
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(path, str(e)) from e

    def write(self, path: str, document: dict) -> None:
        """Write a document atomically.

        The document is written to a temporary file in the same directory
        and renamed over the target, so a failed write leaves the previous
        version intact.
        """
        file_path = self._resolve(path)
        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=file_path.parent, prefix=f".{file_path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(document, f, indent=2)
                os.replace(tmp_name, file_path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except (OSError, TypeError, ValueError) as e:
            raise StorageError(path, str(e)) from e

        logger.debug(f"Wrote document {path}")

    def list(self, prefix: str) -> List[str]:
        folder = self._resolve(prefix)
        if not folder.exists():
            return []
        try:
            return sorted(p.stem for p in folder.glob("*.json") if p.is_file())
        except OSError as e:
            raise StorageError(prefix, str(e)) from e
