"""
Whole-document persistence.

All application state lives in one JSON-compatible document. Stores expose
``load()``/``save()`` for full read/replace and a ``transaction()`` context
that serializes read-modify-write cycles inside the process, so two
requests mutating the document can no longer overwrite each other.

Example:
    store = JsonFileDocumentStore("data/data.json")

    async with store.transaction() as document:
        document.setdefault("challenges", {})["alice"] = []
    # saved on clean exit, discarded if the block raised
"""

import asyncio
import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional

from common.database.base_document import StateDocument
from common.utils.exceptions import PersistenceException

logger = logging.getLogger(__name__)

Document = Dict[str, Any]


class DocumentStore(ABC):
    """Read/replace access to the application document."""

    def __init__(self):
        self._lock = asyncio.Lock()

    @abstractmethod
    async def load(self) -> Document:
        """
        Read the full document.

        Returns:
            The stored document, or an empty dict when nothing is stored yet

        Raises:
            PersistenceException: If the stored data cannot be read
        """
        pass

    @abstractmethod
    async def save(self, document: Document) -> None:
        """
        Replace the full document.

        Raises:
            PersistenceException: If the document cannot be written
        """
        pass

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[Document]:
        """
        Load, hand out for mutation, then save.

        Transactions run one at a time. If the body raises, nothing is
        written and the exception propagates.
        """
        async with self._lock:
            document = await self.load()
            yield document
            await self.save(document)

    async def read(self) -> Document:
        """Load the document without opening a transaction."""
        return await self.load()


class JsonFileDocumentStore(DocumentStore):
    """Document kept in a single pretty-printed JSON file."""

    def __init__(self, path: str):
        """
        Initialize JsonFileDocumentStore.

        Args:
            path: Location of the JSON file (created on first save)
        """
        super().__init__()
        self._path = path

    @property
    def path(self) -> str:
        return self._path

    async def load(self) -> Document:
        return await asyncio.to_thread(self._read_file)

    async def save(self, document: Document) -> None:
        await asyncio.to_thread(self._write_file, document)

    def _read_file(self) -> Document:
        if not os.path.exists(self._path):
            return {}

        try:
            with open(self._path, "r", encoding="utf-8") as f:
                raw = f.read()
        except OSError as e:
            logger.error(f"Failed to read {self._path}: {e}")
            raise PersistenceException(details={"path": self._path}) from e

        if not raw.strip():
            return {}

        try:
            document = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error(f"Stored document at {self._path} is not valid JSON: {e}")
            raise PersistenceException(
                message="Stored data is corrupt",
                code="CORRUPT_DOCUMENT",
                details={"path": self._path},
            ) from e

        if not isinstance(document, dict):
            raise PersistenceException(
                message="Stored data is corrupt",
                code="CORRUPT_DOCUMENT",
                details={"path": self._path},
            )
        return document

    def _write_file(self, document: Document) -> None:
        directory = os.path.dirname(os.path.abspath(self._path))
        os.makedirs(directory, exist_ok=True)

        # Write next to the target and swap in, so readers never see half a file
        fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".data-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(document, f, indent=2, ensure_ascii=False)
            os.replace(tmp_path, self._path)
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Failed to write {self._path}: {e}")
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise PersistenceException(details={"path": self._path}) from e


class MongoDocumentStore(DocumentStore):
    """Document kept as one StateDocument in MongoDB."""

    def __init__(self, key: str = "default"):
        """
        Initialize MongoDocumentStore.

        Beanie must already be initialized with StateDocument.

        Args:
            key: Identifies the state document inside the collection
        """
        super().__init__()
        self._key = key

    async def _find(self) -> Optional[StateDocument]:
        try:
            return await StateDocument.find_one({"key": self._key})
        except Exception as e:
            logger.error(f"Failed to load state document '{self._key}': {e}")
            raise PersistenceException(details={"key": self._key}) from e

    async def load(self) -> Document:
        state = await self._find()
        return dict(state.data) if state else {}

    async def save(self, document: Document) -> None:
        state = await self._find()
        if state is None:
            state = StateDocument(key=self._key, data=document)
        else:
            state.data = document

        try:
            await state.save()
        except Exception as e:
            logger.error(f"Failed to save state document '{self._key}': {e}")
            raise PersistenceException(details={"key": self._key}) from e
