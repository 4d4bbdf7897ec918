"""
Database module - document store plus optional MongoDB connectivity.

Usage:
    from common.database import JsonFileDocumentStore

    store = JsonFileDocumentStore("data/data.json")
    async with store.transaction() as document:
        document["alice"] = []
"""

from common.database.mongodb import MongoDB
from common.database.base_document import BaseDocument, StateDocument
from common.database.document_store import (
    DocumentStore,
    JsonFileDocumentStore,
    MongoDocumentStore,
)

__all__ = [
    "MongoDB",
    "BaseDocument",
    "StateDocument",
    "DocumentStore",
    "JsonFileDocumentStore",
    "MongoDocumentStore",
]
