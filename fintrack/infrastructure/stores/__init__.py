"""Transaction store implementations."""

from .document_store import SqlDocumentStore
from .local_store import JsonFileStorage, LocalTransactionStore
from .normalize import document_to_transaction, sort_for_display
from .resilient_store import ResilientTransactionStore

__all__ = [
    "SqlDocumentStore",
    "JsonFileStorage",
    "LocalTransactionStore",
    "ResilientTransactionStore",
    "document_to_transaction",
    "sort_for_display",
]
