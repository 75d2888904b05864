"""
Domain Interfaces (Ports)
"""

from .store import (
    ErrorCallback,
    KeyValueStorage,
    SnapshotCallback,
    TransactionStore,
    Unsubscribe,
)

__all__ = [
    "ErrorCallback",
    "KeyValueStorage",
    "SnapshotCallback",
    "TransactionStore",
    "Unsubscribe",
]
