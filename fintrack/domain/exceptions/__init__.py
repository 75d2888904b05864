"""Domain Exceptions - Business rule violations and domain errors."""

from .base import DomainException
from .transaction import (
    InvalidTransactionException,
    TransactionNotFoundException,
)
from .window import InvalidWindowException
from .store import StoreUnavailableException

__all__ = [
    "DomainException",
    "InvalidTransactionException",
    "TransactionNotFoundException",
    "InvalidWindowException",
    "StoreUnavailableException",
]
