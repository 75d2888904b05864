"""Domain Entities - Core business objects."""

from .transaction import (
    DEFAULT_CATEGORY,
    SUGGESTED_CATEGORIES,
    Transaction,
    TransactionDraft,
    TransactionType,
)

__all__ = [
    "DEFAULT_CATEGORY",
    "SUGGESTED_CATEGORIES",
    "Transaction",
    "TransactionDraft",
    "TransactionType",
]
