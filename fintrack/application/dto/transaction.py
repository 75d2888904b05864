"""Data transfer objects for transaction operations."""

import math
from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from fintrack.domain.entities import (
    DEFAULT_CATEGORY,
    Transaction,
    TransactionDraft,
    TransactionType,
)


@dataclass(frozen=True)
class TransactionCreateRequest:
    """Input data for recording a transaction."""
    amount: float
    type: TransactionType
    date: date
    category: Optional[str] = None
    description: str = ""

    def validate(self) -> List[str]:
        errors = []

        if self.amount is None or not math.isfinite(self.amount):
            errors.append("amount must be a finite number")
        elif self.amount <= 0:
            errors.append("amount must be positive")

        return errors

    def to_draft(self) -> TransactionDraft:
        """
        Resolve defaults into a storable draft.

        Income carries no category; an expense without one is filed under
        the default category.
        """
        if self.type == TransactionType.INCOME:
            category = None
        else:
            category = (self.category or "").strip() or DEFAULT_CATEGORY

        return TransactionDraft(
            amount=float(self.amount),
            type=self.type,
            date=self.date,
            category=category,
            description=(self.description or "").strip(),
        )


@dataclass(frozen=True)
class TransactionResponse:
    """Response data for a stored transaction."""

    id: str
    amount: float
    type: str
    date: str
    category: Optional[str]
    description: str

    @classmethod
    def from_entity(cls, txn: Transaction) -> "TransactionResponse":
        return cls(
            id=txn.id,
            amount=txn.amount,
            type=txn.type.value,
            date=txn.date.isoformat(),
            category=txn.category,
            description=txn.description,
        )
