"""Transaction entity representing a single income or expense record."""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Optional


class TransactionType(str, Enum):
    """Direction of a transaction."""

    EXPENSE = "expense"  # Money out
    INCOME = "income"  # Money in


SUGGESTED_CATEGORIES = (
    "Food",
    "Transport",
    "Rent",
    "Shopping",
    "Entertainment",
    "Health",
    "Bills",
    "Other",
)

DEFAULT_CATEGORY = "Other"


@dataclass(frozen=True)
class Transaction:
    """
    Immutable representation of a recorded transaction.

    Attributes:
        id: Store-assigned identifier, unique within the owner's collection
        amount: Transaction amount (positive)
        type: Whether this is an expense or an income
        date: Calendar date of the transaction
        category: Expense category, None for income
        description: Free text supplied by the owner
        created_at: Server-side creation timestamp, used only for ordering
    """

    id: str
    amount: float
    type: TransactionType
    date: date
    category: Optional[str] = None
    description: str = ""
    created_at: Optional[datetime] = None

    @property
    def is_income(self) -> bool:
        """Check if this is an income transaction."""
        return self.type == TransactionType.INCOME

    @property
    def is_expense(self) -> bool:
        """Check if this is an expense transaction."""
        return self.type == TransactionType.EXPENSE

    @property
    def signed_amount(self) -> float:
        """Net movement: positive for income, negative for expense."""
        return self.amount if self.is_income else -self.amount

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "amount": self.amount,
            "type": self.type.value,
            "date": self.date.isoformat(),
            "category": self.category,
            "description": self.description,
        }


@dataclass(frozen=True)
class TransactionDraft:
    """Validated fields of a transaction that has not been stored yet."""

    amount: float
    type: TransactionType
    date: date
    category: Optional[str] = None
    description: str = ""

    def to_document(self) -> dict:
        """Document body written to the store."""
        return {
            "amount": self.amount,
            "type": self.type.value,
            "category": self.category,
            "description": self.description,
            "date": self.date.isoformat(),
        }
