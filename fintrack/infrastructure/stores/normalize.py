"""
Boundary normalization for stored transaction documents.

Documents come back from the store untyped. Each one is coerced into a
Transaction exactly once, here, so everything downstream can rely on
typed, defaulted fields:

- amount: numbers and numeric strings are accepted, anything else is 0
- date: ISO dates (or the date part of ISO datetimes), otherwise today
- type: "income" is income, anything else is an expense
- category: expenses without one fall into "Other"; income has none
- description: anything that is not a string becomes ""
"""

import math
from datetime import date, datetime
from typing import Any, Iterable, List, Optional

import structlog

from fintrack.domain.entities import DEFAULT_CATEGORY, Transaction, TransactionType

logger = structlog.get_logger(__name__)


def coerce_amount(value: Any) -> float:
    """Best-effort numeric amount; malformed values count as 0."""
    if isinstance(value, bool):
        return 0.0

    if isinstance(value, (int, float)):
        amount = float(value)
    elif isinstance(value, str):
        try:
            amount = float(value.strip())
        except ValueError:
            return 0.0
    else:
        return 0.0

    return amount if math.isfinite(amount) else 0.0


def coerce_date(value: Any, today: date) -> date:
    """Calendar date of a document, falling back to today."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        text = value.strip()
        if "T" in text:
            text = text.split("T", 1)[0]
        try:
            return date.fromisoformat(text)
        except ValueError:
            pass
    return today


def coerce_type(value: Any) -> TransactionType:
    if isinstance(value, str) and value.strip().lower() == TransactionType.INCOME.value:
        return TransactionType.INCOME
    return TransactionType.EXPENSE


def coerce_category(value: Any, txn_type: TransactionType) -> Optional[str]:
    if txn_type == TransactionType.INCOME:
        return None
    if isinstance(value, str) and value.strip():
        return value.strip()
    return DEFAULT_CATEGORY


def coerce_created_at(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str) and value:
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
    return None


def document_to_transaction(
    doc_id: str,
    data: Any,
    today: Optional[date] = None,
    created_at: Optional[datetime] = None,
) -> Transaction:
    """
    Convert a raw stored document into a Transaction.

    Args:
        doc_id: Identifier of the document in its collection
        data: The document body as stored
        today: Date assigned to documents without a usable date
        created_at: Store-side creation time, if the store tracks one

    Returns:
        A fully typed Transaction
    """
    today = today or date.today()
    if not isinstance(data, dict):
        data = {}

    txn_type = coerce_type(data.get("type"))
    amount = coerce_amount(data.get("amount"))
    description = data.get("description")

    if amount == 0.0 and data.get("amount") not in (0, 0.0):
        logger.debug("document_amount_coerced", document_id=doc_id)

    return Transaction(
        id=str(doc_id),
        amount=amount,
        type=txn_type,
        date=coerce_date(data.get("date"), today),
        category=coerce_category(data.get("category"), txn_type),
        description=description if isinstance(description, str) else "",
        created_at=created_at or coerce_created_at(data.get("createdAt")),
    )


def sort_for_display(transactions: Iterable[Transaction]) -> List[Transaction]:
    """Newest date first; transactions on the same date keep store order."""
    return sorted(transactions, key=lambda t: t.date, reverse=True)
