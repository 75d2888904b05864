"""Pydantic schemas for API request/response validation."""

from .transaction import (
    TransactionCreateSchema,
    TransactionListSchema,
    TransactionSchema,
)
from .dashboard import DashboardResponseSchema
from .error import ErrorResponseSchema

__all__ = [
    "TransactionCreateSchema",
    "TransactionListSchema",
    "TransactionSchema",
    "DashboardResponseSchema",
    "ErrorResponseSchema",
]
