"""Data Transfer Objects for application layer."""

from .transaction import TransactionCreateRequest, TransactionResponse
from .dashboard import DashboardResponse

__all__ = [
    "TransactionCreateRequest",
    "TransactionResponse",
    "DashboardResponse",
]
