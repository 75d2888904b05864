"""Application services (use cases)."""

from .transaction_service import TransactionService
from .dashboard_service import DashboardService
from .export_service import ExportFormat, ExportService

__all__ = [
    "TransactionService",
    "DashboardService",
    "ExportFormat",
    "ExportService",
]
