"""Dependency injection for FastAPI."""

from typing import Annotated, Optional

from fastapi import Depends, Header, Query, Request

from fintrack.core.context import AppContext
from fintrack.domain.interfaces import TransactionStore
from fintrack.service.analytics import TimeWindow, parse_window
from fintrack.application.services import (
    DashboardService,
    ExportService,
    TransactionService,
)


def get_app_context(request: Request) -> AppContext:
    """Get the context built at startup."""
    return request.app.state.context


def get_store(
    context: Annotated[AppContext, Depends(get_app_context)],
) -> TransactionStore:
    """Get the transaction store for this process."""
    return context.store


def get_owner_id(
    context: Annotated[AppContext, Depends(get_app_context)],
    x_owner_id: Annotated[Optional[str], Header()] = None,
) -> str:
    """Owner from the X-Owner-ID header, or the local owner when absent."""
    if x_owner_id and x_owner_id.strip():
        return x_owner_id.strip()
    return context.settings.local_owner_id


def get_window(
    context: Annotated[AppContext, Depends(get_app_context)],
    window: Annotated[Optional[str], Query()] = None,
    start: Annotated[Optional[str], Query()] = None,
    end: Annotated[Optional[str], Query()] = None,
) -> TimeWindow:
    """Active window from query parameters, falling back to the configured default."""
    return parse_window(
        window or context.settings.default_window,
        start,
        end,
        max_days=context.settings.max_window_days,
    )


# Service dependencies
def get_transaction_service(
    store: Annotated[TransactionStore, Depends(get_store)],
) -> TransactionService:
    """Get a TransactionService instance."""
    return TransactionService(store=store)


def get_dashboard_service(
    context: Annotated[AppContext, Depends(get_app_context)],
) -> DashboardService:
    """Get a DashboardService instance."""
    return DashboardService(
        store=context.store,
        app_settings=context.settings,
        charts=context.chart_settings,
    )


def get_export_service(
    context: Annotated[AppContext, Depends(get_app_context)],
) -> ExportService:
    """Get an ExportService instance."""
    return ExportService(store=context.store, app_settings=context.settings)


OwnerId = Annotated[str, Depends(get_owner_id)]
Window = Annotated[TimeWindow, Depends(get_window)]
