"""Explicitly constructed application context."""

from dataclasses import dataclass, field

import structlog
from sqlalchemy.exc import SQLAlchemyError

from fintrack.core.config import Settings, settings
from fintrack.domain.exceptions import StoreUnavailableException
from fintrack.infrastructure.database import DatabaseSessionManager, db_manager
from fintrack.infrastructure.stores import (
    JsonFileStorage,
    LocalTransactionStore,
    ResilientTransactionStore,
    SqlDocumentStore,
)
from fintrack.service.analytics import ChartSettings, chart_settings

logger = structlog.get_logger(__name__)


@dataclass
class AppContext:
    """
    Settings and store handles shared by every request.

    Built once at startup and handed to services through dependencies;
    nothing in the analytics core reaches for it directly.
    """

    settings: Settings
    store: ResilientTransactionStore
    chart_settings: ChartSettings = field(default_factory=lambda: chart_settings)

    @property
    def degraded(self) -> bool:
        return self.store.degraded


def build_context(
    app_settings: Settings = settings,
    db: DatabaseSessionManager = db_manager,
) -> AppContext:
    """
    Wire the document store, its local fallback and the resilient wrapper.

    The store starts degraded when it is disabled in settings.
    """
    local_store = LocalTransactionStore(
        JsonFileStorage(app_settings.local_store_path),
        app_settings,
    )
    store = ResilientTransactionStore(
        primary=SqlDocumentStore(db, app_settings),
        fallback=local_store,
        degraded=not app_settings.store_enabled,
    )
    return AppContext(settings=app_settings, store=store)


async def open_context(
    app_settings: Settings = settings,
    db: DatabaseSessionManager = db_manager,
) -> AppContext:
    """Build the context and check the document store once."""
    context = build_context(app_settings, db)

    if context.degraded:
        logger.info("store_disabled", local_store_path=app_settings.local_store_path)
        return context

    try:
        if not db.initialized:
            db.init(app_settings.database_url)
    except SQLAlchemyError as e:
        context.store.degrade(StoreUnavailableException(f"Document store error: {e}"))
        return context

    await context.store.ping()
    logger.info("store_ready", mode=context.store.mode)
    return context
