"""SQLAlchemy-backed document store for transactions."""

import asyncio
from datetime import date
from typing import List, Optional, Set
from uuid import uuid4

import structlog
from sqlalchemy import delete, select, text
from sqlalchemy.exc import SQLAlchemyError

from fintrack.core.config import Settings, settings
from fintrack.domain.entities import Transaction, TransactionDraft
from fintrack.domain.exceptions import StoreUnavailableException
from fintrack.domain.interfaces import (
    ErrorCallback,
    SnapshotCallback,
    TransactionStore,
    Unsubscribe,
)
from fintrack.infrastructure.database import DatabaseSessionManager, DocumentModel

from .normalize import document_to_transaction, sort_for_display
from .subscriptions import Subscription, SubscriberRegistry

logger = structlog.get_logger(__name__)

STORE_ERRORS = (SQLAlchemyError, OSError)


class SqlDocumentStore(TransactionStore):
    """
    Document store keeping each transaction as a JSON document.

    Documents live under a per-application, per-owner collection path.
    After every committed write the collection is re-read and the complete
    snapshot is pushed to that collection's subscribers.
    """

    def __init__(
        self,
        db: DatabaseSessionManager,
        app_settings: Settings = settings,
    ):
        self._db = db
        self._settings = app_settings
        self._subscribers = SubscriberRegistry()
        self._tasks: Set[asyncio.Task] = set()

    async def ping(self) -> None:
        try:
            async with self._session() as session:
                await session.execute(text("SELECT 1"))
            await self._db.create_all()
        except STORE_ERRORS as e:
            raise StoreUnavailableException(f"Document store error: {e}") from e

    def subscribe(
        self,
        owner_id: str,
        on_data: SnapshotCallback,
        on_error: Optional[ErrorCallback] = None,
    ) -> Unsubscribe:
        collection = self._settings.collection_path(owner_id)
        subscription = self._subscribers.add(collection, on_data, on_error)

        task = asyncio.get_running_loop().create_task(
            self._deliver_initial(subscription)
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

        logger.debug("store_subscribed", collection=collection)
        return subscription.cancel

    async def snapshot(self, owner_id: str) -> List[Transaction]:
        return await self._load(self._settings.collection_path(owner_id))

    async def create(self, owner_id: str, draft: TransactionDraft) -> str:
        collection = self._settings.collection_path(owner_id)
        document_id = uuid4().hex

        try:
            async with self._session() as session:
                session.add(
                    DocumentModel(
                        id=document_id,
                        collection=collection,
                        data=draft.to_document(),
                    )
                )
        except STORE_ERRORS as e:
            raise StoreUnavailableException(f"Document store error: {e}") from e

        await self._publish(collection)
        return document_id

    async def delete(self, owner_id: str, transaction_id: str) -> bool:
        collection = self._settings.collection_path(owner_id)

        try:
            async with self._session() as session:
                result = await session.execute(
                    delete(DocumentModel).where(
                        DocumentModel.collection == collection,
                        DocumentModel.id == transaction_id,
                    )
                )
                deleted = result.rowcount > 0
        except STORE_ERRORS as e:
            raise StoreUnavailableException(f"Document store error: {e}") from e

        if deleted:
            await self._publish(collection)
        return deleted

    def _session(self):
        if not self._db.initialized:
            raise StoreUnavailableException("Document store is not configured")
        return self._db.session()

    async def _load(self, collection: str) -> List[Transaction]:
        try:
            async with self._session() as session:
                result = await session.execute(
                    select(DocumentModel)
                    .where(DocumentModel.collection == collection)
                    .order_by(DocumentModel.created_at.desc())
                )
                models = result.scalars().all()
        except STORE_ERRORS as e:
            raise StoreUnavailableException(f"Document store error: {e}") from e

        today = date.today()
        return sort_for_display(
            document_to_transaction(m.id, m.data, today, m.created_at) for m in models
        )

    async def _deliver_initial(self, subscription: Subscription) -> None:
        try:
            snapshot = await self._load(subscription.key)
        except StoreUnavailableException as e:
            logger.warning("store_snapshot_failed", collection=subscription.key, error=e.message)
            subscription.fail(e)
            return
        subscription.deliver(snapshot)

    async def _publish(self, collection: str) -> None:
        if not self._subscribers.has_subscribers(collection):
            return

        try:
            snapshot = await self._load(collection)
        except StoreUnavailableException as e:
            logger.warning("store_snapshot_failed", collection=collection, error=e.message)
            self._subscribers.fail(collection, e)
            return

        self._subscribers.publish(collection, snapshot)
