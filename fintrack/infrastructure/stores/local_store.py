"""Local JSON-file store used while the document store is unreachable."""

import asyncio
import json
import os
import time
from datetime import date, datetime, timezone
from pathlib import Path
from typing import List, Optional
from uuid import uuid4

import structlog

from fintrack.core.config import Settings, settings
from fintrack.domain.entities import Transaction, TransactionDraft
from fintrack.domain.exceptions import StoreUnavailableException
from fintrack.domain.interfaces import (
    ErrorCallback,
    KeyValueStorage,
    SnapshotCallback,
    TransactionStore,
    Unsubscribe,
)

from .normalize import document_to_transaction, sort_for_display
from .subscriptions import Subscription, SubscriberRegistry

logger = structlog.get_logger(__name__)


class JsonFileStorage(KeyValueStorage):
    """Key-value storage persisted as a single JSON object file."""

    def __init__(self, path: str | Path):
        self._path = Path(path)

    def _load(self) -> dict:
        if not self._path.exists():
            return {}
        try:
            with open(self._path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("local_storage_read_failed", path=str(self._path), error=str(e))
            return {}
        return data if isinstance(data, dict) else {}

    def read(self, key: str) -> List[dict]:
        documents = self._load().get(key, [])
        return [d for d in documents if isinstance(d, dict)] if isinstance(documents, list) else []

    def write(self, key: str, documents: List[dict]) -> None:
        data = self._load()
        data[key] = documents

        tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            os.replace(tmp_path, self._path)
        except OSError as e:
            raise StoreUnavailableException(f"Local storage write failed: {e}") from e


def new_local_id() -> str:
    return f"local_{int(time.time() * 1000)}_{uuid4().hex[:6]}"


class LocalTransactionStore(TransactionStore):
    """
    Degraded-mode store with one storage key per application and owner.

    Same semantics as the document store for reads and writes, but nothing
    is synced between devices. Subscribers get one snapshot when they
    subscribe and a local echo after each write made through this store.
    Storage calls run in a worker thread; writes are serialized.
    """

    def __init__(self, storage: KeyValueStorage, app_settings: Settings = settings):
        self._storage = storage
        self._settings = app_settings
        self._subscribers = SubscriberRegistry()
        self._write_lock = asyncio.Lock()

    async def ping(self) -> None:
        return None

    def subscribe(
        self,
        owner_id: str,
        on_data: SnapshotCallback,
        on_error: Optional[ErrorCallback] = None,
    ) -> Unsubscribe:
        key = self._settings.local_storage_key(owner_id)
        subscription = self._subscribers.add(key, on_data, on_error)
        asyncio.get_running_loop().call_soon(self._deliver_current, subscription)
        return subscription.cancel

    async def snapshot(self, owner_id: str) -> List[Transaction]:
        key = self._settings.local_storage_key(owner_id)
        return to_transactions(await asyncio.to_thread(self._storage.read, key))

    async def create(self, owner_id: str, draft: TransactionDraft) -> str:
        key = self._settings.local_storage_key(owner_id)
        document_id = new_local_id()
        document = {
            "id": document_id,
            **draft.to_document(),
            "createdAt": datetime.now(timezone.utc).isoformat(),
        }

        async with self._write_lock:
            current = await asyncio.to_thread(self._storage.read, key)
            documents = [document, *current]
            await asyncio.to_thread(self._storage.write, key, documents)

        logger.info("local_transaction_created", transaction_id=document_id)
        self._subscribers.publish(key, to_transactions(documents))
        return document_id

    async def delete(self, owner_id: str, transaction_id: str) -> bool:
        key = self._settings.local_storage_key(owner_id)

        async with self._write_lock:
            current = await asyncio.to_thread(self._storage.read, key)
            remaining = [d for d in current if str(d.get("id")) != transaction_id]
            if len(remaining) == len(current):
                return False
            await asyncio.to_thread(self._storage.write, key, remaining)

        logger.info("local_transaction_deleted", transaction_id=transaction_id)
        self._subscribers.publish(key, to_transactions(remaining))
        return True

    def _deliver_current(self, subscription: Subscription) -> None:
        subscription.deliver(to_transactions(self._storage.read(subscription.key)))


def to_transactions(documents: List[dict]) -> List[Transaction]:
    today = date.today()
    return sort_for_display(
        document_to_transaction(d.get("id", ""), d, today) for d in documents
    )
