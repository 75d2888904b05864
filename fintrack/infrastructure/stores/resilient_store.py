"""Store wrapper that falls back to local storage when the primary fails."""

from typing import List, Optional, Set

import structlog

from fintrack.core.metrics import record_store_fallback
from fintrack.domain.entities import Transaction, TransactionDraft
from fintrack.domain.exceptions import StoreUnavailableException
from fintrack.domain.interfaces import (
    ErrorCallback,
    SnapshotCallback,
    TransactionStore,
    Unsubscribe,
)

logger = structlog.get_logger(__name__)


class _RehomingSubscription:
    """A subscription that can move from the primary to the fallback store."""

    def __init__(
        self,
        store: "ResilientTransactionStore",
        owner_id: str,
        on_data: SnapshotCallback,
        on_error: Optional[ErrorCallback],
    ):
        self._store = store
        self._owner_id = owner_id
        self._on_data = on_data
        self._on_error = on_error
        self._cancel: Optional[Unsubscribe] = None
        self.active = True

    def start(self) -> None:
        if self._store.degraded:
            self._cancel = self._store.fallback.subscribe(
                self._owner_id, self._on_data, self._on_error
            )
        else:
            self._cancel = self._store.primary.subscribe(
                self._owner_id, self._on_data, self._on_primary_error
            )

    def rehome(self) -> None:
        if not self.active:
            return
        if self._cancel is not None:
            self._cancel()
        self._cancel = self._store.fallback.subscribe(
            self._owner_id, self._on_data, self._on_error
        )

    def cancel(self) -> None:
        if not self.active:
            return
        self.active = False
        if self._cancel is not None:
            self._cancel()
        self._store._live.discard(self)

    def _on_primary_error(self, exc: Exception) -> None:
        if isinstance(exc, StoreUnavailableException):
            self._store.degrade(exc)
        elif self._on_error is not None:
            self._on_error(exc)


class ResilientTransactionStore(TransactionStore):
    """
    Delegates to a primary store until it becomes unreachable.

    The first StoreUnavailableException switches the service to degraded
    mode for the rest of the process lifetime: the failure is reported
    once, nothing is retried, live subscriptions move to the fallback and
    the failed operation is served by the fallback instead.
    """

    def __init__(
        self,
        primary: TransactionStore,
        fallback: TransactionStore,
        degraded: bool = False,
    ):
        self.primary = primary
        self.fallback = fallback
        self._degraded = degraded
        self._live: Set[_RehomingSubscription] = set()

    @property
    def degraded(self) -> bool:
        return self._degraded

    @property
    def mode(self) -> str:
        return "degraded" if self._degraded else "remote"

    def degrade(self, exc: Exception) -> None:
        """Switch to the fallback store. Only the first call has an effect."""
        if self._degraded:
            return

        self._degraded = True
        logger.warning(
            "store_unavailable_fallback",
            error=str(exc),
            live_subscriptions=len(self._live),
        )
        record_store_fallback()

        for subscription in list(self._live):
            subscription.rehome()

    async def ping(self) -> None:
        if self._degraded:
            return
        try:
            await self.primary.ping()
        except StoreUnavailableException as e:
            self.degrade(e)

    def subscribe(
        self,
        owner_id: str,
        on_data: SnapshotCallback,
        on_error: Optional[ErrorCallback] = None,
    ) -> Unsubscribe:
        subscription = _RehomingSubscription(self, owner_id, on_data, on_error)
        self._live.add(subscription)
        subscription.start()
        return subscription.cancel

    async def snapshot(self, owner_id: str) -> List[Transaction]:
        if not self._degraded:
            try:
                return await self.primary.snapshot(owner_id)
            except StoreUnavailableException as e:
                self.degrade(e)
        return await self.fallback.snapshot(owner_id)

    async def create(self, owner_id: str, draft: TransactionDraft) -> str:
        if not self._degraded:
            try:
                return await self.primary.create(owner_id, draft)
            except StoreUnavailableException as e:
                self.degrade(e)
        return await self.fallback.create(owner_id, draft)

    async def delete(self, owner_id: str, transaction_id: str) -> bool:
        if not self._degraded:
            try:
                return await self.primary.delete(owner_id, transaction_id)
            except StoreUnavailableException as e:
                self.degrade(e)
        return await self.fallback.delete(owner_id, transaction_id)
