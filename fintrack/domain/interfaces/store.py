"""Transaction store interfaces."""

import asyncio
from abc import ABC, abstractmethod
from typing import AsyncIterator, Callable, List, Optional

from fintrack.domain.entities import Transaction, TransactionDraft

SnapshotCallback = Callable[[List[Transaction]], None]
ErrorCallback = Callable[[Exception], None]
Unsubscribe = Callable[[], None]


class TransactionStore(ABC):
    """
    Abstract store holding each owner's transaction collection.

    Implementations push complete snapshots to subscribers: once when the
    subscription starts and again after every committed write. There is no
    incremental update path.
    """

    @abstractmethod
    async def ping(self) -> None:
        """
        Check that the store is reachable.

        Raises:
            StoreUnavailableException: If the store cannot be reached
        """
        ...

    @abstractmethod
    def subscribe(
        self,
        owner_id: str,
        on_data: SnapshotCallback,
        on_error: Optional[ErrorCallback] = None,
    ) -> Unsubscribe:
        """
        Start receiving snapshots of an owner's collection.

        Must be called from within a running event loop.

        Args:
            owner_id: The owner whose collection to watch
            on_data: Called with the complete current snapshot
            on_error: Called when a snapshot cannot be delivered

        Returns:
            A callable that cancels the subscription
        """
        ...

    @abstractmethod
    async def snapshot(self, owner_id: str) -> List[Transaction]:
        """
        Read the complete current collection once.

        Args:
            owner_id: The owner whose collection to read

        Returns:
            All transactions for the owner, newest date first

        Raises:
            StoreUnavailableException: If the store cannot be reached
        """
        ...

    @abstractmethod
    async def create(self, owner_id: str, draft: TransactionDraft) -> str:
        """
        Persist a new transaction.

        Args:
            owner_id: The owner of the new transaction
            draft: Validated transaction fields

        Returns:
            The id assigned by the store

        Raises:
            StoreUnavailableException: If the store cannot be reached
        """
        ...

    @abstractmethod
    async def delete(self, owner_id: str, transaction_id: str) -> bool:
        """
        Remove a transaction.

        Args:
            owner_id: The owner of the transaction
            transaction_id: The id to remove

        Returns:
            True if a transaction was removed, False if it did not exist

        Raises:
            StoreUnavailableException: If the store cannot be reached
        """
        ...

    async def stream(self, owner_id: str) -> AsyncIterator[List[Transaction]]:
        """
        Iterate over snapshots of an owner's collection as they arrive.

        Closing the iterator cancels the underlying subscription.
        """
        queue: asyncio.Queue = asyncio.Queue()

        unsubscribe = self.subscribe(owner_id, queue.put_nowait, queue.put_nowait)
        try:
            while True:
                item = await queue.get()
                if isinstance(item, Exception):
                    raise item
                yield item
        finally:
            unsubscribe()


class KeyValueStorage(ABC):
    """Persistent key-value surface used while the document store is down."""

    @abstractmethod
    def read(self, key: str) -> List[dict]:
        """Return the documents stored under a key, or an empty list."""
        ...

    @abstractmethod
    def write(self, key: str, documents: List[dict]) -> None:
        """Replace the documents stored under a key."""
        ...
