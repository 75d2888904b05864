"""Transaction service - records, removes and lists transactions."""

from datetime import date
from typing import List, Optional

import structlog

from fintrack.application.dto import TransactionCreateRequest, TransactionResponse
from fintrack.core.metrics import record_transaction_created, record_transaction_deleted
from fintrack.domain.entities import Transaction
from fintrack.domain.exceptions import (
    InvalidTransactionException,
    TransactionNotFoundException,
)
from fintrack.domain.interfaces import TransactionStore
from fintrack.service.analytics import TimeWindow, filter_transactions

logger = structlog.get_logger(__name__)


class TransactionService:
    """
    Application service for transaction use cases.

    The store is the only source of truth: nothing here keeps a copy of
    an owner's transactions between calls.
    """

    def __init__(self, store: TransactionStore):
        self._store = store

    async def add_transaction(
        self,
        owner_id: str,
        request: TransactionCreateRequest,
    ) -> TransactionResponse:
        """
        Validate and store a new transaction.

        Args:
            owner_id: Owner of the collection
            request: Fields entered by the owner

        Returns:
            TransactionResponse for the stored record

        Raises:
            InvalidTransactionException: If request validation fails
            StoreUnavailableException: If no store accepted the write
        """
        errors = request.validate()
        if errors:
            raise InvalidTransactionException("; ".join(errors))

        draft = request.to_draft()
        transaction_id = await self._store.create(owner_id, draft)
        record_transaction_created(draft.type.value)

        logger.info(
            "transaction_created",
            owner_id=owner_id,
            transaction_id=transaction_id,
            type=draft.type.value,
            category=draft.category,
        )

        return TransactionResponse.from_entity(
            Transaction(
                id=transaction_id,
                amount=draft.amount,
                type=draft.type,
                date=draft.date,
                category=draft.category,
                description=draft.description,
            )
        )

    async def delete_transaction(self, owner_id: str, transaction_id: str) -> None:
        """
        Remove a transaction.

        Raises:
            TransactionNotFoundException: If the owner has no such transaction
        """
        deleted = await self._store.delete(owner_id, transaction_id)

        if not deleted:
            logger.warning(
                "transaction_not_found",
                owner_id=owner_id,
                transaction_id=transaction_id,
            )
            raise TransactionNotFoundException(transaction_id)

        record_transaction_deleted()
        logger.info("transaction_deleted", owner_id=owner_id, transaction_id=transaction_id)

    async def list_transactions(
        self,
        owner_id: str,
        window: TimeWindow,
        today: Optional[date] = None,
    ) -> List[TransactionResponse]:
        """Transactions inside the window, newest first."""
        snapshot = await self._store.snapshot(owner_id)
        return [
            TransactionResponse.from_entity(t)
            for t in filter_transactions(snapshot, window, today)
        ]
