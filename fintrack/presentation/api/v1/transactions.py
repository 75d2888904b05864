"""Transaction API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Response

from fintrack.application.dto import TransactionCreateRequest
from fintrack.application.services import TransactionService
from fintrack.core.dependencies import OwnerId, Window, get_transaction_service
from fintrack.service.analytics import window_label
from fintrack.presentation.schemas import (
    ErrorResponseSchema,
    TransactionCreateSchema,
    TransactionListSchema,
    TransactionSchema,
)

transactions_router = APIRouter(
    prefix="/transactions",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid request"},
        503: {"model": ErrorResponseSchema, "description": "Store unavailable"},
    },
)


@transactions_router.get(
    "",
    response_model=TransactionListSchema,
    summary="List Transactions",
    description="""
    List the owner's transactions inside the active window, newest first.

    The window is chosen with `window` (`1`, `7`, `30`, `all`, `custom`);
    a custom window takes `start` and `end` as ISO dates.
    """,
)
async def list_transactions(
    owner_id: OwnerId,
    window: Window,
    service: Annotated[TransactionService, Depends(get_transaction_service)],
) -> TransactionListSchema:
    transactions = await service.list_transactions(owner_id, window)

    return TransactionListSchema(
        window=window_label(window),
        transactions=[TransactionSchema(**vars(t)) for t in transactions],
    )


@transactions_router.post(
    "",
    response_model=TransactionSchema,
    status_code=201,
    summary="Record Transaction",
    responses={
        201: {"description": "Transaction stored"},
    },
)
async def create_transaction(
    request: TransactionCreateSchema,
    owner_id: OwnerId,
    service: Annotated[TransactionService, Depends(get_transaction_service)],
) -> TransactionSchema:
    """
    Record an expense or an income.

    Income never carries a category; an expense without one is filed
    under 'Other'.
    """
    dto = TransactionCreateRequest(
        amount=request.amount,
        type=request.type,
        date=request.date,
        category=request.category,
        description=request.description,
    )

    response = await service.add_transaction(owner_id, dto)

    return TransactionSchema(**vars(response))


@transactions_router.delete(
    "/{transaction_id}",
    status_code=204,
    summary="Delete Transaction",
    responses={
        204: {"description": "Transaction deleted"},
        404: {"model": ErrorResponseSchema, "description": "Transaction not found"},
    },
)
async def delete_transaction(
    transaction_id: Annotated[str, Path(min_length=1, description="Transaction ID")],
    owner_id: OwnerId,
    service: Annotated[TransactionService, Depends(get_transaction_service)],
) -> Response:
    await service.delete_transaction(owner_id, transaction_id)
    return Response(status_code=204)
