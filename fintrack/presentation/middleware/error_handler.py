"""Error handling middleware and exception handlers."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import structlog

from fintrack.domain.exceptions import (
    DomainException,
    InvalidTransactionException,
    InvalidWindowException,
    StoreUnavailableException,
    TransactionNotFoundException,
)
from .request_context import get_request_id

logger = structlog.get_logger(__name__)

STORE_UNAVAILABLE_MESSAGE = "Transactions are temporarily unavailable. Please try again."


def _error_response(status_code: int, body: dict) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={**body, "request_id": get_request_id()},
    )


def error_handler_middleware(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI app.

    Maps domain exceptions to appropriate HTTP responses.
    """

    @app.exception_handler(TransactionNotFoundException)
    async def transaction_not_found_handler(
        request: Request,
        exc: TransactionNotFoundException,
    ) -> JSONResponse:
        """Handle transaction not found errors."""
        return _error_response(404, exc.to_dict())

    @app.exception_handler(InvalidTransactionException)
    async def invalid_transaction_handler(
        request: Request,
        exc: InvalidTransactionException,
    ) -> JSONResponse:
        """Handle rejected transaction input."""
        return _error_response(400, exc.to_dict())

    @app.exception_handler(InvalidWindowException)
    async def invalid_window_handler(
        request: Request,
        exc: InvalidWindowException,
    ) -> JSONResponse:
        """Handle unusable window selectors and ranges."""
        return _error_response(400, exc.to_dict())

    @app.exception_handler(StoreUnavailableException)
    async def store_unavailable_handler(
        request: Request,
        exc: StoreUnavailableException,
    ) -> JSONResponse:
        """Handle a store that neither the remote nor the local path could serve."""
        logger.error(
            "store_unavailable",
            request_id=get_request_id(),
            message=exc.message,
        )
        return _error_response(
            503,
            {
                "error": exc.code,
                "message": STORE_UNAVAILABLE_MESSAGE,
            },
        )

    @app.exception_handler(DomainException)
    async def domain_exception_handler(
        request: Request,
        exc: DomainException,
    ) -> JSONResponse:
        """Handle generic domain exceptions."""
        logger.warning(
            "domain_exception",
            request_id=get_request_id(),
            code=exc.code,
            message=exc.message,
        )
        return _error_response(400, exc.to_dict())

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.exception(
            "unhandled_exception",
            request_id=get_request_id(),
            error=str(exc),
            error_type=type(exc).__name__,
        )
        return _error_response(
            500,
            {"error": "INTERNAL_ERROR", "message": "An unexpected error occurred."},
        )
