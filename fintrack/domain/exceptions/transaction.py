"""Transaction-related domain exceptions."""

from .base import DomainException


class TransactionNotFoundException(DomainException):
    """Raised when a transaction cannot be found in the owner's collection."""

    def __init__(self, transaction_id: str):
        super().__init__(
            message=f"Transaction not found: {transaction_id}",
            code="TRANSACTION_NOT_FOUND",
        )
        self.transaction_id = transaction_id


class InvalidTransactionException(DomainException):
    """Raised when a submitted transaction fails validation."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="INVALID_TRANSACTION",
        )
