"""Transaction store exceptions."""

from .base import DomainException


class StoreUnavailableException(DomainException):
    """Raised when the document store cannot be reached."""

    def __init__(self, message: str = "Transaction store is unavailable"):
        super().__init__(
            message=message,
            code="STORE_UNAVAILABLE",
        )
