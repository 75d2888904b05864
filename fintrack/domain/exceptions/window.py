"""Time window domain exceptions."""

from .base import DomainException


class InvalidWindowException(DomainException):
    """Raised when a time window selector cannot be interpreted."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="INVALID_WINDOW",
        )
