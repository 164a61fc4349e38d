"""Ingestion-related domain exceptions."""

from typing import List

from .base import DomainException


class TransactionValidationException(DomainException):
    """Raised when a raw transaction record is malformed."""

    def __init__(self, errors: List[str], index: int | None = None):
        prefix = f"Record {index}: " if index is not None else ""
        super().__init__(
            message=prefix + "; ".join(errors),
            code="INVALID_TRANSACTION",
        )
        self.errors = errors
        self.index = index
