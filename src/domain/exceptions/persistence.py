"""Persistence-related domain exceptions."""

from .base import DomainException


class PersistenceException(DomainException):
    """Raised when a storage write fails and nothing partial was kept."""

    def __init__(self, message: str, operation: str = ""):
        super().__init__(
            message=message,
            code="PERSISTENCE_ERROR",
        )
        self.operation = operation
