"""Domain Exceptions - Business rule violations and domain errors."""

from .base import DomainException
from .ingestion import TransactionValidationException
from .persistence import PersistenceException
from .scoring import InsufficientDataException, ScoreNotFoundException

__all__ = [
    "DomainException",
    "TransactionValidationException",
    "InsufficientDataException",
    "ScoreNotFoundException",
    "PersistenceException",
]
