"""Repository implementations."""

from .account_repository import PostgresAccountRepository
from .score_repository import PostgresScoreRepository
from .transaction_repository import PostgresTransactionRepository

__all__ = [
    "PostgresAccountRepository",
    "PostgresScoreRepository",
    "PostgresTransactionRepository",
]
