"""Domain Entities - Core business objects."""

from .account import Account, AccountType
from .score import (
    CreditScoreSnapshot,
    FactorCategory,
    PeerStatistics,
    ScoreFactor,
    ScoreTrend,
)
from .transaction import (
    Transaction,
    TransactionCategory,
    TransactionDirection,
    TransactionSummary,
)

__all__ = [
    "Account",
    "AccountType",
    "CreditScoreSnapshot",
    "FactorCategory",
    "PeerStatistics",
    "ScoreFactor",
    "ScoreTrend",
    "Transaction",
    "TransactionCategory",
    "TransactionDirection",
    "TransactionSummary",
]
