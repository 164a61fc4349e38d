"""
Domain Interfaces (Ports)
"""

from .repositories import AccountRepository, ScoreRepository, TransactionRepository

__all__ = [
    "AccountRepository",
    "ScoreRepository",
    "TransactionRepository",
]
