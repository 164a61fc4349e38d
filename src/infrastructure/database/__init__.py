"""Database infrastructure."""

from .connection import (
    DatabaseSessionManager,
    db_manager,
    enable_sqlite_savepoints,
    get_db_session,
)
from .models import AccountModel, Base, CreditScoreModel, ScoreFactorModel, TransactionModel

__all__ = [
    "get_db_session",
    "DatabaseSessionManager",
    "db_manager",
    "enable_sqlite_savepoints",
    "Base",
    "AccountModel",
    "TransactionModel",
    "CreditScoreModel",
    "ScoreFactorModel",
]
