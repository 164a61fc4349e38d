"""Data Transfer Objects for application layer."""

from .ingestion import IngestionStats, TransactionStats
from .score import ScoreComparison, ScoreHistoryResponse, ScoreSummary

__all__ = [
    "IngestionStats",
    "ScoreComparison",
    "ScoreHistoryResponse",
    "ScoreSummary",
    "TransactionStats",
]
