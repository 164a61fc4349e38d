"""Application services (use cases)."""

from .explanation_service import ExplanationService
from .ingestion_service import IngestionService
from .scoring_service import ScoringService

__all__ = [
    "ExplanationService",
    "IngestionService",
    "ScoringService",
]
