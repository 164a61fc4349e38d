"""Pydantic schemas for API request/response validation."""

from .breakdown import (
    FactorExplanationSchema,
    ImprovementTipSchema,
    ScoreBreakdownSchema,
    ScoreHistoryPointSchema,
    ScoreRangeSchema,
)
from .error import ErrorResponseSchema, InsufficientDataErrorSchema
from .ingestion import (
    IngestionStatsSchema,
    IngestTransactionsRequestSchema,
    TransactionStatsSchema,
)
from .score import (
    CreditScoreResponseSchema,
    ScoreComparisonSchema,
    ScoreCalculationResponseSchema,
    ScoreFactorSchema,
    ScoreHistoryResponseSchema,
    ScoreSummarySchema,
)
from .sufficiency import (
    DataRecommendationSchema,
    DataRequirementSchema,
    ImprovementPlanSchema,
    ProceedCheckSchema,
    SufficiencyReportSchema,
)

__all__ = [
    "FactorExplanationSchema",
    "ImprovementTipSchema",
    "ScoreBreakdownSchema",
    "ScoreHistoryPointSchema",
    "ScoreRangeSchema",
    "ErrorResponseSchema",
    "InsufficientDataErrorSchema",
    "IngestionStatsSchema",
    "IngestTransactionsRequestSchema",
    "TransactionStatsSchema",
    "CreditScoreResponseSchema",
    "ScoreComparisonSchema",
    "ScoreCalculationResponseSchema",
    "ScoreFactorSchema",
    "ScoreHistoryResponseSchema",
    "ScoreSummarySchema",
    "DataRecommendationSchema",
    "DataRequirementSchema",
    "ImprovementPlanSchema",
    "ProceedCheckSchema",
    "SufficiencyReportSchema",
]
