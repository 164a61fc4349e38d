"""
Credit Scoring Module: factor analyzers, aggregation and recommendations
"""

from .settings import ScoringSettings, scoring_settings
from .models import FactorResult, ScoreAnalysis, ScoreCalculation
from .analyzers import (
    Analyzer,
    IncomeStabilityAnalyzer,
    InvestmentActivityAnalyzer,
    PaymentBehaviorAnalyzer,
    SavingsRateAnalyzer,
    classify_frequency,
    default_analyzers,
    monthly_totals,
)
from .aggregator import (
    aggregate,
    build_factors,
    calculate_confidence,
    calculate_weighted_score,
    determine_trend,
    factor_impact,
)
from .descriptions import current_value, describe, round_half_up, round_to_hundredths
from .recommendations import generate_recommendations

__all__ = [
    # Settings
    "ScoringSettings",
    "scoring_settings",
    # Models
    "FactorResult",
    "ScoreAnalysis",
    "ScoreCalculation",
    # Analyzers
    "Analyzer",
    "IncomeStabilityAnalyzer",
    "InvestmentActivityAnalyzer",
    "PaymentBehaviorAnalyzer",
    "SavingsRateAnalyzer",
    "classify_frequency",
    "default_analyzers",
    "monthly_totals",
    # Aggregation
    "aggregate",
    "build_factors",
    "calculate_confidence",
    "calculate_weighted_score",
    "determine_trend",
    "factor_impact",
    # Descriptions
    "current_value",
    "describe",
    "round_half_up",
    "round_to_hundredths",
    # Recommendations
    "generate_recommendations",
]
