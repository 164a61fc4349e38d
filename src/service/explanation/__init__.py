"""
Score Explanation Module: factor narratives, history and improvement tips
"""

from .models import (
    FactorExplanation,
    ImprovementTip,
    ScoreBreakdown,
    ScoreHistoryPoint,
    ScoreRange,
)
from .explainer import (
    build_historical_trend,
    build_improvement_tips,
    change_reason,
    explain,
    explain_factor,
    score_range,
)

__all__ = [
    "FactorExplanation",
    "ImprovementTip",
    "ScoreBreakdown",
    "ScoreHistoryPoint",
    "ScoreRange",
    "build_historical_trend",
    "build_improvement_tips",
    "change_reason",
    "explain",
    "explain_factor",
    "score_range",
]
