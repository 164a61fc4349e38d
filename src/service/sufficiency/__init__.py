"""
Data Sufficiency Module: gating and data-quality guidance
"""

from .settings import SufficiencySettings, sufficiency_settings
from .models import (
    DataRecommendation,
    DataRequirement,
    ImprovementPlan,
    Priority,
    ProceedCheck,
    SufficiencyReport,
)
from .evaluator import (
    calculate_quality_score,
    check_can_proceed,
    estimate_accuracy,
    evaluate_requirements,
    evaluate_sufficiency,
    plan_improvements,
)

__all__ = [
    "SufficiencySettings",
    "sufficiency_settings",
    "DataRecommendation",
    "DataRequirement",
    "ImprovementPlan",
    "Priority",
    "ProceedCheck",
    "SufficiencyReport",
    "calculate_quality_score",
    "check_can_proceed",
    "estimate_accuracy",
    "evaluate_requirements",
    "evaluate_sufficiency",
    "plan_improvements",
]
