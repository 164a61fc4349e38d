"""Data models for score explanations."""

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from src.domain.entities import FactorCategory
from src.service.sufficiency.models import Priority


@dataclass(frozen=True)
class ScoreRange:
    """Named band the score falls in."""

    min: int
    max: int
    category: str


@dataclass(frozen=True)
class FactorExplanation:
    """A factor with its narrative and suggested actions."""

    category: FactorCategory
    name: str
    impact: int
    weight: float
    current_value: str
    description: str
    explanation: str
    improvement_actions: List[str]


@dataclass(frozen=True)
class ScoreHistoryPoint:
    """One snapshot in the user's score history."""

    date: datetime
    score: int
    change: int
    reason: Optional[str] = None


@dataclass(frozen=True)
class ImprovementTip:
    """A ranked suggestion for raising the score."""

    category: str
    priority: Priority
    title: str
    description: str
    potential_impact: int
    timeframe: str
    action_items: List[str]


@dataclass(frozen=True)
class ScoreBreakdown:
    """Full explanation of a user's latest score."""

    user_id: str
    current_score: int
    confidence: float
    score_range: ScoreRange
    factors: List[FactorExplanation]
    historical_trend: List[ScoreHistoryPoint]
    improvement_tips: List[ImprovementTip]
    next_review_date: datetime
