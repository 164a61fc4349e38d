"""Credit score snapshot and its explanatory factors."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional
from uuid import UUID, uuid4


class FactorCategory(str, Enum):
    """Financial-behavior dimension scored by one analyzer."""

    INCOME_STABILITY = "income_stability"
    PAYMENT_BEHAVIOR = "payment_behavior"
    SAVINGS_RATE = "savings_rate"
    INVESTMENT_ACTIVITY = "investment_activity"


class ScoreTrend(str, Enum):
    """Direction of the score compared with earlier snapshots."""

    IMPROVING = "improving"
    STABLE = "stable"
    DECLINING = "declining"


@dataclass(frozen=True)
class ScoreFactor:
    """
    Persisted, externally visible contribution of one dimension.

    Attributes:
        category: The dimension this factor describes
        impact: Signed relative contribution, -100 to +100
        weight: Fixed weight of the dimension, 0 to 1
        description: Human-readable summary of the observations
    """

    category: FactorCategory
    impact: int
    weight: float
    description: str

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "category": self.category.value,
            "impact": self.impact,
            "weight": self.weight,
            "description": self.description,
        }


@dataclass(frozen=True)
class CreditScoreSnapshot:
    """
    Output of one successful scoring run.

    Snapshots are immutable and append-only per user; the most recent
    one by created_at is the authoritative current score.
    """

    user_id: str
    score: int
    confidence: float
    trend: ScoreTrend
    factors: List[ScoreFactor]
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def factor_for(self, category: FactorCategory) -> ScoreFactor | None:
        """Return the factor for a category, if present."""
        for factor in self.factors:
            if factor.category == category:
                return factor
        return None

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "score_id": str(self.id),
            "user_id": self.user_id,
            "score": self.score,
            "confidence": self.confidence,
            "trend": self.trend.value,
            "factors": [f.to_dict() for f in self.factors],
            "created_at": self.created_at.isoformat(),
        }


@dataclass(frozen=True)
class PeerStatistics:
    """
    Aggregate over every snapshot computed since a cutoff.

    Attributes:
        count: Number of snapshots in the window
        average: Mean score, None when the window is empty
        lower_count: Snapshots scoring strictly below the reference score
    """

    count: int
    average: Optional[float]
    lower_count: int
