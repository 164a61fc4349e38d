"""Data models for data-sufficiency evaluation. None of these are persisted."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        return {"high": 3, "medium": 2, "low": 1}[self.value]


@dataclass(frozen=True)
class DataRequirement:
    """
    One weighted data requirement.

    Attributes:
        key: Stable identifier (e.g. "transaction_history")
        name: Display name
        category: Group the requirement belongs to
        current: Observed value
        required: Configured minimum
        weight: Importance in the quality score
    """

    key: str
    name: str
    category: str
    current: int
    required: int
    weight: float

    @property
    def met(self) -> bool:
        return self.current >= self.required

    @property
    def completion(self) -> float:
        """Fraction of the requirement satisfied, capped at 1."""
        if self.required <= 0:
            return 1.0
        return min(self.current / self.required, 1.0)

    def summary(self) -> str:
        return f"{self.name}: {self.current}/{self.required}"


@dataclass(frozen=True)
class DataRecommendation:
    """Advice for improving the data available for scoring."""

    priority: Priority
    title: str
    description: str
    action_items: List[str]
    potential_impact: int


@dataclass(frozen=True)
class SufficiencyReport:
    """Result of evaluating a user's data against the requirements."""

    requirements: List[DataRequirement]
    quality_score: int
    recommendations: List[DataRecommendation]
    estimated_accuracy: float

    @property
    def sufficient(self) -> bool:
        return all(r.met for r in self.requirements)


@dataclass(frozen=True)
class ProceedCheck:
    """Whether scoring may run, and which critical requirements block it."""

    can_proceed: bool
    unmet_requirements: List[str] = field(default_factory=list)

    @property
    def reason(self) -> str | None:
        return None if self.can_proceed else "Critical data requirements not met"


@dataclass(frozen=True)
class ImprovementPlan:
    """How far the data quality is from the target and how to close the gap."""

    current_score: int
    target_score: int
    suggestions: List[DataRecommendation]
    estimated_timeframe: str
