"""
Data models for the scoring pipeline.

These models are ephemeral: they are recomputed on every scoring run and
only the ScoreFactor/CreditScoreSnapshot they produce are persisted.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, List, Mapping, Union

from src.domain.entities import CreditScoreSnapshot, FactorCategory

Observation = Union[float, int, str]


@dataclass(frozen=True)
class FactorResult:
    """
    Output of one analyzer.

    Attributes:
        category: The dimension analyzed
        score: Sub-score on the 300-850 scale
        observations: Named measurements used for descriptions,
            confidence and recommendations (e.g. monthly_income)
    """

    category: FactorCategory
    score: int
    observations: Mapping[str, Observation] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "observations", MappingProxyType(dict(self.observations)))

    def get(self, name: str, default: Observation = 0) -> Observation:
        """Read a named observation."""
        return self.observations.get(name, default)


@dataclass(frozen=True)
class ScoreAnalysis:
    """The four factor results of one scoring run."""

    results: Dict[FactorCategory, FactorResult]
    transaction_count: int

    def __getitem__(self, category: FactorCategory) -> FactorResult:
        return self.results[category]

    @property
    def income(self) -> FactorResult:
        return self.results[FactorCategory.INCOME_STABILITY]

    @property
    def savings(self) -> FactorResult:
        return self.results[FactorCategory.SAVINGS_RATE]

    @property
    def payment(self) -> FactorResult:
        return self.results[FactorCategory.PAYMENT_BEHAVIOR]

    @property
    def investment(self) -> FactorResult:
        return self.results[FactorCategory.INVESTMENT_ACTIVITY]


@dataclass(frozen=True)
class ScoreCalculation:
    """Everything produced by one scoring run."""

    snapshot: CreditScoreSnapshot
    analysis: ScoreAnalysis
    recommendations: List[str]
