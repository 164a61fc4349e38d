"""Data transfer objects for credit score operations."""

from dataclasses import dataclass
from typing import List

from src.domain.entities import CreditScoreSnapshot


@dataclass(frozen=True)
class ScoreSummary:
    """Brief summary of a snapshot for history listings."""

    score_id: str
    score: int
    confidence: float
    trend: str
    created_at: str


@dataclass(frozen=True)
class ScoreHistoryResponse:
    """Response containing a user's score history."""

    user_id: str
    scores: List[ScoreSummary]

    @classmethod
    def from_entities(
        cls,
        user_id: str,
        snapshots: List[CreditScoreSnapshot],
    ) -> "ScoreHistoryResponse":
        summaries = [
            ScoreSummary(
                score_id=str(s.id),
                score=s.score,
                confidence=s.confidence,
                trend=s.trend.value,
                created_at=s.created_at.isoformat(),
            )
            for s in snapshots
        ]
        return cls(user_id=user_id, scores=summaries)


@dataclass(frozen=True)
class ScoreComparison:
    """
    A user's latest score against every score computed in a recent window.

    percentile is the share of windowed snapshots scoring strictly lower,
    so better_than_percent carries the same value.
    """

    user_id: str
    user_score: int
    average_score: int
    percentile: int
    peer_count: int
    window_days: int

    @property
    def better_than_percent(self) -> int:
        return self.percentile
