"""
Score explanation generation.

Builds the human-readable breakdown of a user's latest snapshot: one
narrative per factor, the score history with reasons for each change,
and a short ranked list of improvement tips.
"""

from datetime import datetime, timedelta, timezone
from typing import List, Optional, Sequence

from src.domain.entities import CreditScoreSnapshot, ScoreFactor
from src.service.scoring.descriptions import current_value
from src.service.scoring.settings import scoring_settings

from .models import (
    FactorExplanation,
    ImprovementTip,
    ScoreBreakdown,
    ScoreHistoryPoint,
    ScoreRange,
)
from .templates import (
    ACTION_BANDS,
    CHANGE_REASONS,
    EXPLANATION_BANDS,
    FACTOR_NAMES,
    FACTOR_TIPS,
    GENERAL_TIPS,
    SCORE_RANGES,
)

REVIEW_INTERVAL = timedelta(days=30)
MAX_TIPS = 5
TIP_IMPACT_CEILING = 10


def explain_factor(factor: ScoreFactor, currency: str = scoring_settings.currency_symbol) -> FactorExplanation:
    """Attach the banded explanation and actions to one factor."""
    explanation = ""
    for lower_bound, text in EXPLANATION_BANDS[factor.category]:
        if lower_bound is None or factor.impact > lower_bound:
            explanation = text
            break

    actions: List[str] = []
    for upper_bound, band_actions in ACTION_BANDS[factor.category]:
        if upper_bound is None or factor.impact < upper_bound:
            actions = list(band_actions)
            break

    return FactorExplanation(
        category=factor.category,
        name=FACTOR_NAMES[factor.category],
        impact=factor.impact,
        weight=factor.weight,
        current_value=current_value(factor.category, factor.description, currency),
        description=factor.description,
        explanation=explanation,
        improvement_actions=actions,
    )


def change_reason(change: int) -> Optional[str]:
    """Qualitative reason for a score change; None when the change is small."""
    for bound, reason in CHANGE_REASONS:
        if bound > 0 and change > bound:
            return reason
        if bound < 0 and change < bound:
            return reason
    return None


def build_historical_trend(history: Sequence[CreditScoreSnapshot]) -> List[ScoreHistoryPoint]:
    """
    Score series with the change from the next-older snapshot.

    Args:
        history: Snapshots, most recent first

    Returns:
        One point per snapshot in the same order; the oldest has change 0
    """
    points: List[ScoreHistoryPoint] = []
    for index, snapshot in enumerate(history):
        previous = history[index + 1] if index + 1 < len(history) else None
        change = snapshot.score - previous.score if previous else 0
        points.append(
            ScoreHistoryPoint(
                date=snapshot.created_at,
                score=snapshot.score,
                change=change,
                reason=change_reason(change),
            )
        )
    return points


def build_improvement_tips(factors: Sequence[ScoreFactor]) -> List[ImprovementTip]:
    """Top tips: one per weak factor plus general advice, high priority first."""
    tips: List[ImprovementTip] = [
        FACTOR_TIPS[f.category]
        for f in factors
        if f.impact <= TIP_IMPACT_CEILING and f.category in FACTOR_TIPS
    ]
    tips.extend(GENERAL_TIPS)

    ranked = sorted(
        tips,
        key=lambda t: (t.priority.rank, t.potential_impact),
        reverse=True,
    )
    return ranked[:MAX_TIPS]


def score_range(score: int) -> ScoreRange:
    """Named band for a score."""
    for lower, upper, name in SCORE_RANGES:
        if score >= lower:
            return ScoreRange(min=lower, max=upper, category=name)
    lower, upper, name = SCORE_RANGES[-1]
    return ScoreRange(min=lower, max=upper, category=name)


def explain(
    latest: CreditScoreSnapshot,
    history: Sequence[CreditScoreSnapshot],
    now: Optional[datetime] = None,
    currency: str = scoring_settings.currency_symbol,
) -> ScoreBreakdown:
    """
    Build the full breakdown of a snapshot.

    Args:
        latest: The snapshot to explain
        history: Snapshots for the trend, most recent first
        now: Reference time for the next review date

    Returns:
        ScoreBreakdown with factors ordered by absolute impact
    """
    now = now or datetime.now(timezone.utc)
    factors = sorted(
        (explain_factor(f, currency) for f in latest.factors),
        key=lambda f: abs(f.impact),
        reverse=True,
    )

    return ScoreBreakdown(
        user_id=latest.user_id,
        current_score=latest.score,
        confidence=latest.confidence,
        score_range=score_range(latest.score),
        factors=factors,
        historical_trend=build_historical_trend(history),
        improvement_tips=build_improvement_tips(latest.factors),
        next_review_date=now + REVIEW_INTERVAL,
    )
