"""
Score Aggregation for the alternative credit scoring engine.

Combines the four factor results into the final 300-850 score, estimates
how much the score can be trusted, derives the trend from earlier
snapshots and builds the ScoreFactor records that explain the score.
"""

import math
from typing import Dict, List, Sequence

from src.domain.entities import (
    CreditScoreSnapshot,
    FactorCategory,
    ScoreFactor,
    ScoreTrend,
)

from .descriptions import describe, round_half_up
from .models import FactorResult, ScoreAnalysis
from .settings import ScoringSettings, scoring_settings


def calculate_weighted_score(
    results: Dict[FactorCategory, FactorResult],
    settings: ScoringSettings = scoring_settings,
) -> int:
    """
    Combine the factor sub-scores into the final score.

    Algorithm:
        score = sum(sub_score x weight) over the four categories,
        rounded half-up and clamped to [300, 850]

    Args:
        results: One FactorResult per category
        settings: Scoring configuration (weights and score range)

    Returns:
        Final score within the configured range

    Raises:
        KeyError: If a category has no result
    """
    weighted = math.fsum(
        results[category].score * weight
        for category, weight in settings.weights.items()
    )
    score = round_half_up(weighted)
    return max(settings.score_floor, min(settings.score_ceiling, score))


def calculate_confidence(transaction_count: int, income: FactorResult) -> float:
    """
    Estimate how reliable a score is, from 0.5 up to 1.0.

    Algorithm:
        Start at 0.5, then add
        - volume: >500 transactions +0.3, >200 +0.2, >100 +0.1
        - income history: 6 or more months with income +0.1
        - income stability: variability below 0.3 +0.1
        and clamp to 1.0, rounded to 2 decimals.
    """
    confidence = 0.5

    if transaction_count > 500:
        confidence += 0.3
    elif transaction_count > 200:
        confidence += 0.2
    elif transaction_count > 100:
        confidence += 0.1

    if int(income.get("consistency_months")) >= 6:
        confidence += 0.1
    if float(income.get("income_variability", 1.0)) < 0.3:
        confidence += 0.1

    return round(min(1.0, confidence), 2)


def determine_trend(
    history: Sequence[CreditScoreSnapshot],
    settings: ScoringSettings = scoring_settings,
) -> ScoreTrend:
    """
    Derive the trend from the two most recent earlier snapshots.

    Args:
        history: Previous snapshots, most recent first

    Returns:
        IMPROVING if the latest beat the one before by more than the
        threshold, DECLINING if it fell by more, otherwise STABLE
        (including when fewer than two snapshots exist)
    """
    if len(history) < 2:
        return ScoreTrend.STABLE

    difference = history[0].score - history[1].score
    if difference > settings.trend_threshold:
        return ScoreTrend.IMPROVING
    if difference < -settings.trend_threshold:
        return ScoreTrend.DECLINING
    return ScoreTrend.STABLE


def factor_impact(sub_score: int, settings: ScoringSettings = scoring_settings) -> int:
    """Map a sub-score onto a signed impact, -50 at the floor to +50 at the ceiling."""
    relative = (sub_score - settings.score_floor) / settings.score_span
    impact = round_half_up(relative * 100 - 50)
    return max(-100, min(100, impact))


def build_factors(
    results: Dict[FactorCategory, FactorResult],
    settings: ScoringSettings = scoring_settings,
) -> List[ScoreFactor]:
    """Build the persisted factors, ordered by weight descending."""
    ordered = sorted(settings.weights.items(), key=lambda item: -item[1])
    return [
        ScoreFactor(
            category=category,
            impact=factor_impact(results[category].score, settings),
            weight=weight,
            description=describe(results[category], settings.currency_symbol),
        )
        for category, weight in ordered
    ]


def aggregate(
    user_id: str,
    analysis: ScoreAnalysis,
    history: Sequence[CreditScoreSnapshot],
    settings: ScoringSettings = scoring_settings,
) -> CreditScoreSnapshot:
    """
    Produce the snapshot for one scoring run.

    Args:
        user_id: The user being scored
        analysis: The four factor results and the transaction count
        history: Earlier snapshots, most recent first
        settings: Scoring configuration

    Returns:
        A new, not yet persisted CreditScoreSnapshot
    """
    return CreditScoreSnapshot(
        user_id=user_id,
        score=calculate_weighted_score(analysis.results, settings),
        confidence=calculate_confidence(analysis.transaction_count, analysis.income),
        trend=determine_trend(history, settings),
        factors=build_factors(analysis.results, settings),
    )
