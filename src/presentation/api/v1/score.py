"""Credit score API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from src.application.services import ExplanationService, ScoringService
from src.core.dependencies import get_explanation_service, get_scoring_service
from src.core.metrics import (
    record_score_band,
    record_score_calculation,
    track_scoring_latency,
)
from src.domain.entities import CreditScoreSnapshot
from src.domain.exceptions import InsufficientDataException
from src.presentation.schemas import (
    CreditScoreResponseSchema,
    ErrorResponseSchema,
    FactorExplanationSchema,
    ImprovementTipSchema,
    InsufficientDataErrorSchema,
    ScoreBreakdownSchema,
    ScoreComparisonSchema,
    ScoreCalculationResponseSchema,
    ScoreFactorSchema,
    ScoreHistoryPointSchema,
    ScoreHistoryResponseSchema,
    ScoreRangeSchema,
    ScoreSummarySchema,
)

from .transactions import UserId

score_router = APIRouter(
    prefix="/users/{user_id}/score",
    responses={
        404: {"model": ErrorResponseSchema, "description": "No score for user"},
        503: {"model": ErrorResponseSchema, "description": "Storage unavailable"},
    },
)


def _snapshot_fields(snapshot: CreditScoreSnapshot) -> dict:
    return dict(
        score_id=str(snapshot.id),
        user_id=snapshot.user_id,
        score=snapshot.score,
        confidence=snapshot.confidence,
        trend=snapshot.trend.value,
        factors=[
            ScoreFactorSchema(
                category=f.category.value,
                impact=f.impact,
                weight=f.weight,
                description=f.description,
            )
            for f in snapshot.factors
        ],
        created_at=snapshot.created_at.isoformat(),
    )


@score_router.post(
    "",
    response_model=ScoreCalculationResponseSchema,
    status_code=201,
    summary="Compute Credit Score",
    description="""
    Compute and store a new credit score from the user's transaction history.

    Scoring is refused with 422 when a critical data requirement is not met.
    """,
    responses={
        422: {"model": InsufficientDataErrorSchema, "description": "Insufficient data"},
    },
)
async def compute_score(
    user_id: UserId,
    scoring_service: Annotated[ScoringService, Depends(get_scoring_service)],
) -> ScoreCalculationResponseSchema:
    try:
        with track_scoring_latency():
            calculation = await scoring_service.compute_score(user_id)
    except InsufficientDataException:
        record_score_calculation("insufficient_data")
        raise
    except Exception:
        record_score_calculation("error")
        raise

    # Record business metrics
    record_score_calculation("success")
    record_score_band(calculation.snapshot.score)

    return ScoreCalculationResponseSchema(
        **_snapshot_fields(calculation.snapshot),
        recommendations=list(calculation.recommendations),
    )


@score_router.get(
    "/latest",
    response_model=CreditScoreResponseSchema,
    summary="Get Current Score",
    description="Return the user's most recent credit score snapshot.",
)
async def get_latest_score(
    user_id: UserId,
    scoring_service: Annotated[ScoringService, Depends(get_scoring_service)],
) -> CreditScoreResponseSchema:
    snapshot = await scoring_service.get_latest(user_id)
    return CreditScoreResponseSchema(**_snapshot_fields(snapshot))


@score_router.get(
    "/history",
    response_model=ScoreHistoryResponseSchema,
    summary="Get Score History",
    description="""
    Retrieve the score history for a user.

    Returns past snapshots ordered by date (newest first).
    """,
)
async def get_score_history(
    user_id: UserId,
    limit: Annotated[
        int,
        Query(ge=1, le=100, description="Maximum number of snapshots to return"),
    ] = 12,
    scoring_service: Annotated[ScoringService, Depends(get_scoring_service)] = None,
) -> ScoreHistoryResponseSchema:
    response = await scoring_service.get_history(user_id, limit)

    return ScoreHistoryResponseSchema(
        user_id=response.user_id,
        scores=[
            ScoreSummarySchema(
                score_id=s.score_id,
                score=s.score,
                confidence=s.confidence,
                trend=s.trend,
                created_at=s.created_at,
            )
            for s in response.scores
        ],
    )


@score_router.get(
    "/breakdown",
    response_model=ScoreBreakdownSchema,
    summary="Explain Score",
    description="""
    Explain the user's latest score: per-factor narratives and actions,
    the score history and ranked improvement tips.
    """,
)
async def get_score_breakdown(
    user_id: UserId,
    explanation_service: Annotated[ExplanationService, Depends(get_explanation_service)],
) -> ScoreBreakdownSchema:
    breakdown = await explanation_service.explain_score(user_id)

    return ScoreBreakdownSchema(
        user_id=breakdown.user_id,
        current_score=breakdown.current_score,
        confidence=breakdown.confidence,
        score_range=ScoreRangeSchema(
            min=breakdown.score_range.min,
            max=breakdown.score_range.max,
            category=breakdown.score_range.category,
        ),
        factors=[
            FactorExplanationSchema(
                category=f.category.value,
                name=f.name,
                impact=f.impact,
                weight=f.weight,
                current_value=f.current_value,
                description=f.description,
                explanation=f.explanation,
                improvement_actions=list(f.improvement_actions),
            )
            for f in breakdown.factors
        ],
        historical_trend=[
            ScoreHistoryPointSchema(
                date=p.date.isoformat(),
                score=p.score,
                change=p.change,
                reason=p.reason,
            )
            for p in breakdown.historical_trend
        ],
        improvement_tips=[
            ImprovementTipSchema(
                category=t.category,
                priority=t.priority.value,
                title=t.title,
                description=t.description,
                potential_impact=t.potential_impact,
                timeframe=t.timeframe,
                action_items=list(t.action_items),
            )
            for t in breakdown.improvement_tips
        ],
        next_review_date=breakdown.next_review_date.isoformat(),
    )


@score_router.get(
    "/comparison",
    response_model=ScoreComparisonSchema,
    summary="Compare With Peers",
    description="""
    Place the user's latest score among every score computed in the last
    30 days: the average and the percentile of scores below it.
    """,
)
async def get_score_comparison(
    user_id: UserId,
    explanation_service: Annotated[ExplanationService, Depends(get_explanation_service)],
) -> ScoreComparisonSchema:
    comparison = await explanation_service.compare_with_peers(user_id)

    return ScoreComparisonSchema(
        user_id=comparison.user_id,
        user_score=comparison.user_score,
        average_score=comparison.average_score,
        percentile=comparison.percentile,
        better_than_percent=comparison.better_than_percent,
        peer_count=comparison.peer_count,
        window_days=comparison.window_days,
    )
