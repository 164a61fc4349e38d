"""Data-sufficiency API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from src.application.services import ScoringService
from src.core.dependencies import get_scoring_service
from src.presentation.schemas import (
    DataRecommendationSchema,
    DataRequirementSchema,
    ErrorResponseSchema,
    ImprovementPlanSchema,
    ProceedCheckSchema,
    SufficiencyReportSchema,
)
from src.service.sufficiency import DataRecommendation

from .transactions import UserId

sufficiency_router = APIRouter(
    prefix="/users/{user_id}/data-sufficiency",
    responses={
        503: {"model": ErrorResponseSchema, "description": "Storage unavailable"},
    },
)


def _recommendation_schema(rec: DataRecommendation) -> DataRecommendationSchema:
    return DataRecommendationSchema(
        priority=rec.priority.value,
        title=rec.title,
        description=rec.description,
        action_items=list(rec.action_items),
        potential_impact=rec.potential_impact,
    )


@sufficiency_router.get(
    "",
    response_model=SufficiencyReportSchema,
    summary="Evaluate Data Sufficiency",
    description="""
    Evaluate whether the user's connected data supports a reliable score.

    Returns every requirement with its observed and required value, a
    weighted data-quality score and the most important recommendations.
    """,
)
async def get_data_sufficiency(
    user_id: UserId,
    scoring_service: Annotated[ScoringService, Depends(get_scoring_service)],
) -> SufficiencyReportSchema:
    report = await scoring_service.evaluate_sufficiency(user_id)

    return SufficiencyReportSchema(
        user_id=user_id,
        sufficient=report.sufficient,
        quality_score=report.quality_score,
        estimated_accuracy=report.estimated_accuracy,
        requirements=[
            DataRequirementSchema(
                key=r.key,
                name=r.name,
                category=r.category,
                current=r.current,
                required=r.required,
                weight=r.weight,
                met=r.met,
            )
            for r in report.requirements
        ],
        recommendations=[_recommendation_schema(r) for r in report.recommendations],
    )


@sufficiency_router.get(
    "/can-proceed",
    response_model=ProceedCheckSchema,
    summary="Check Scoring Gate",
    description="Check whether the critical data requirements for scoring are met.",
)
async def get_can_proceed(
    user_id: UserId,
    scoring_service: Annotated[ScoringService, Depends(get_scoring_service)],
) -> ProceedCheckSchema:
    check = await scoring_service.check_can_proceed(user_id)

    return ProceedCheckSchema(
        user_id=user_id,
        can_proceed=check.can_proceed,
        reason=check.reason,
        unmet_requirements=list(check.unmet_requirements),
    )


@sufficiency_router.get(
    "/improvements",
    response_model=ImprovementPlanSchema,
    summary="Get Data Improvement Plan",
    description="Suggestions for raising the user's data quality to the target score.",
)
async def get_improvements(
    user_id: UserId,
    scoring_service: Annotated[ScoringService, Depends(get_scoring_service)],
) -> ImprovementPlanSchema:
    plan = await scoring_service.get_improvement_plan(user_id)

    return ImprovementPlanSchema(
        user_id=user_id,
        current_score=plan.current_score,
        target_score=plan.target_score,
        suggestions=[_recommendation_schema(r) for r in plan.suggestions],
        estimated_timeframe=plan.estimated_timeframe,
    )
