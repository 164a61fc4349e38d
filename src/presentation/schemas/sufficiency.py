"""Data-sufficiency Pydantic schemas."""

from pydantic import BaseModel, Field


class DataRequirementSchema(BaseModel):
    key: str = Field(..., description="Requirement identifier", examples=["transaction_history"])
    name: str = Field(..., description="Display name", examples=["Transaction History"])
    category: str = Field(..., description="Requirement group", examples=["transactions"])
    current: int = Field(..., ge=0, description="Observed value")
    required: int = Field(..., ge=0, description="Configured minimum")
    weight: float = Field(..., ge=0, le=1, description="Weight in the quality score")
    met: bool = Field(..., description="Whether current >= required")


class DataRecommendationSchema(BaseModel):
    priority: str = Field(..., description="high, medium or low")
    title: str
    description: str
    action_items: list[str]
    potential_impact: int = Field(..., ge=0, description="Estimated quality-score gain")


class SufficiencyReportSchema(BaseModel):
    """Schema for GET /v1/users/{user_id}/data-sufficiency response."""

    user_id: str = Field(..., description="The user's identifier")
    sufficient: bool = Field(..., description="Whether every requirement is met")
    quality_score: int = Field(..., ge=0, le=100, description="Weighted data-quality score")
    estimated_accuracy: float = Field(
        ...,
        ge=0,
        le=1,
        description="Expected accuracy of a score computed from this data",
    )
    requirements: list[DataRequirementSchema]
    recommendations: list[DataRecommendationSchema] = Field(
        ...,
        description="At most five recommendations, most important first",
    )


class ProceedCheckSchema(BaseModel):
    """Schema for GET /v1/users/{user_id}/data-sufficiency/can-proceed response."""

    user_id: str
    can_proceed: bool = Field(..., description="Whether scoring may run")
    reason: str | None = Field(None, description="Why scoring is blocked")
    unmet_requirements: list[str] = Field(
        default_factory=list,
        description="Unmet critical requirements as 'Name: current/required'",
    )


class ImprovementPlanSchema(BaseModel):
    """Schema for GET /v1/users/{user_id}/data-sufficiency/improvements response."""

    user_id: str
    current_score: int = Field(..., ge=0, le=100, description="Current data-quality score")
    target_score: int = Field(..., ge=0, le=100, description="Target data-quality score")
    suggestions: list[DataRecommendationSchema]
    estimated_timeframe: str = Field(..., examples=["2-4 weeks"])
