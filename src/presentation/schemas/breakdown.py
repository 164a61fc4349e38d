"""Score breakdown Pydantic schemas."""

from pydantic import BaseModel, Field


class ScoreRangeSchema(BaseModel):
    min: int
    max: int
    category: str = Field(..., examples=["Very Good"])


class FactorExplanationSchema(BaseModel):
    category: str = Field(..., examples=["payment_behavior"])
    name: str = Field(..., examples=["Payment Behavior"])
    impact: int
    weight: float
    current_value: str = Field(..., examples=["94%"])
    description: str
    explanation: str
    improvement_actions: list[str]


class ScoreHistoryPointSchema(BaseModel):
    date: str = Field(..., description="ISO 8601 timestamp of the snapshot")
    score: int
    change: int = Field(..., description="Difference from the previous snapshot")
    reason: str | None = None


class ImprovementTipSchema(BaseModel):
    category: str
    priority: str
    title: str
    description: str
    potential_impact: int
    timeframe: str
    action_items: list[str]


class ScoreBreakdownSchema(BaseModel):
    """Schema for GET /v1/users/{user_id}/score/breakdown response."""

    user_id: str
    current_score: int = Field(..., ge=300, le=850)
    confidence: float = Field(..., ge=0, le=1)
    score_range: ScoreRangeSchema
    factors: list[FactorExplanationSchema] = Field(
        ...,
        description="Factors ordered by absolute impact, largest first",
    )
    historical_trend: list[ScoreHistoryPointSchema] = Field(
        ...,
        description="Snapshots newest first",
    )
    improvement_tips: list[ImprovementTipSchema] = Field(
        ...,
        description="At most five tips, most important first",
    )
    next_review_date: str = Field(..., description="ISO 8601 date of the next review")
