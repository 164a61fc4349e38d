"""Credit score Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field


class ScoreFactorSchema(BaseModel):
    """Schema for one factor of a credit score."""

    category: str = Field(
        ...,
        description="Factor dimension",
        examples=["income_stability"],
    )
    impact: int = Field(
        ...,
        ge=-100,
        le=100,
        description="Contribution relative to the midpoint of the scale",
        examples=[42],
    )
    weight: float = Field(
        ...,
        ge=0,
        le=1,
        description="Weight of the factor in the score",
        examples=[0.35],
    )
    description: str = Field(
        ...,
        description="Human-readable summary of the factor",
        examples=["Monthly income: ₹85,000, Consistency: 12 months"],
    )


class CreditScoreResponseSchema(BaseModel):
    """Schema for a credit score snapshot."""

    score_id: str = Field(..., description="UUID of the snapshot")
    user_id: str = Field(..., description="The user's identifier")
    score: int = Field(
        ...,
        ge=300,
        le=850,
        description="Credit score on the 300-850 scale",
        examples=[712],
    )
    confidence: float = Field(
        ...,
        ge=0,
        le=1,
        description="Confidence in the score given the data available",
        examples=[0.8],
    )
    trend: str = Field(
        ...,
        description="Direction against the previous score",
        examples=["improving"],
    )
    factors: list[ScoreFactorSchema] = Field(
        ...,
        description="Factors ordered by weight, highest first",
    )
    created_at: str = Field(..., description="ISO 8601 timestamp of the snapshot")

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "score_id": "550e8400-e29b-41d4-a716-446655440000",
                    "user_id": "550e8400-e29b-41d4-a716-446655440001",
                    "score": 712,
                    "confidence": 0.8,
                    "trend": "stable",
                    "factors": [
                        {
                            "category": "income_stability",
                            "impact": 42,
                            "weight": 0.35,
                            "description": "Monthly income: ₹85,000, Consistency: 12 months",
                        }
                    ],
                    "created_at": "2025-09-17T12:00:00+00:00",
                }
            ]
        }
    )


class ScoreCalculationResponseSchema(CreditScoreResponseSchema):
    """Schema for POST /v1/users/{user_id}/score response."""

    recommendations: list[str] = Field(
        default_factory=list,
        description="Plain-language suggestions for improving the score",
    )


class ScoreSummarySchema(BaseModel):
    """Schema for a snapshot summary in history."""

    score_id: str = Field(..., description="UUID of the snapshot")
    score: int = Field(..., ge=300, le=850, description="Credit score")
    confidence: float = Field(..., ge=0, le=1, description="Confidence in the score")
    trend: str = Field(..., description="Direction against the previous score")
    created_at: str = Field(..., description="ISO 8601 timestamp of the snapshot")


class ScoreHistoryResponseSchema(BaseModel):
    """Schema for GET /v1/users/{user_id}/score/history response."""

    user_id: str = Field(..., description="The user's identifier")
    scores: list[ScoreSummarySchema] = Field(
        ...,
        description="Past snapshots, newest first",
    )


class ScoreComparisonSchema(BaseModel):
    """Schema for GET /v1/users/{user_id}/score/comparison response."""

    user_id: str = Field(..., description="The user's identifier")
    user_score: int = Field(..., ge=300, le=850, description="The user's latest score")
    average_score: int = Field(..., description="Mean of all scores in the window")
    percentile: int = Field(..., ge=0, le=100, description="Share of scores below the user's")
    better_than_percent: int = Field(..., ge=0, le=100, description="Same as percentile")
    peer_count: int = Field(..., ge=0, description="Scores in the window")
    window_days: int = Field(..., ge=1, description="Look-back window in days")
