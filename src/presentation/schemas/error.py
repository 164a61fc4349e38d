"""Pydantic schema for API error responses."""

from pydantic import BaseModel, Field


class ErrorResponseSchema(BaseModel):
    """Standard error response format for all API errors."""
    error: str = Field(
        ...,
        description="Error code",
        examples=["SCORE_NOT_FOUND"],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
        examples=["No credit score found for user: 550e8400-e29b-41d4-a716-446655440000"],
    )
    request_id: str | None = Field(
        None,
        description="Request ID for tracing",
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "error": "SCORE_NOT_FOUND",
                    "message": "No credit score found for user: 550e8400-e29b-41d4-a716-446655440000",
                    "request_id": "abc123",
                }
            ]
        }
    }


class InsufficientDataErrorSchema(ErrorResponseSchema):
    """Error returned when scoring is blocked by missing data."""

    unmet_requirements: list[str] = Field(
        default_factory=list,
        description="Critical requirements that are not met, as 'Name: current/required'",
        examples=[["Transaction History: 12/50"]],
    )
