"""Transaction ingestion Pydantic schemas."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class IngestTransactionsRequestSchema(BaseModel):
    """
    Schema for POST /v1/users/{user_id}/transactions request body.

    Records are kept loosely typed so that a malformed record is rejected
    and counted on its own instead of failing the whole batch.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "transactions": [
                        {
                            "account_id": "6f1c2a4e-8f3b-4d5a-9c7e-1b2d3e4f5a6b",
                            "amount": 85000,
                            "direction": "credit",
                            "occurred_at": "2025-09-01T09:00:00Z",
                            "description": "SALARY CREDIT ACME CORP",
                            "merchant": None,
                            "balance": 142000,
                        }
                    ]
                }
            ]
        }
    )

    transactions: list[Any] = Field(
        ...,
        max_length=5000,
        description="Raw transaction records from a connected account",
    )


class IngestionStatsSchema(BaseModel):
    """Schema for the ingestion response."""

    processed: int = Field(..., ge=0, description="Records received")
    accepted: int = Field(..., ge=0, description="Records that passed validation")
    rejected: int = Field(..., ge=0, description="Malformed or unowned records")
    duplicates: int = Field(..., ge=0, description="Records already stored")
    categorized: int = Field(..., ge=0, description="New records assigned a category")
    recurring: int = Field(..., ge=0, description="New records flagged as recurring")
    stored: int = Field(..., ge=0, description="Records written")
    failed: int = Field(..., ge=0, description="Records in chunks that failed to write")
    duration_ms: float = Field(..., ge=0, description="Processing time in milliseconds")
    errors: list[str] = Field(
        default_factory=list,
        description="One message per rejected record",
        examples=[["Record 3: amount is required and must be a finite number"]],
    )


class TransactionStatsSchema(BaseModel):
    """Schema for GET /v1/users/{user_id}/transactions/stats response."""

    user_id: str = Field(..., description="The user's identifier")
    total: int = Field(..., ge=0, description="Stored transactions")
    recent: int = Field(..., ge=0, description="Transactions ingested within the window")
    categorized_percentage: float = Field(
        ..., ge=0, le=100, description="Share of stored transactions with a category"
    )
    recurring: int = Field(..., ge=0, description="Transactions flagged as recurring")
    last_synced_at: str | None = Field(
        None, description="ISO 8601 time of the most recent account sync"
    )
    window_days: int = Field(..., ge=1, description="Window for the recent count")
