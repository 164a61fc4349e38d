"""Transaction ingestion API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query

from src.application.services import IngestionService
from src.core.dependencies import get_ingestion_service
from src.core.metrics import record_ingestion, track_ingestion_latency
from src.presentation.schemas import (
    ErrorResponseSchema,
    IngestionStatsSchema,
    IngestTransactionsRequestSchema,
    TransactionStatsSchema,
)

UserId = Annotated[
    str,
    Path(min_length=1, max_length=255, description="The user's identifier"),
]

transactions_router = APIRouter(
    prefix="/users/{user_id}/transactions",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid request"},
        503: {"model": ErrorResponseSchema, "description": "Storage unavailable"},
    },
)


@transactions_router.post(
    "",
    response_model=IngestionStatsSchema,
    status_code=200,
    summary="Ingest Transactions",
    description="""
    Ingest a batch of raw transaction records for a user.

    Each record is validated on its own: malformed records and records for
    accounts the user has not connected are rejected and reported, the
    rest are deduplicated, categorized and stored.
    """,
)
async def ingest_transactions(
    user_id: UserId,
    request: IngestTransactionsRequestSchema,
    ingestion_service: Annotated[IngestionService, Depends(get_ingestion_service)],
) -> IngestionStatsSchema:
    with track_ingestion_latency():
        stats = await ingestion_service.ingest(user_id, request.transactions)

    record_ingestion(stats)

    return IngestionStatsSchema(**stats.to_dict())


@transactions_router.get(
    "/stats",
    response_model=TransactionStatsSchema,
    summary="Get Transaction Stats",
    description="""
    Summarize the user's stored transactions: totals, recently ingested
    count, categorized share, recurring count and the last account sync.
    """,
)
async def get_transaction_stats(
    user_id: UserId,
    days: Annotated[
        int,
        Query(ge=1, le=365, description="Window for the recently ingested count"),
    ] = 30,
    ingestion_service: Annotated[IngestionService, Depends(get_ingestion_service)] = None,
) -> TransactionStatsSchema:
    stats = await ingestion_service.get_stats(user_id, days)

    return TransactionStatsSchema(
        user_id=stats.user_id,
        total=stats.total,
        recent=stats.recent,
        categorized_percentage=stats.categorized_percentage,
        recurring=stats.recurring,
        last_synced_at=stats.last_synced_at.isoformat() if stats.last_synced_at else None,
        window_days=stats.window_days,
    )
