"""Dependency injection for FastAPI."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.infrastructure.database import get_db_session
from src.infrastructure.repositories import (
    PostgresAccountRepository,
    PostgresScoreRepository,
    PostgresTransactionRepository,
)
from src.application.services import (
    ExplanationService,
    IngestionService,
    ScoringService,
)


# Repository dependencies
async def get_transaction_repository(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> PostgresTransactionRepository:
    """Get a TransactionRepository instance."""
    return PostgresTransactionRepository(session)


async def get_account_repository(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> PostgresAccountRepository:
    """Get an AccountRepository instance."""
    return PostgresAccountRepository(session)


async def get_score_repository(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> PostgresScoreRepository:
    """Get a ScoreRepository instance."""
    return PostgresScoreRepository(session)


# Service dependencies
async def get_ingestion_service(
    transaction_repo: Annotated[PostgresTransactionRepository, Depends(get_transaction_repository)],
    account_repo: Annotated[PostgresAccountRepository, Depends(get_account_repository)],
) -> IngestionService:
    """Get an IngestionService instance."""
    return IngestionService(
        transaction_repository=transaction_repo,
        account_repository=account_repo,
    )


async def get_scoring_service(
    transaction_repo: Annotated[PostgresTransactionRepository, Depends(get_transaction_repository)],
    account_repo: Annotated[PostgresAccountRepository, Depends(get_account_repository)],
    score_repo: Annotated[PostgresScoreRepository, Depends(get_score_repository)],
) -> ScoringService:
    """Get a ScoringService instance with all dependencies."""
    return ScoringService(
        transaction_repository=transaction_repo,
        account_repository=account_repo,
        score_repository=score_repo,
    )


async def get_explanation_service(
    score_repo: Annotated[PostgresScoreRepository, Depends(get_score_repository)],
) -> ExplanationService:
    """Get an ExplanationService instance."""
    return ExplanationService(score_repository=score_repo)
