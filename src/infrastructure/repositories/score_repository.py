"""PostgreSQL implementation of ScoreRepository."""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import case, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from src.domain.entities import (
    CreditScoreSnapshot,
    FactorCategory,
    PeerStatistics,
    ScoreFactor,
    ScoreTrend,
)
from src.domain.exceptions import PersistenceException
from src.domain.interfaces import ScoreRepository
from src.infrastructure.database.models import CreditScoreModel, ScoreFactorModel

from .transaction_repository import as_utc


class PostgresScoreRepository(ScoreRepository):
    """
    PostgreSQL implementation of the credit score repository.

    A snapshot and its factors are written inside one SAVEPOINT: either
    all rows reach the session or none do.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def save(self, snapshot: CreditScoreSnapshot) -> CreditScoreSnapshot:
        """Persist a snapshot with its factors atomically."""
        model = CreditScoreModel(
            id=str(snapshot.id),
            user_id=snapshot.user_id,
            score=snapshot.score,
            confidence=snapshot.confidence,
            trend=snapshot.trend.value,
            created_at=snapshot.created_at,
        )
        for position, factor in enumerate(snapshot.factors):
            model.factors.append(
                ScoreFactorModel(
                    position=position,
                    category=factor.category.value,
                    impact=factor.impact,
                    weight=factor.weight,
                    description=factor.description,
                )
            )

        try:
            async with self._session.begin_nested():
                self._session.add(model)
                await self._session.flush()
        except SQLAlchemyError as e:
            raise PersistenceException(
                message=f"Failed to store credit score: {type(e).__name__}",
                operation="save_score",
            ) from e

        return snapshot

    async def get_latest(self, user_id: str) -> Optional[CreditScoreSnapshot]:
        """Retrieve the most recent snapshot for a user."""
        history = await self.list_history(user_id, limit=1)
        return history[0] if history else None

    async def list_history(self, user_id: str, limit: int = 12) -> List[CreditScoreSnapshot]:
        """Retrieve snapshots for a user, ordered by created_at descending."""
        stmt = (
            select(CreditScoreModel)
            .options(selectinload(CreditScoreModel.factors))
            .where(CreditScoreModel.user_id == user_id)
            .order_by(CreditScoreModel.created_at.desc())
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        models = result.scalars().all()

        return [self._to_entity(model) for model in models]

    async def peer_statistics(self, score: int, since: datetime) -> PeerStatistics:
        """Count, average and lower count over all snapshots since the cutoff."""
        stmt = select(
            func.count(CreditScoreModel.id),
            func.avg(CreditScoreModel.score),
            func.count(case((CreditScoreModel.score < score, 1))),
        ).where(CreditScoreModel.created_at >= since)
        count, average, lower_count = (await self._session.execute(stmt)).one()

        return PeerStatistics(
            count=count,
            average=float(average) if average is not None else None,
            lower_count=lower_count,
        )

    def _to_entity(self, model: CreditScoreModel) -> CreditScoreSnapshot:
        """Convert database model to domain entity."""
        return CreditScoreSnapshot(
            id=UUID(model.id),
            user_id=model.user_id,
            score=model.score,
            confidence=model.confidence,
            trend=ScoreTrend(model.trend),
            factors=[
                ScoreFactor(
                    category=FactorCategory(f.category),
                    impact=f.impact,
                    weight=f.weight,
                    description=f.description,
                )
                for f in model.factors
            ],
            created_at=as_utc(model.created_at),
        )
