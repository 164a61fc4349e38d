"""PostgreSQL implementation of TransactionRepository."""

from datetime import datetime, timezone
from typing import List, Optional, Sequence
from uuid import UUID

from sqlalchemy import case, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities import (
    Transaction,
    TransactionCategory,
    TransactionDirection,
    TransactionSummary,
)
from src.domain.exceptions import PersistenceException
from src.domain.interfaces import TransactionRepository
from src.infrastructure.database.models import AccountModel, TransactionModel


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive values returned by drivers without timezone support."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class PostgresTransactionRepository(TransactionRepository):
    """
    PostgreSQL implementation of the Transaction repository.

    Uses SQLAlchemy async session for database operations.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def list_for_user(
        self,
        user_id: str,
        date_from: Optional[datetime] = None,
        date_to: Optional[datetime] = None,
    ) -> List[Transaction]:
        """Retrieve a user's transactions, oldest first."""
        stmt = (
            select(TransactionModel)
            .join(AccountModel, TransactionModel.account_id == AccountModel.id)
            .where(AccountModel.user_id == user_id)
            .order_by(TransactionModel.occurred_at.asc())
        )
        if date_from is not None:
            stmt = stmt.where(TransactionModel.occurred_at >= date_from)
        if date_to is not None:
            stmt = stmt.where(TransactionModel.occurred_at <= date_to)

        result = await self._session.execute(stmt)
        models = result.scalars().all()

        return [self._to_entity(model) for model in models]

    async def add_batch(self, transactions: Sequence[Transaction]) -> int:
        """Write one chunk inside a SAVEPOINT so a failure discards only this chunk."""
        if not transactions:
            return 0

        try:
            async with self._session.begin_nested():
                self._session.add_all(self._to_model(t) for t in transactions)
                await self._session.flush()
        except SQLAlchemyError as e:
            raise PersistenceException(
                message=f"Failed to store {len(transactions)} transactions: {type(e).__name__}",
                operation="add_transactions",
            ) from e

        return len(transactions)

    async def summarize_for_user(self, user_id: str, ingested_since: datetime) -> TransactionSummary:
        """Count stored, recently ingested, categorized and recurring rows in one query."""
        stmt = (
            select(
                func.count(TransactionModel.id),
                func.count(case((TransactionModel.created_at >= ingested_since, 1))),
                func.count(TransactionModel.category),
                func.count(case((TransactionModel.is_recurring.is_(True), 1))),
            )
            .join(AccountModel, TransactionModel.account_id == AccountModel.id)
            .where(AccountModel.user_id == user_id)
        )
        total, recent, categorized, recurring = (await self._session.execute(stmt)).one()

        return TransactionSummary(
            total=total,
            recent=recent,
            categorized=categorized,
            recurring=recurring,
        )

    def _to_model(self, transaction: Transaction) -> TransactionModel:
        """Convert domain entity to database model."""
        return TransactionModel(
            id=str(transaction.id),
            account_id=transaction.account_id,
            amount=transaction.amount,
            direction=transaction.direction.value,
            occurred_at=transaction.occurred_at,
            description=transaction.description,
            merchant=transaction.merchant,
            balance=transaction.balance,
            category=transaction.category.value if transaction.category else None,
            is_recurring=transaction.is_recurring,
            external_id=transaction.external_id,
        )

    def _to_entity(self, model: TransactionModel) -> Transaction:
        """Convert database model to domain entity."""
        return Transaction(
            id=UUID(model.id),
            account_id=str(model.account_id),
            amount=model.amount,
            direction=TransactionDirection(model.direction),
            occurred_at=as_utc(model.occurred_at),
            description=model.description,
            merchant=model.merchant,
            balance=model.balance,
            category=TransactionCategory(model.category) if model.category else None,
            is_recurring=model.is_recurring,
            external_id=model.external_id,
        )
