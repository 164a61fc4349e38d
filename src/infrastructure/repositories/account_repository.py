"""PostgreSQL repository implementation for connected accounts."""

from datetime import datetime
from typing import List, Sequence
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities import Account, AccountType
from src.domain.interfaces import AccountRepository
from src.infrastructure.database.models import AccountModel

from .transaction_repository import as_utc


class PostgresAccountRepository(AccountRepository):
    """PostgreSQL-backed account repository."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def save(self, account: Account) -> Account:
        model = AccountModel(
            id=str(account.id),
            user_id=account.user_id,
            account_type=account.account_type.value,
            institution_name=account.institution_name,
            is_active=account.is_active,
            last_synced_at=account.last_synced_at,
            created_at=account.created_at,
        )

        self._session.add(model)
        await self._session.flush()

        return account

    async def list_active(self, user_id: str) -> List[Account]:
        stmt = (
            select(AccountModel)
            .where(AccountModel.user_id == user_id)
            .where(AccountModel.is_active.is_(True))
            .order_by(AccountModel.created_at.asc())
        )
        result = await self._session.execute(stmt)
        models = result.scalars().all()

        return [self._to_entity(model) for model in models]

    async def mark_synced(self, account_ids: Sequence[str], synced_at: datetime) -> None:
        if not account_ids:
            return

        stmt = (
            update(AccountModel)
            .where(AccountModel.id.in_([str(a) for a in account_ids]))
            .values(last_synced_at=synced_at)
        )
        await self._session.execute(stmt)
        await self._session.flush()

    def _to_entity(self, model: AccountModel) -> Account:
        return Account(
            id=UUID(model.id),
            user_id=model.user_id,
            account_type=AccountType(model.account_type),
            institution_name=model.institution_name,
            is_active=model.is_active,
            last_synced_at=as_utc(model.last_synced_at) if model.last_synced_at else None,
            created_at=as_utc(model.created_at),
        )
