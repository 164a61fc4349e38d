"""
Integration tests for data persistence.

These tests verify:
1. Transactions round-trip with categories, recurrence flags and UTC timestamps
2. A failing chunk is discarded without touching earlier writes
3. Score snapshots are stored atomically with their factors
4. Score history is returned newest first
5. Only active accounts are listed
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from sqlalchemy import func, select

from src.domain.entities import (
    CreditScoreSnapshot,
    FactorCategory,
    ScoreFactor,
    ScoreTrend,
    Transaction,
    TransactionCategory,
    TransactionDirection,
)
from src.domain.exceptions import PersistenceException
from src.infrastructure.database import CreditScoreModel, ScoreFactorModel

USER_ID = "user_good"

NOW = datetime.now(timezone.utc).replace(microsecond=0)


def make_transaction(account_id: str, days_ago: int, amount: str = "450.00", **kwargs) -> Transaction:
    return Transaction(
        account_id=account_id,
        amount=Decimal(amount) if amount is not None else None,
        direction=TransactionDirection.DEBIT,
        occurred_at=NOW - timedelta(days=days_ago),
        description="Swiggy order",
        **kwargs,
    )


def make_snapshot(score: int, minutes_ago: int = 0, description: str | None = "On-time payments: 90%, Overdrafts: 1") -> CreditScoreSnapshot:
    return CreditScoreSnapshot(
        user_id=USER_ID,
        score=score,
        confidence=0.7,
        trend=ScoreTrend.STABLE,
        factors=[
            ScoreFactor(FactorCategory.INCOME_STABILITY, 10, 0.35, "Monthly income: ₹40,000, Consistency: 4 months"),
            ScoreFactor(FactorCategory.PAYMENT_BEHAVIOR, -5, 0.25, description),
        ],
        created_at=NOW - timedelta(minutes=minutes_ago),
    )


# =============================================================================
# Transaction Repository Tests
# =============================================================================

class TestTransactionPersistence:

    @pytest.mark.asyncio
    async def test_round_trip(self, transaction_repository, account_ids):
        transaction = make_transaction(
            account_ids[0],
            days_ago=3,
            category=TransactionCategory.FOOD,
            is_recurring=True,
            balance=Decimal("1200.50"),
        )

        stored = await transaction_repository.add_batch([transaction])
        loaded = await transaction_repository.list_for_user(USER_ID)

        assert stored == 1
        assert len(loaded) == 1
        assert loaded[0].id == transaction.id
        assert loaded[0].amount == Decimal("450.00")
        assert loaded[0].category == TransactionCategory.FOOD
        assert loaded[0].is_recurring is True
        assert loaded[0].occurred_at == transaction.occurred_at
        assert loaded[0].occurred_at.tzinfo is not None

    @pytest.mark.asyncio
    async def test_oldest_first_and_date_filter(self, transaction_repository, account_ids):
        await transaction_repository.add_batch([
            make_transaction(account_ids[0], days_ago=1),
            make_transaction(account_ids[1], days_ago=30),
            make_transaction(account_ids[0], days_ago=400),
        ])

        recent = await transaction_repository.list_for_user(
            USER_ID, date_from=NOW - timedelta(days=365)
        )

        assert len(recent) == 2
        assert recent[0].occurred_at < recent[1].occurred_at

    @pytest.mark.asyncio
    async def test_other_users_are_not_returned(self, transaction_repository, account_ids):
        await transaction_repository.add_batch([make_transaction(account_ids[0], days_ago=1)])
        assert await transaction_repository.list_for_user("someone_else") == []

    @pytest.mark.asyncio
    async def test_failing_chunk_is_discarded(self, transaction_repository, account_ids):
        await transaction_repository.add_batch([make_transaction(account_ids[0], days_ago=1)])

        bad_chunk = [
            make_transaction(account_ids[0], days_ago=2),
            make_transaction(account_ids[0], days_ago=3, amount=None),
        ]
        with pytest.raises(PersistenceException) as exc_info:
            await transaction_repository.add_batch(bad_chunk)

        assert exc_info.value.operation == "add_transactions"

        await transaction_repository.add_batch([make_transaction(account_ids[1], days_ago=4)])
        loaded = await transaction_repository.list_for_user(USER_ID)

        assert len(loaded) == 2

    @pytest.mark.asyncio
    async def test_empty_batch(self, transaction_repository):
        assert await transaction_repository.add_batch([]) == 0


# =============================================================================
# Account Repository Tests
# =============================================================================

class TestAccountPersistence:

    @pytest.mark.asyncio
    async def test_only_active_accounts_listed(self, account_repository, accounts):
        active = await account_repository.list_active(USER_ID)

        assert len(active) == 2
        assert all(a.is_active for a in active)

    @pytest.mark.asyncio
    async def test_mark_synced(self, account_repository, account_ids):
        await account_repository.mark_synced([account_ids[0]], NOW)

        active = {str(a.id): a for a in await account_repository.list_active(USER_ID)}

        assert active[account_ids[0]].last_synced_at == NOW
        assert active[account_ids[1]].last_synced_at is None


# =============================================================================
# Score Repository Tests
# =============================================================================

class TestScorePersistence:

    @pytest.mark.asyncio
    async def test_snapshot_round_trip(self, score_repository):
        snapshot = make_snapshot(680)

        await score_repository.save(snapshot)
        loaded = await score_repository.get_latest(USER_ID)

        assert loaded.id == snapshot.id
        assert loaded.score == 680
        assert [f.category for f in loaded.factors] == [
            FactorCategory.INCOME_STABILITY,
            FactorCategory.PAYMENT_BEHAVIOR,
        ]
        assert loaded.factors[0].description == "Monthly income: ₹40,000, Consistency: 4 months"

    @pytest.mark.asyncio
    async def test_failed_save_leaves_no_rows(self, score_repository, test_session):
        # NOT NULL violation on the second factor
        with pytest.raises(PersistenceException) as exc_info:
            await score_repository.save(make_snapshot(640, description=None))

        assert exc_info.value.operation == "save_score"

        scores = await test_session.scalar(select(func.count()).select_from(CreditScoreModel))
        factors = await test_session.scalar(select(func.count()).select_from(ScoreFactorModel))
        assert scores == 0
        assert factors == 0
        assert await score_repository.get_latest(USER_ID) is None

    @pytest.mark.asyncio
    async def test_history_newest_first(self, score_repository):
        for score, minutes_ago in [(600, 60), (650, 30), (700, 0)]:
            await score_repository.save(make_snapshot(score, minutes_ago))

        history = await score_repository.list_history(USER_ID)
        limited = await score_repository.list_history(USER_ID, limit=2)

        assert [s.score for s in history] == [700, 650, 600]
        assert [s.score for s in limited] == [700, 650]

    @pytest.mark.asyncio
    async def test_unknown_user_has_no_score(self, score_repository):
        assert await score_repository.get_latest("new_user") is None
        assert await score_repository.list_history("new_user") == []
