"""
Integration tests for the scoring pipeline.

These tests verify:
1. Sufficiency is evaluated over stored transactions and active accounts
2. The gate blocks scoring and nothing is written
3. A sufficient user is scored, the snapshot persisted with four factors
4. Trend follows the stored history
5. Explanations are built from the stored snapshots
6. Peer comparison counts only scores inside the window
"""

from datetime import datetime, timedelta, timezone

import pytest

from src.domain.entities import CreditScoreSnapshot, FactorCategory, ScoreTrend
from src.domain.exceptions import InsufficientDataException, ScoreNotFoundException

USER_ID = "user_good"


def earlier_snapshot(score: int, hours_ago: int, user_id: str = USER_ID) -> CreditScoreSnapshot:
    return CreditScoreSnapshot(
        user_id=user_id,
        score=score,
        confidence=0.6,
        trend=ScoreTrend.STABLE,
        factors=[],
        created_at=datetime.now(timezone.utc) - timedelta(hours=hours_ago),
    )


# =============================================================================
# Sufficiency Tests
# =============================================================================

class TestSufficiency:

    @pytest.mark.asyncio
    async def test_sufficient_user(self, ingestion_service, scoring_service, make_records):
        await ingestion_service.ingest(USER_ID, make_records(60))

        report = await scoring_service.evaluate_sufficiency(USER_ID)
        check = await scoring_service.check_can_proceed(USER_ID)

        assert report.sufficient
        assert report.quality_score == 100
        assert check.can_proceed

    @pytest.mark.asyncio
    async def test_inactive_accounts_do_not_count(self, scoring_service, accounts):
        report = await scoring_service.evaluate_sufficiency(USER_ID)
        by_key = {r.key: r for r in report.requirements}

        assert by_key["account_connections"].current == 2

    @pytest.mark.asyncio
    async def test_improvement_plan(self, ingestion_service, scoring_service, make_records):
        await ingestion_service.ingest(USER_ID, make_records(10))

        plan = await scoring_service.get_improvement_plan(USER_ID)

        assert plan.target_score == 85
        assert plan.current_score < plan.target_score
        assert plan.suggestions[0].title == "Increase Transaction History"


# =============================================================================
# Gate Tests
# =============================================================================

class TestScoringGate:

    @pytest.mark.asyncio
    async def test_too_few_transactions_blocks(
        self, ingestion_service, scoring_service, score_repository, make_records
    ):
        await ingestion_service.ingest(USER_ID, make_records(10))

        with pytest.raises(InsufficientDataException) as exc_info:
            await scoring_service.compute_score(USER_ID)

        assert exc_info.value.unmet_requirements == ["Transaction History: 10/50"]
        assert await score_repository.list_history(USER_ID) == []

    @pytest.mark.asyncio
    async def test_new_user_blocks(self, scoring_service):
        with pytest.raises(InsufficientDataException) as exc_info:
            await scoring_service.compute_score("new_user")

        assert exc_info.value.unmet_requirements == [
            "Transaction History: 0/50",
            "Account Connections: 0/2",
        ]


# =============================================================================
# Scoring Tests
# =============================================================================

class TestComputeScore:

    @pytest.mark.asyncio
    async def test_sufficient_user_is_scored(
        self, ingestion_service, scoring_service, score_repository, make_records
    ):
        await ingestion_service.ingest(USER_ID, make_records(60))

        calculation = await scoring_service.compute_score(USER_ID)
        snapshot = calculation.snapshot

        assert 300 <= snapshot.score <= 850
        assert 0.5 <= snapshot.confidence <= 1.0
        assert snapshot.trend == ScoreTrend.STABLE
        assert {f.category for f in snapshot.factors} == set(FactorCategory)
        assert all(-100 <= f.impact <= 100 for f in snapshot.factors)

        stored = await score_repository.get_latest(USER_ID)
        assert stored.id == snapshot.id
        assert stored.score == snapshot.score
        assert len(stored.factors) == 4

    @pytest.mark.asyncio
    async def test_rescoring_appends_history(self, ingestion_service, scoring_service, make_records):
        await ingestion_service.ingest(USER_ID, make_records(60))

        first = await scoring_service.compute_score(USER_ID)
        second = await scoring_service.compute_score(USER_ID)
        history = await scoring_service.get_history(USER_ID)

        assert [s.score_id for s in history.scores] == [
            str(second.snapshot.id),
            str(first.snapshot.id),
        ]
        assert second.snapshot.score == first.snapshot.score

    @pytest.mark.asyncio
    async def test_trend_uses_stored_history(
        self, ingestion_service, scoring_service, score_repository, make_records
    ):
        await score_repository.save(earlier_snapshot(500, hours_ago=2))
        await score_repository.save(earlier_snapshot(540, hours_ago=1))
        await ingestion_service.ingest(USER_ID, make_records(60))

        calculation = await scoring_service.compute_score(USER_ID)

        assert calculation.snapshot.trend == ScoreTrend.IMPROVING

    @pytest.mark.asyncio
    async def test_latest_for_unscored_user(self, scoring_service):
        with pytest.raises(ScoreNotFoundException):
            await scoring_service.get_latest("new_user")


# =============================================================================
# Explanation Tests
# =============================================================================

class TestExplainScore:

    @pytest.mark.asyncio
    async def test_breakdown_of_latest_score(
        self, ingestion_service, scoring_service, explanation_service, make_records
    ):
        await ingestion_service.ingest(USER_ID, make_records(60))
        calculation = await scoring_service.compute_score(USER_ID)

        breakdown = await explanation_service.explain_score(USER_ID)

        assert breakdown.current_score == calculation.snapshot.score
        assert breakdown.score_range.min <= breakdown.current_score <= breakdown.score_range.max
        assert len(breakdown.factors) == 4
        assert len(breakdown.historical_trend) == 1
        assert breakdown.historical_trend[0].change == 0
        assert len(breakdown.improvement_tips) <= 5

    @pytest.mark.asyncio
    async def test_unscored_user(self, explanation_service):
        with pytest.raises(ScoreNotFoundException):
            await explanation_service.explain_score("new_user")


# =============================================================================
# Peer Comparison Tests
# =============================================================================

class TestPeerComparison:

    @pytest.mark.asyncio
    async def test_position_among_recent_scores(self, score_repository, explanation_service):
        await score_repository.save(earlier_snapshot(700, hours_ago=1))
        await score_repository.save(earlier_snapshot(600, hours_ago=2, user_id="peer_a"))
        await score_repository.save(earlier_snapshot(650, hours_ago=3, user_id="peer_b"))
        # Outside the 30 day window
        await score_repository.save(earlier_snapshot(820, hours_ago=24 * 40, user_id="peer_c"))

        comparison = await explanation_service.compare_with_peers(USER_ID)

        assert comparison.user_score == 700
        assert comparison.peer_count == 3
        assert comparison.average_score == 650
        assert comparison.percentile == 67
        assert comparison.better_than_percent == 67

    @pytest.mark.asyncio
    async def test_empty_window_uses_default_average(self, score_repository, explanation_service):
        await score_repository.save(earlier_snapshot(700, hours_ago=24 * 40))

        comparison = await explanation_service.compare_with_peers(USER_ID)

        assert comparison.peer_count == 0
        assert comparison.average_score == 650
        assert comparison.percentile == 0

    @pytest.mark.asyncio
    async def test_unscored_user(self, explanation_service):
        with pytest.raises(ScoreNotFoundException):
            await explanation_service.compare_with_peers("new_user")
