"""Scoring service - orchestrates sufficiency gating and credit score computation."""

from datetime import datetime, timedelta, timezone
from typing import List, Optional, Sequence

import structlog

from src.application.dto import ScoreHistoryResponse
from src.domain.entities import CreditScoreSnapshot, Transaction
from src.domain.exceptions import InsufficientDataException, ScoreNotFoundException
from src.domain.interfaces import AccountRepository, ScoreRepository, TransactionRepository
from src.service.scoring import (
    Analyzer,
    ScoreAnalysis,
    ScoreCalculation,
    ScoringSettings,
    aggregate,
    default_analyzers,
    generate_recommendations,
    scoring_settings,
)
from src.service.sufficiency import (
    ImprovementPlan,
    ProceedCheck,
    SufficiencyReport,
    SufficiencySettings,
    check_can_proceed,
    evaluate_sufficiency,
    plan_improvements,
    sufficiency_settings,
)

logger = structlog.get_logger(__name__)


class ScoringService:
    """
    Application service for credit scoring use cases.
    """

    def __init__(
        self,
        transaction_repository: TransactionRepository,
        account_repository: AccountRepository,
        score_repository: ScoreRepository,
        settings: ScoringSettings = scoring_settings,
        sufficiency: SufficiencySettings = sufficiency_settings,
        analyzers: Optional[Sequence[Analyzer]] = None,
    ):
        self._transaction_repo = transaction_repository
        self._account_repo = account_repository
        self._score_repo = score_repository
        self._settings = settings
        self._sufficiency = sufficiency
        self._analyzers = list(analyzers) if analyzers is not None else default_analyzers(settings)

    async def evaluate_sufficiency(self, user_id: str) -> SufficiencyReport:
        """
        Evaluate whether the user's data supports a reliable score.

        Args:
            user_id: The user's identifier

        Returns:
            SufficiencyReport over the lookback window and active accounts
        """
        transactions = await self._load_transactions(user_id, self._sufficiency.lookback_days)
        accounts = await self._account_repo.list_active(user_id)

        report = evaluate_sufficiency(transactions, accounts, self._sufficiency)

        logger.info(
            "sufficiency_evaluated",
            user_id=user_id,
            quality_score=report.quality_score,
            sufficient=report.sufficient,
        )
        return report

    async def check_can_proceed(self, user_id: str) -> ProceedCheck:
        """Check the critical requirements that gate scoring."""
        report = await self.evaluate_sufficiency(user_id)
        return check_can_proceed(report, self._sufficiency)

    async def get_improvement_plan(self, user_id: str) -> ImprovementPlan:
        """Suggestions for raising the user's data quality to the target."""
        report = await self.evaluate_sufficiency(user_id)
        return plan_improvements(report, self._sufficiency)

    async def compute_score(self, user_id: str) -> ScoreCalculation:
        """
        Compute and persist a new credit score snapshot.

        Args:
            user_id: The user's identifier

        Returns:
            ScoreCalculation with the stored snapshot, factor results and
            recommendations

        Raises:
            InsufficientDataException: If a critical data requirement is unmet;
                nothing is written
            PersistenceException: If the snapshot could not be stored;
                nothing partial is kept
        """
        log = logger.bind(user_id=user_id)
        log.info("score_requested")

        check = await self.check_can_proceed(user_id)
        if not check.can_proceed:
            log.warning("scoring_blocked", unmet=check.unmet_requirements)
            raise InsufficientDataException(user_id, check.unmet_requirements)

        transactions = await self._load_transactions(user_id, self._settings.analysis_window_days)
        log.info("transactions_loaded", count=len(transactions))

        analysis = ScoreAnalysis(
            results={a.category: a.analyze(transactions) for a in self._analyzers},
            transaction_count=len(transactions),
        )
        for category, result in analysis.results.items():
            log.debug("factor_analyzed", category=category.value, score=result.score)

        history = await self._score_repo.list_history(
            user_id, limit=self._settings.trend_history_limit
        )
        snapshot = aggregate(user_id, analysis, history, self._settings)

        await self._score_repo.save(snapshot)

        log.info(
            "score_computed",
            score=snapshot.score,
            confidence=snapshot.confidence,
            trend=snapshot.trend.value,
        )

        return ScoreCalculation(
            snapshot=snapshot,
            analysis=analysis,
            recommendations=generate_recommendations(analysis),
        )

    async def get_latest(self, user_id: str) -> CreditScoreSnapshot:
        """
        Get the user's current score.

        Raises:
            ScoreNotFoundException: If the user has never been scored
        """
        snapshot = await self._score_repo.get_latest(user_id)
        if snapshot is None:
            raise ScoreNotFoundException(user_id)
        return snapshot

    async def get_history(self, user_id: str, limit: int = 12) -> ScoreHistoryResponse:
        """Get the user's snapshots, most recent first."""
        snapshots = await self._score_repo.list_history(user_id, limit=limit)
        return ScoreHistoryResponse.from_entities(user_id, snapshots)

    async def _load_transactions(self, user_id: str, days: int) -> List[Transaction]:
        now = datetime.now(timezone.utc)
        return await self._transaction_repo.list_for_user(
            user_id,
            date_from=now - timedelta(days=days),
            date_to=now,
        )
