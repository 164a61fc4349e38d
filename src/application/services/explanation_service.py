"""Explanation service - builds the breakdown of a user's latest score."""

from datetime import datetime, timedelta, timezone

import structlog

from src.application.dto import ScoreComparison
from src.domain.exceptions import ScoreNotFoundException
from src.domain.interfaces import ScoreRepository
from src.service.explanation import ScoreBreakdown, explain
from src.service.scoring import ScoringSettings, round_half_up, scoring_settings

logger = structlog.get_logger(__name__)


class ExplanationService:
    """Application service for score explanations."""

    HISTORY_LIMIT = 12
    PEER_WINDOW_DAYS = 30
    # Reported when no snapshot falls inside the peer window
    DEFAULT_PEER_AVERAGE = 650

    def __init__(
        self,
        score_repository: ScoreRepository,
        settings: ScoringSettings = scoring_settings,
    ):
        self._score_repo = score_repository
        self._settings = settings

    async def explain_score(self, user_id: str) -> ScoreBreakdown:
        """
        Explain the user's latest score.

        Raises:
            ScoreNotFoundException: If the user has never been scored
        """
        history = await self._score_repo.list_history(user_id, limit=self.HISTORY_LIMIT)
        if not history:
            raise ScoreNotFoundException(user_id)

        breakdown = explain(history[0], history, currency=self._settings.currency_symbol)

        logger.info(
            "score_explained",
            user_id=user_id,
            score=breakdown.current_score,
            tips=len(breakdown.improvement_tips),
        )
        return breakdown

    async def compare_with_peers(self, user_id: str) -> ScoreComparison:
        """
        Place the user's latest score among all scores of the last 30 days.

        Every snapshot in the window counts, including the user's own, so
        a user scored twice contributes twice.

        Raises:
            ScoreNotFoundException: If the user has never been scored
        """
        latest = await self._score_repo.get_latest(user_id)
        if latest is None:
            raise ScoreNotFoundException(user_id)

        since = datetime.now(timezone.utc) - timedelta(days=self.PEER_WINDOW_DAYS)
        peers = await self._score_repo.peer_statistics(latest.score, since)

        average = peers.average if peers.average is not None else self.DEFAULT_PEER_AVERAGE
        percentile = round_half_up(peers.lower_count / peers.count * 100) if peers.count else 0

        comparison = ScoreComparison(
            user_id=user_id,
            user_score=latest.score,
            average_score=round_half_up(average),
            percentile=percentile,
            peer_count=peers.count,
            window_days=self.PEER_WINDOW_DAYS,
        )

        logger.info(
            "score_compared",
            user_id=user_id,
            score=latest.score,
            percentile=percentile,
            peers=peers.count,
        )
        return comparison
