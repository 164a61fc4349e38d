"""Ingestion service - normalizes, deduplicates, categorizes and stores transactions."""

import time
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from typing import Any, List, Mapping, Sequence
from uuid import UUID

import structlog

from src.application.dto import IngestionStats, TransactionStats
from src.domain.entities import Transaction
from src.domain.exceptions import PersistenceException
from src.domain.interfaces import AccountRepository, TransactionRepository
from src.service.ingestion import (
    IngestionSettings,
    annotate,
    dedup_window_start,
    ingestion_settings,
    normalize_batch,
    remove_duplicates,
)
from src.service.scoring import round_to_hundredths

logger = structlog.get_logger(__name__)


def canonical_account_id(account_id: str) -> str:
    """Canonical text form of an account id (hyphenated lowercase UUID when parseable)."""
    try:
        return str(UUID(account_id))
    except ValueError:
        return account_id


class IngestionService:
    """
    Application service for the transaction ingestion use case.
    """

    def __init__(
        self,
        transaction_repository: TransactionRepository,
        account_repository: AccountRepository,
        settings: IngestionSettings = ingestion_settings,
    ):
        self._transaction_repo = transaction_repository
        self._account_repo = account_repository
        self._settings = settings

    async def ingest(
        self,
        user_id: str,
        raw_records: Sequence[Mapping[str, Any]],
    ) -> IngestionStats:
        """
        Ingest one batch of raw records for a user.

        Malformed records and records for accounts the user has no active
        connection to are rejected and counted; the rest of the batch
        continues. Records already stored are skipped, so re-ingesting an
        unchanged batch stores nothing new.

        Args:
            user_id: The user whose accounts the records belong to
            raw_records: Records as received from the data provider

        Returns:
            IngestionStats for the batch
        """
        start = time.perf_counter()
        now = datetime.now(timezone.utc)

        log = logger.bind(user_id=user_id, records=len(raw_records))
        log.info("ingestion_started")

        normalized = normalize_batch(raw_records, now=now, settings=self._settings)
        errors = [exc.message for exc in normalized.rejected]
        for warning in normalized.warnings:
            log.warning("transaction_warning", detail=warning)

        accounts = await self._account_repo.list_active(user_id)
        known_accounts = {str(account.id) for account in accounts}

        owned: List[Transaction] = []
        for transaction in normalized.accepted:
            account_id = canonical_account_id(transaction.account_id)
            if account_id not in known_accounts:
                errors.append(f"Unknown or inactive account: {transaction.account_id}")
                continue
            owned.append(replace(transaction, account_id=account_id))

        rejected = len(raw_records) - len(owned)
        if rejected:
            log.info("transactions_rejected", count=rejected, errors=errors)

        date_from = dedup_window_start(owned, now, self._settings.dedup_window_days)
        existing = await self._transaction_repo.list_for_user(user_id, date_from=date_from)
        new_transactions, duplicates = remove_duplicates(owned, existing)

        annotated = annotate(new_transactions, settings=self._settings)
        categorized = sum(1 for t in annotated if t.category is not None)
        recurring = sum(1 for t in annotated if t.is_recurring)

        stored, failed, synced_accounts = await self._store(annotated, log)

        if synced_accounts:
            await self._account_repo.mark_synced(sorted(synced_accounts), now)

        stats = IngestionStats(
            processed=len(raw_records),
            accepted=len(owned),
            rejected=rejected,
            duplicates=duplicates,
            categorized=categorized,
            recurring=recurring,
            stored=stored,
            failed=failed,
            duration_ms=(time.perf_counter() - start) * 1000,
            errors=errors,
        )

        log.info(
            "ingestion_completed",
            accepted=stats.accepted,
            rejected=stats.rejected,
            duplicates=stats.duplicates,
            stored=stats.stored,
            failed=stats.failed,
            duration_ms=round(stats.duration_ms, 2),
        )

        return stats

    async def get_stats(self, user_id: str, days: int = 30) -> TransactionStats:
        """
        Summarize what has been stored for a user.

        Args:
            user_id: The user's identifier
            days: Window for the recently-ingested count

        Returns:
            TransactionStats with the categorized share as a percentage
        """
        now = datetime.now(timezone.utc)
        summary = await self._transaction_repo.summarize_for_user(
            user_id, ingested_since=now - timedelta(days=days)
        )
        accounts = await self._account_repo.list_active(user_id)
        synced = [a.last_synced_at for a in accounts if a.last_synced_at is not None]

        categorized_percentage = (
            summary.categorized / summary.total * 100 if summary.total else 0.0
        )

        logger.debug("transaction_stats_read", user_id=user_id, total=summary.total)

        return TransactionStats(
            user_id=user_id,
            total=summary.total,
            recent=summary.recent,
            categorized_percentage=round_to_hundredths(categorized_percentage),
            recurring=summary.recurring,
            last_synced_at=max(synced) if synced else None,
            window_days=days,
        )

    async def _store(
        self,
        transactions: Sequence[Transaction],
        log,
    ) -> tuple[int, int, set]:
        """Write in chunks; a failing chunk is counted and skipped."""
        stored = 0
        failed = 0
        synced_accounts: set = set()
        size = self._settings.write_batch_size

        for offset in range(0, len(transactions), size):
            chunk = transactions[offset:offset + size]
            try:
                stored += await self._transaction_repo.add_batch(chunk)
                synced_accounts.update(t.account_id for t in chunk)
            except PersistenceException as e:
                failed += len(chunk)
                log.error(
                    "chunk_store_failed",
                    offset=offset,
                    size=len(chunk),
                    error=e.message,
                )

        return stored, failed, synced_accounts
