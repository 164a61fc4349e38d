"""Repository interfaces for data persistence."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Sequence

from src.domain.entities import (
    Account,
    CreditScoreSnapshot,
    PeerStatistics,
    Transaction,
    TransactionSummary,
)


class TransactionRepository(ABC):
    """
    Abstract repository for Transaction persistence.

    Implementations may use PostgreSQL, in-memory storage, etc.
    """

    @abstractmethod
    async def list_for_user(
        self,
        user_id: str,
        date_from: Optional[datetime] = None,
        date_to: Optional[datetime] = None,
    ) -> List[Transaction]:
        """
        Retrieve a user's transactions across all of their accounts.

        Args:
            user_id: The user's identifier
            date_from: Inclusive lower bound on occurred_at
            date_to: Inclusive upper bound on occurred_at

        Returns:
            Transactions ordered by occurred_at ascending
        """
        ...

    @abstractmethod
    async def add_batch(self, transactions: Sequence[Transaction]) -> int:
        """
        Persist one chunk of transactions atomically.

        Args:
            transactions: The chunk to write

        Returns:
            Number of rows written

        Raises:
            PersistenceException: If the chunk could not be written
        """
        ...

    @abstractmethod
    async def summarize_for_user(self, user_id: str, ingested_since: datetime) -> TransactionSummary:
        """
        Count a user's stored transactions.

        Args:
            user_id: The user's identifier
            ingested_since: Cutoff on the ingestion time for the recent count
        """
        ...


class AccountRepository(ABC):
    """Abstract repository for connected Account persistence."""

    @abstractmethod
    async def save(self, account: Account) -> Account:
        """Persist a connected account."""
        ...

    @abstractmethod
    async def list_active(self, user_id: str) -> List[Account]:
        """
        Retrieve the user's active account connections.

        Args:
            user_id: The user's identifier

        Returns:
            Active accounts, oldest connection first
        """
        ...

    @abstractmethod
    async def mark_synced(self, account_ids: Sequence[str], synced_at: datetime) -> None:
        """Record the last successful synchronization time for accounts."""
        ...


class ScoreRepository(ABC):
    """
    Abstract repository for CreditScoreSnapshot persistence.

    Snapshots are append-only; nothing is ever updated in place.
    """

    @abstractmethod
    async def save(self, snapshot: CreditScoreSnapshot) -> CreditScoreSnapshot:
        """
        Persist a snapshot together with all of its factors.

        Either every row is written or none is.

        Raises:
            PersistenceException: If the write failed
        """
        ...

    @abstractmethod
    async def get_latest(self, user_id: str) -> Optional[CreditScoreSnapshot]:
        """Retrieve the most recent snapshot for a user."""
        ...

    @abstractmethod
    async def list_history(self, user_id: str, limit: int = 12) -> List[CreditScoreSnapshot]:
        """
        Retrieve a user's snapshots.

        Args:
            user_id: The user's identifier
            limit: Maximum number of snapshots to return

        Returns:
            Snapshots ordered by created_at descending (most recent first)
        """
        ...

    @abstractmethod
    async def peer_statistics(self, score: int, since: datetime) -> PeerStatistics:
        """
        Aggregate every user's snapshots created since a cutoff.

        Args:
            score: Reference score for the lower count
            since: Inclusive lower bound on created_at
        """
        ...
