"""Data transfer objects for transaction ingestion."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional


@dataclass(frozen=True)
class IngestionStats:
    """
    Counters describing one ingestion batch.

    processed = accepted + rejected; accepted = duplicates + stored + failed.
    """

    processed: int
    accepted: int
    rejected: int
    duplicates: int
    categorized: int
    recurring: int
    stored: int
    failed: int
    duration_ms: float
    errors: List[str] = field(default_factory=list)

    @property
    def new_records(self) -> int:
        return self.accepted - self.duplicates

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "processed": self.processed,
            "accepted": self.accepted,
            "rejected": self.rejected,
            "duplicates": self.duplicates,
            "categorized": self.categorized,
            "recurring": self.recurring,
            "stored": self.stored,
            "failed": self.failed,
            "duration_ms": round(self.duration_ms, 2),
            "errors": list(self.errors),
        }


@dataclass(frozen=True)
class TransactionStats:
    """Stored-transaction overview for one user."""

    user_id: str
    total: int
    recent: int
    categorized_percentage: float
    recurring: int
    last_synced_at: Optional[datetime]
    window_days: int
