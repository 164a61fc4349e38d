"""Account entity representing a connected financial account."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4


class AccountType(str, Enum):
    """Type of connected account."""

    SAVINGS = "savings"
    CURRENT = "current"
    INVESTMENT = "investment"
    CREDIT = "credit"
    LOAN = "loan"


@dataclass
class Account:
    """
    A financial account connected through the data-sharing consent flow.

    Owns zero or more transactions. Only active accounts count towards
    data sufficiency and may receive ingested transactions.
    """

    user_id: str
    account_type: AccountType
    institution_name: str = ""
    is_active: bool = True
    last_synced_at: Optional[datetime] = None
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "account_id": str(self.id),
            "user_id": self.user_id,
            "account_type": self.account_type.value,
            "institution_name": self.institution_name,
            "is_active": self.is_active,
            "last_synced_at": (
                self.last_synced_at.isoformat() if self.last_synced_at else None
            ),
        }
