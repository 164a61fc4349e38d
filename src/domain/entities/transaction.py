"""Transaction entity representing a categorized bank transaction."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4


class TransactionDirection(str, Enum):
    """Direction of money movement on an account."""

    CREDIT = "credit"  # Money in (salary, refunds, transfers in)
    DEBIT = "debit"  # Money out (bills, purchases, investments)


class TransactionCategory(str, Enum):
    """Behavioral category assigned by the categorizer."""

    SALARY = "salary"
    FOOD = "food"
    TRANSPORT = "transport"
    SHOPPING = "shopping"
    UTILITIES = "utilities"
    INVESTMENT = "investment"
    HEALTHCARE = "healthcare"
    ENTERTAINMENT = "entertainment"
    CASH = "cash"
    TRANSFER = "transfer"


@dataclass(frozen=True)
class Transaction:
    """
    Immutable representation of a bank transaction.

    Amounts are non-negative; the direction carries the sign. Only the
    categorizer produces annotated copies (category, is_recurring), every
    other consumer treats instances as read-only.

    Attributes:
        account_id: Connected account that owns the transaction
        amount: Non-negative amount, quantized to 0.01
        direction: Whether money came in or went out
        occurred_at: Timezone-aware occurrence timestamp (UTC)
        description: Sanitized free-text description
        merchant: Sanitized merchant name, if the feed supplied one
        balance: Account balance snapshot after the transaction
        category: Assigned behavioral category, None if uncategorized
        is_recurring: True when part of a regular payment series
        external_id: Upstream identifier from the data provider
    """

    account_id: str
    amount: Decimal
    direction: TransactionDirection
    occurred_at: datetime
    description: str = ""
    merchant: Optional[str] = None
    balance: Optional[Decimal] = None
    category: Optional[TransactionCategory] = None
    is_recurring: bool = False
    external_id: Optional[str] = None
    id: UUID = field(default_factory=uuid4)

    @property
    def is_credit(self) -> bool:
        """Check if this is a credit transaction."""
        return self.direction == TransactionDirection.CREDIT

    @property
    def is_debit(self) -> bool:
        """Check if this is a debit transaction."""
        return self.direction == TransactionDirection.DEBIT

    @property
    def search_text(self) -> str:
        """Lowercased description and merchant used for keyword matching."""
        return f"{self.description} {self.merchant or ''}".lower()

    @property
    def identity_key(self) -> tuple:
        """Key used to detect the same transaction across ingestions."""
        return (self.account_id, self.amount, self.direction, self.occurred_at)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "transaction_id": str(self.id),
            "account_id": self.account_id,
            "amount": str(self.amount),
            "direction": self.direction.value,
            "occurred_at": self.occurred_at.isoformat(),
            "description": self.description,
            "merchant": self.merchant,
            "balance": str(self.balance) if self.balance is not None else None,
            "category": self.category.value if self.category else None,
            "is_recurring": self.is_recurring,
        }


@dataclass(frozen=True)
class TransactionSummary:
    """
    Stored-transaction counts for one user.

    Attributes:
        total: All stored transactions
        recent: Transactions ingested since the requested cutoff
        categorized: Transactions with a category
        recurring: Transactions flagged as recurring
    """

    total: int
    recent: int
    categorized: int
    recurring: int
