"""
Behavioral categorization and recurrence detection.

Categories are assigned by an ordered list of keyword rules evaluated
first-match over the description and merchant text. New rules are added
to CATEGORY_RULES; the matching code does not change.

Recurrence groups transactions that share amount, description and
direction. A group of two or more is a recurring series when every gap
between consecutive occurrences stays within the tolerance of the mean
gap.
"""

from collections import defaultdict
from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Sequence, Tuple

from src.domain.entities import Transaction, TransactionCategory

from .settings import IngestionSettings, ingestion_settings


@dataclass(frozen=True)
class CategoryRule:
    """Keywords that map a transaction to a category."""

    category: TransactionCategory
    keywords: Tuple[str, ...]

    def matches(self, text: str) -> bool:
        return any(keyword in text for keyword in self.keywords)


CATEGORY_RULES: Tuple[CategoryRule, ...] = (
    CategoryRule(TransactionCategory.SALARY, ("salary", "sal cr", "payroll")),
    CategoryRule(
        TransactionCategory.FOOD,
        ("zomato", "swiggy", "restaurant", "food", "cafe", "pizza"),
    ),
    CategoryRule(
        TransactionCategory.TRANSPORT,
        ("uber", "ola", "metro", "petrol", "fuel", "transport"),
    ),
    CategoryRule(
        TransactionCategory.SHOPPING,
        ("amazon", "flipkart", "shopping", "mall", "store"),
    ),
    CategoryRule(
        TransactionCategory.UTILITIES,
        ("electricity", "water", "gas", "internet", "mobile", "recharge"),
    ),
    CategoryRule(
        TransactionCategory.INVESTMENT,
        ("sip", "mutual fund", "investment", "equity", "stock", "zerodha"),
    ),
    CategoryRule(
        TransactionCategory.HEALTHCARE,
        ("hospital", "medical", "pharmacy", "doctor", "health"),
    ),
    CategoryRule(
        TransactionCategory.ENTERTAINMENT,
        ("netflix", "spotify", "movie", "entertainment", "gaming"),
    ),
    CategoryRule(TransactionCategory.CASH, ("atm", "cash withdrawal", "cash dep")),
    CategoryRule(
        TransactionCategory.TRANSFER,
        ("transfer", "upi", "imps", "neft", "rtgs"),
    ),
)


def categorize(
    transaction: Transaction,
    rules: Sequence[CategoryRule] = CATEGORY_RULES,
) -> Optional[TransactionCategory]:
    """Return the category of the first matching rule, or None."""
    text = transaction.search_text
    for rule in rules:
        if rule.matches(text):
            return rule.category
    return None


def detect_recurring(
    transactions: Sequence[Transaction],
    tolerance_days: float,
) -> set:
    """
    Find the ids of transactions that belong to a recurring series.

    Gaps are whole days between consecutive occurrences. A series is
    recurring only if every gap is within ``tolerance_days`` of the mean.
    """
    groups: Dict[tuple, List[Transaction]] = defaultdict(list)
    for transaction in transactions:
        key = (transaction.amount, transaction.description, transaction.direction)
        groups[key].append(transaction)

    recurring_ids = set()
    for members in groups.values():
        if len(members) < 2:
            continue

        ordered = sorted(members, key=lambda t: t.occurred_at)
        intervals = [
            (later.occurred_at - earlier.occurred_at).days
            for earlier, later in zip(ordered, ordered[1:])
        ]
        mean_interval = sum(intervals) / len(intervals)

        if all(abs(interval - mean_interval) <= tolerance_days for interval in intervals):
            recurring_ids.update(t.id for t in members)

    return recurring_ids


def annotate(
    transactions: Sequence[Transaction],
    settings: IngestionSettings = ingestion_settings,
    rules: Sequence[CategoryRule] = CATEGORY_RULES,
) -> List[Transaction]:
    """
    Return categorized copies of the transactions with recurrence flags set.

    Input order is preserved and the inputs are not modified. Running this
    twice over the same input yields identical annotations.
    """
    recurring_ids = detect_recurring(transactions, settings.recurrence_tolerance_days)
    return [
        replace(
            transaction,
            category=categorize(transaction, rules),
            is_recurring=transaction.id in recurring_ids,
        )
        for transaction in transactions
    ]
