"""Duplicate detection against previously stored transactions."""

from datetime import datetime, timedelta
from typing import Iterable, List, Sequence

from src.domain.entities import Transaction


def dedup_window_start(
    batch: Sequence[Transaction],
    now: datetime,
    window_days: int,
) -> datetime:
    """
    Earliest occurred_at that must be compared for duplicates.

    The trailing window is widened to cover back-filled history in the
    batch, so re-ingesting any unchanged batch finds every prior copy.
    """
    start = now - timedelta(days=window_days)
    if batch:
        start = min(start, min(t.occurred_at for t in batch))
    return start


def remove_duplicates(
    incoming: Sequence[Transaction],
    existing: Iterable[Transaction],
) -> tuple[List[Transaction], int]:
    """
    Drop incoming transactions already present in storage.

    Identity is (account, amount, direction, occurrence timestamp). Repeats
    within the incoming batch are kept: two equal purchases on the same day
    are distinct transactions.

    Returns:
        The new transactions, in input order, and the number dropped
    """
    stored = {t.identity_key for t in existing}
    unique = [t for t in incoming if t.identity_key not in stored]

    return unique, len(incoming) - len(unique)
