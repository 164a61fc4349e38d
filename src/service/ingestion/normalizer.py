"""
Raw transaction normalization.

Turns loosely-typed records from the data provider into Transaction
entities. Malformed records are dropped with their validation errors;
suspicious but valid records are kept and flagged as warnings.
"""

import math
import re
from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, List, Mapping, Optional, Sequence

from src.domain.entities import Transaction, TransactionDirection
from src.domain.exceptions import TransactionValidationException

from .settings import IngestionSettings, ingestion_settings

CENT = Decimal("0.01")
# Largest magnitude a Numeric(15, 2) column holds
MAX_STORABLE = Decimal("9999999999999.99")

_SCRIPT_TAG = re.compile(r"<\s*script\b[^>]*>.*?<\s*/\s*script\s*>", re.IGNORECASE | re.DOTALL)
_JS_SCHEME = re.compile(r"javascript\s*:", re.IGNORECASE)
_EVENT_HANDLER = re.compile(r"\bon\w+\s*=", re.IGNORECASE)
_ANGLE_BRACKETS = re.compile(r"[<>]")


@dataclass
class NormalizationResult:
    """Outcome of normalizing one batch of raw records."""

    accepted: List[Transaction] = field(default_factory=list)
    rejected: List[TransactionValidationException] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


def sanitize_text(value: Any, max_length: int) -> str:
    """Trim, strip markup and script-like content, and cap the length."""
    if value is None:
        return ""
    text = str(value)
    text = _SCRIPT_TAG.sub("", text)
    text = _JS_SCHEME.sub("", text)
    text = _EVENT_HANDLER.sub("", text)
    text = _ANGLE_BRACKETS.sub("", text)
    return text.strip()[:max_length]


def parse_amount(value: Any) -> Optional[Decimal]:
    """Parse a monetary amount; None when missing or not a finite number."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    if not amount.is_finite():
        return None
    return amount


def to_cents(value: Decimal) -> Optional[Decimal]:
    """Round to cents half-up; None when the value cannot be stored."""
    try:
        cents = value.quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        return None
    if abs(cents) > MAX_STORABLE:
        return None
    return cents


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Parse an occurrence timestamp into a UTC-aware datetime.

    Accepts datetime and date objects and ISO 8601 strings (a trailing
    "Z" is understood). Naive values are taken to be UTC.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time.min)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def parse_direction(value: Any) -> Optional[TransactionDirection]:
    """Parse a credit/debit direction, case-insensitively."""
    if not isinstance(value, str):
        return None
    try:
        return TransactionDirection(value.strip().lower())
    except ValueError:
        return None


def normalize_record(
    record: Mapping[str, Any],
    now: datetime,
    settings: IngestionSettings = ingestion_settings,
) -> tuple[Transaction, List[str]]:
    """
    Validate and coerce one raw record.

    Args:
        record: Raw record with account_id, amount, direction, occurred_at
            and optional description, merchant, balance, external_id
        now: Reference time used for the future-timestamp warning

    Returns:
        The normalized transaction and a list of warnings

    Raises:
        TransactionValidationException: If a required field is missing or invalid
    """
    errors: List[str] = []

    account_id = record.get("account_id")
    if account_id is None or not str(account_id).strip():
        errors.append("account_id is required")

    amount = parse_amount(record.get("amount"))
    if amount is None:
        errors.append("amount is required and must be a finite number")
    else:
        amount = to_cents(abs(amount))
        if amount is None:
            errors.append(f"amount exceeds the storable maximum of {MAX_STORABLE}")

    direction = parse_direction(record.get("direction"))
    if direction is None:
        errors.append("direction must be 'credit' or 'debit'")

    occurred_at = parse_timestamp(record.get("occurred_at"))
    if occurred_at is None:
        errors.append("occurred_at must be a valid timestamp")

    if errors:
        raise TransactionValidationException(errors)

    warnings: List[str] = []
    if amount > settings.large_amount_warning:
        warnings.append(f"Unusually large amount: {amount}")
    if occurred_at > now:
        warnings.append(f"Future transaction date: {occurred_at.isoformat()}")

    balance = None
    if record.get("balance") is not None:
        balance = parse_amount(record.get("balance"))
        if balance is not None:
            balance = to_cents(balance)
        if balance is None:
            warnings.append("Unparseable balance dropped")

    merchant = sanitize_text(record.get("merchant"), settings.max_text_length) or None
    external_id = record.get("external_id")

    transaction = Transaction(
        account_id=str(account_id).strip(),
        amount=amount,
        direction=direction,
        occurred_at=occurred_at,
        description=sanitize_text(record.get("description"), settings.max_text_length),
        merchant=merchant,
        balance=balance,
        is_recurring=False,
        external_id=str(external_id) if external_id is not None else None,
    )
    return transaction, warnings


def normalize_batch(
    records: Sequence[Mapping[str, Any]],
    now: Optional[datetime] = None,
    settings: IngestionSettings = ingestion_settings,
) -> NormalizationResult:
    """
    Normalize a batch of raw records.

    A malformed record never aborts the batch: it is collected in
    ``rejected`` with its position and the remaining records continue.
    """
    now = now or datetime.now(timezone.utc)
    result = NormalizationResult()

    for index, record in enumerate(records):
        if not isinstance(record, Mapping):
            result.rejected.append(
                TransactionValidationException(["record must be an object"], index=index)
            )
            continue
        try:
            transaction, warnings = normalize_record(record, now, settings)
        except TransactionValidationException as exc:
            result.rejected.append(TransactionValidationException(exc.errors, index=index))
            continue

        result.accepted.append(transaction)
        result.warnings.extend(f"Record {index}: {w}" for w in warnings)

    return result
