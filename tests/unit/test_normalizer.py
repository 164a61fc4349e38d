"""
Unit Tests for raw transaction normalization.

These tests verify:
1. Required-field validation and per-record rejection
2. Amount, timestamp and direction coercion
3. Text sanitization
4. Warnings for suspicious but valid records
"""

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from src.domain.entities import TransactionDirection
from src.domain.exceptions import TransactionValidationException
from src.service.ingestion import IngestionSettings
from src.service.ingestion.normalizer import (
    normalize_batch,
    normalize_record,
    parse_amount,
    parse_timestamp,
    sanitize_text,
)

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)
ACCOUNT_ID = "6f1c2a4e-8f3b-4d5a-9c7e-1b2d3e4f5a6b"


def make_record(**overrides) -> dict:
    record = {
        "account_id": ACCOUNT_ID,
        "amount": "1250.50",
        "direction": "debit",
        "occurred_at": "2025-05-20T10:30:00Z",
        "description": "ZOMATO ORDER",
        "merchant": "Zomato",
        "balance": "8400.00",
    }
    record.update(overrides)
    return record


# =============================================================================
# Field Parsing Tests
# =============================================================================

class TestParseAmount:
    """Tests for amount parsing."""

    @pytest.mark.parametrize("value, expected", [
        ("100", Decimal("100")),
        (250.75, Decimal("250.75")),
        (42, Decimal("42")),
        (" -15.5 ", Decimal("-15.5")),
    ])
    def test_valid_amounts(self, value, expected):
        assert parse_amount(value) == expected

    @pytest.mark.parametrize("value", [
        None,
        True,
        "",
        "abc",
        float("nan"),
        float("inf"),
        "Infinity",
    ])
    def test_invalid_amounts(self, value):
        assert parse_amount(value) is None


class TestParseTimestamp:
    """Tests for timestamp parsing."""

    def test_zulu_suffix_is_utc(self):
        parsed = parse_timestamp("2025-05-20T10:30:00Z")
        assert parsed == datetime(2025, 5, 20, 10, 30, tzinfo=timezone.utc)

    def test_naive_string_is_treated_as_utc(self):
        parsed = parse_timestamp("2025-05-20T10:30:00")
        assert parsed.tzinfo == timezone.utc

    def test_offset_is_converted_to_utc(self):
        parsed = parse_timestamp("2025-05-20T16:00:00+05:30")
        assert parsed == datetime(2025, 5, 20, 10, 30, tzinfo=timezone.utc)

    def test_date_object_is_midnight_utc(self):
        parsed = parse_timestamp(date(2025, 5, 20))
        assert parsed == datetime(2025, 5, 20, tzinfo=timezone.utc)

    @pytest.mark.parametrize("value", [None, "", "yesterday", 12345])
    def test_invalid_timestamps(self, value):
        assert parse_timestamp(value) is None


class TestSanitizeText:
    """Tests for description and merchant sanitization."""

    def test_strips_script_tags(self):
        assert sanitize_text("Coffee<script>alert(1)</script>", 255) == "Coffee"

    def test_strips_javascript_scheme_and_handlers(self):
        cleaned = sanitize_text('javascript:void(0) onclick=steal() Shop', 255)
        assert "javascript" not in cleaned.lower()
        assert "onclick=" not in cleaned.lower()
        assert cleaned.endswith("Shop")

    def test_removes_angle_brackets(self):
        assert sanitize_text("<b>Rent</b>", 255) == "bRent/b"

    def test_caps_length(self):
        assert len(sanitize_text("x" * 500, 255)) == 255

    def test_none_becomes_empty(self):
        assert sanitize_text(None, 255) == ""


# =============================================================================
# Record Normalization Tests
# =============================================================================

class TestNormalizeRecord:
    """Tests for normalize_record."""

    def test_valid_record(self):
        transaction, warnings = normalize_record(make_record(), NOW)

        assert transaction.account_id == ACCOUNT_ID
        assert transaction.amount == Decimal("1250.50")
        assert transaction.direction == TransactionDirection.DEBIT
        assert transaction.occurred_at == datetime(2025, 5, 20, 10, 30, tzinfo=timezone.utc)
        assert transaction.balance == Decimal("8400.00")
        assert transaction.category is None
        assert transaction.is_recurring is False
        assert warnings == []

    def test_amount_is_absolute_and_quantized(self):
        transaction, _ = normalize_record(make_record(amount="-99.999"), NOW)
        assert transaction.amount == Decimal("100.00")

    def test_direction_is_case_insensitive(self):
        transaction, _ = normalize_record(make_record(direction=" CREDIT "), NOW)
        assert transaction.direction == TransactionDirection.CREDIT

    def test_missing_amount_is_rejected(self):
        record = make_record()
        del record["amount"]

        with pytest.raises(TransactionValidationException) as exc_info:
            normalize_record(record, NOW)

        assert exc_info.value.code == "INVALID_TRANSACTION"
        assert any("amount" in e for e in exc_info.value.errors)

    def test_all_errors_are_collected(self):
        record = {"description": "nothing useful"}

        with pytest.raises(TransactionValidationException) as exc_info:
            normalize_record(record, NOW)

        assert len(exc_info.value.errors) == 4

    def test_unknown_direction_is_rejected(self):
        with pytest.raises(TransactionValidationException):
            normalize_record(make_record(direction="sideways"), NOW)

    def test_large_amount_warns_but_is_kept(self):
        transaction, warnings = normalize_record(make_record(amount="25000000"), NOW)

        assert transaction.amount == Decimal("25000000.00")
        assert any("large amount" in w.lower() for w in warnings)

    def test_custom_large_amount_threshold(self):
        settings = IngestionSettings(large_amount_warning=Decimal("1000"))
        _, warnings = normalize_record(make_record(amount="1500"), NOW, settings)
        assert len(warnings) == 1

    def test_future_date_warns(self):
        future = (NOW + timedelta(days=3)).isoformat()
        _, warnings = normalize_record(make_record(occurred_at=future), NOW)
        assert any("future" in w.lower() for w in warnings)

    def test_unparseable_balance_is_dropped_with_warning(self):
        transaction, warnings = normalize_record(make_record(balance="n/a"), NOW)

        assert transaction.balance is None
        assert warnings == ["Unparseable balance dropped"]

    @pytest.mark.parametrize("amount", [1e30, "1E+40", "10000000000000"])
    def test_unstorable_amount_is_rejected(self, amount):
        with pytest.raises(TransactionValidationException) as exc_info:
            normalize_record(make_record(amount=amount), NOW)

        assert exc_info.value.errors == [
            "amount exceeds the storable maximum of 9999999999999.99"
        ]

    def test_largest_storable_amount_is_kept(self):
        transaction, warnings = normalize_record(make_record(amount="9999999999999.99"), NOW)

        assert transaction.amount == Decimal("9999999999999.99")
        assert len(warnings) == 1

    @pytest.mark.parametrize("balance", [1e30, "-1E+40"])
    def test_unstorable_balance_is_dropped_with_warning(self, balance):
        transaction, warnings = normalize_record(make_record(balance=balance), NOW)

        assert transaction.balance is None
        assert warnings == ["Unparseable balance dropped"]

    def test_negative_balance_is_kept(self):
        transaction, _ = normalize_record(make_record(balance="-320.10"), NOW)
        assert transaction.balance == Decimal("-320.10")

    def test_empty_merchant_becomes_none(self):
        transaction, _ = normalize_record(make_record(merchant="   "), NOW)
        assert transaction.merchant is None


class TestNormalizeBatch:
    """Tests for normalize_batch."""

    def test_bad_record_does_not_abort_batch(self):
        records = [
            make_record(),
            make_record(amount=None),
            make_record(occurred_at="2025-05-21T08:00:00Z"),
        ]

        result = normalize_batch(records, now=NOW)

        assert len(result.accepted) == 2
        assert len(result.rejected) == 1
        assert result.rejected[0].index == 1
        assert result.rejected[0].message.startswith("Record 1: ")

    def test_unstorable_values_do_not_abort_batch(self):
        records = [
            make_record(),
            make_record(amount=1e30),
            make_record(occurred_at="2025-05-21T08:00:00Z", balance=1e30),
        ]

        result = normalize_batch(records, now=NOW)

        assert len(result.accepted) == 2
        assert [r.index for r in result.rejected] == [1]
        assert result.accepted[1].balance is None
        assert result.warnings == ["Record 2: Unparseable balance dropped"]

    def test_non_mapping_record_is_rejected(self):
        result = normalize_batch([make_record(), "not a record", 42], now=NOW)

        assert len(result.accepted) == 1
        assert [r.index for r in result.rejected] == [1, 2]

    def test_warnings_carry_record_position(self):
        result = normalize_batch(
            [make_record(), make_record(amount="99999999")],
            now=NOW,
        )
        assert result.warnings[0].startswith("Record 1: ")

    def test_empty_batch(self):
        result = normalize_batch([], now=NOW)
        assert result.accepted == []
        assert result.rejected == []
