"""
Unit Tests for the factor analyzers.

These tests verify:
1. Each analyzer stays within 300-850 for any input, empty included
2. Observations used by descriptions and confidence
3. Bonus bands for representative profiles
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from src.domain.entities import (
    FactorCategory,
    Transaction,
    TransactionCategory,
    TransactionDirection,
)
from src.service.scoring import (
    IncomeStabilityAnalyzer,
    InvestmentActivityAnalyzer,
    PaymentBehaviorAnalyzer,
    SavingsRateAnalyzer,
    classify_frequency,
    default_analyzers,
    monthly_totals,
)

START = datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)

CREDIT = TransactionDirection.CREDIT
DEBIT = TransactionDirection.DEBIT


def make_transaction(
    days: int,
    amount: float,
    direction: TransactionDirection = DEBIT,
    description: str = "",
    category: TransactionCategory | None = None,
    balance: float | None = None,
    is_recurring: bool = False,
) -> Transaction:
    return Transaction(
        account_id="acc-1",
        amount=Decimal(str(amount)),
        direction=direction,
        occurred_at=START + timedelta(days=days),
        description=description,
        category=category,
        balance=Decimal(str(balance)) if balance is not None else None,
        is_recurring=is_recurring,
    )


def salaried_profile(months: int = 12, salary: float = 80_000) -> list:
    """Monthly salary, rent, electricity bill and SIP."""
    transactions = []
    for m in range(months):
        day = (datetime(2024, m + 1, 1, 9, 0, tzinfo=timezone.utc) - START).days
        transactions += [
            make_transaction(day, salary, CREDIT, "SALARY ACME", TransactionCategory.SALARY, balance=90_000),
            make_transaction(day + 2, 20_000, DEBIT, "Rent transfer", is_recurring=True, balance=70_000),
            make_transaction(day + 5, 1_800, DEBIT, "Electricity bill", TransactionCategory.UTILITIES, balance=68_000),
            make_transaction(day + 7, 10_000, DEBIT, "SIP mutual fund", TransactionCategory.INVESTMENT, balance=58_000),
        ]
    return transactions


def chaotic_profile() -> list:
    return [
        make_transaction(0, 3_000, CREDIT, "cash deposit"),
        make_transaction(3, 9_500, DEBIT, "shopping", balance=-2_000),
        make_transaction(50, 40_000, CREDIT, "contract work"),
        make_transaction(52, 45_000, DEBIT, "electricity", balance=-5_000),
        make_transaction(53, 120, DEBIT, "fee", balance=-5_120),
        make_transaction(54, 80, DEBIT, "fee", balance=-5_200),
    ]


# =============================================================================
# Helper Tests
# =============================================================================

class TestHelpers:
    """Tests for shared analyzer helpers."""

    def test_monthly_totals_are_chronological(self):
        transactions = [
            make_transaction(40, 100),  # February
            make_transaction(0, 50),    # January
            make_transaction(5, 25),    # January
        ]

        totals = monthly_totals(transactions)

        assert list(totals.keys()) == [(2024, 1), (2024, 2)]
        assert totals[(2024, 1)] == 75

    @pytest.mark.parametrize("gaps, expected", [
        ([30, 31, 29], "monthly"),
        ([7, 7, 7, 7], "weekly"),
        ([14, 14], "irregular"),
        ([], "irregular"),
    ])
    def test_classify_frequency(self, gaps, expected):
        days = [0]
        for gap in gaps:
            days.append(days[-1] + gap)
        transactions = [make_transaction(d, 1000, CREDIT) for d in days]

        assert classify_frequency(transactions) == expected


# =============================================================================
# Bounds Tests
# =============================================================================

class TestBounds:
    """Every analyzer returns a score within the scale."""

    @pytest.mark.parametrize("analyzer", default_analyzers(), ids=lambda a: a.category.value)
    def test_empty_input_scores_within_range(self, analyzer):
        result = analyzer.analyze([])

        assert 300 <= result.score <= 850
        assert result.category == analyzer.category

    @pytest.mark.parametrize("analyzer", default_analyzers(), ids=lambda a: a.category.value)
    @pytest.mark.parametrize("profile", [salaried_profile, chaotic_profile])
    def test_profiles_score_within_range(self, analyzer, profile):
        assert 300 <= analyzer.analyze(profile()).score <= 850

    @pytest.mark.parametrize("analyzer", default_analyzers(), ids=lambda a: a.category.value)
    def test_same_input_same_result(self, analyzer):
        transactions = salaried_profile()

        assert analyzer.analyze(transactions) == analyzer.analyze(list(transactions))

    def test_analyzers_cover_every_category(self):
        assert {a.category for a in default_analyzers()} == set(FactorCategory)


# =============================================================================
# Income Stability Tests
# =============================================================================

class TestIncomeStability:

    def test_no_income_scores_floor(self):
        result = IncomeStabilityAnalyzer().analyze([make_transaction(0, 500, DEBIT, "food")])

        assert result.score == 300
        assert result.get("monthly_income") == 0.0
        assert result.get("income_variability") == 1.0
        assert result.get("consistency_months") == 0

    def test_steady_salary(self):
        result = IncomeStabilityAnalyzer().analyze(salaried_profile())

        # 300 + 120 (income > 50k) + 100 (no variability) + 50 (monthly) + 100 (12 months)
        assert result.score == 670
        assert result.get("monthly_income") == pytest.approx(80_000)
        assert result.get("income_variability") == pytest.approx(0.0)
        assert result.get("salary_frequency") == "monthly"
        assert result.get("consistency_months") == 12

    def test_large_credit_counts_as_income(self):
        analyzer = IncomeStabilityAnalyzer()
        assert analyzer.is_income(make_transaction(0, 15_000, CREDIT, "client payment"))
        assert not analyzer.is_income(make_transaction(0, 5_000, CREDIT, "refund"))
        assert not analyzer.is_income(make_transaction(0, 50_000, DEBIT, "salary advance repay"))

    def test_variable_income_scores_lower(self):
        steady = IncomeStabilityAnalyzer().analyze(salaried_profile())
        variable = IncomeStabilityAnalyzer().analyze([
            make_transaction(0, 90_000, CREDIT, "salary"),
            make_transaction(31, 12_000, CREDIT, "salary"),
            make_transaction(95, 60_000, CREDIT, "salary"),
        ])

        assert variable.score < steady.score
        assert variable.get("income_variability") > 0.4


# =============================================================================
# Savings Rate Tests
# =============================================================================

class TestSavingsRate:

    def test_no_transactions(self):
        result = SavingsRateAnalyzer().analyze([])

        assert result.score == 300 + 20 + 30  # lowest rate band, stable trend
        assert result.get("average_savings_rate") == 0.0
        assert result.get("emergency_fund_months") == 0.0

    def test_spending_more_than_earning_floors_rate_at_zero(self):
        result = SavingsRateAnalyzer().analyze([
            make_transaction(0, 10_000, CREDIT),
            make_transaction(1, 15_000, DEBIT),
        ])
        assert result.get("average_savings_rate") == 0.0

    def test_salaried_profile_saves(self):
        # 80k in, 31.8k out every month
        result = SavingsRateAnalyzer().analyze(salaried_profile())

        assert result.get("average_savings_rate") == pytest.approx(0.6025, abs=1e-3)
        assert result.get("savings_trend") == "stable"
        assert result.get("emergency_fund_months") > 6
        assert result.score == 300 + 150 + 30 + 50

    def test_increasing_trend(self):
        transactions = []
        for m, spent in enumerate([9_000, 9_000, 9_000, 5_000, 3_000, 1_000]):
            transactions.append(make_transaction(m * 31, 10_000, CREDIT))
            transactions.append(make_transaction(m * 31 + 1, spent, DEBIT))

        result = SavingsRateAnalyzer().analyze(transactions)

        assert result.get("savings_trend") == "increasing"


# =============================================================================
# Payment Behavior Tests
# =============================================================================

class TestPaymentBehavior:

    def test_no_qualifying_payments(self):
        result = PaymentBehaviorAnalyzer().analyze([make_transaction(0, 100, DEBIT, "coffee")])

        assert result.get("on_time_rate") == 0.0
        assert result.get("qualifying_payments") == 0
        assert result.score == 300 + 20 + 100

    def test_clean_bill_history(self):
        result = PaymentBehaviorAnalyzer().analyze(salaried_profile())

        assert result.get("overdrafts") == 0
        assert result.get("on_time_rate") == 1.0
        assert result.get("recurring_payments") == 12
        assert result.get("qualifying_payments") == 24
        assert result.score == 300 + 150 + 100 + 50

    def test_bill_that_is_also_recurring_counts_once(self):
        bill = make_transaction(0, 900, DEBIT, "internet", is_recurring=True)
        result = PaymentBehaviorAnalyzer().analyze([bill])
        assert result.get("qualifying_payments") == 1

    def test_overdrafts_lower_the_score(self):
        clean = PaymentBehaviorAnalyzer().analyze(salaried_profile())
        chaotic = PaymentBehaviorAnalyzer().analyze(chaotic_profile())

        assert chaotic.get("overdrafts") == 4
        assert chaotic.get("on_time_rate") == 0.0
        assert chaotic.score < clean.score

    def test_credits_are_never_bills(self):
        assert not PaymentBehaviorAnalyzer.is_bill(
            make_transaction(0, 100, CREDIT, "electricity refund")
        )


# =============================================================================
# Investment Activity Tests
# =============================================================================

class TestInvestmentActivity:

    def test_no_investments(self):
        result = InvestmentActivityAnalyzer().analyze([])

        assert result.get("total_investments") == 0.0
        assert result.get("risk_profile") == "conservative"
        assert result.score == 310

    def test_regular_sip(self):
        result = InvestmentActivityAnalyzer().analyze(salaried_profile())

        assert result.get("total_investments") == pytest.approx(120_000)
        assert result.get("investment_count") == 12
        assert result.get("diversification") == 1
        assert result.get("risk_profile") == "moderate"
        # 300 + 90 (>100k) + 40 (>6) + 25 (1 type) + 20 (moderate)
        assert result.score == 475

    def test_equity_is_aggressive(self):
        result = InvestmentActivityAnalyzer().analyze([
            make_transaction(0, 5_000, DEBIT, "Equity purchase"),
            make_transaction(1, 5_000, DEBIT, "SIP"),
        ])

        assert result.get("risk_profile") == "aggressive"
        assert result.get("diversification") == 2

    @pytest.mark.parametrize("description, expected", [
        ("FD booking", "fixed_deposit"),
        ("Fixed deposit renewal", "fixed_deposit"),
        ("Affidavit stamp", "other"),
        ("stock purchase", "equity"),
        ("mutual fund", "mutual_fund"),
    ])
    def test_instrument_type(self, description, expected):
        assert InvestmentActivityAnalyzer.instrument_type(
            make_transaction(0, 100, DEBIT, description)
        ) == expected
