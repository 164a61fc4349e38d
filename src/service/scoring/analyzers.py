"""
Factor Analyzers for the alternative credit scoring engine.

Each analyzer scores one dimension of financial behavior from the same
read-only transaction window:
- Income Stability
- Savings Rate
- Payment Behavior
- Investment Activity

Every analyzer starts at the score floor (300), adds independent bonus
bands, and caps the result at the ceiling (850). Analyzers share no state
and never modify the transactions they read, so they can run in any order
or concurrently.
"""

import math
import re
from collections import defaultdict
from typing import Dict, List, Protocol, Sequence, Tuple

from src.domain.entities import (
    FactorCategory,
    Transaction,
    TransactionCategory,
)

from .models import FactorResult
from .settings import ScoringSettings, scoring_settings

BILL_KEYWORDS = ("electricity", "water", "gas", "internet", "mobile")
INVESTMENT_KEYWORDS = ("sip", "mutual fund", "equity", "stock")

_FIXED_DEPOSIT = re.compile(r"\bfd\b|fixed deposit")


class Analyzer(Protocol):
    """A strategy that scores one financial-behavior dimension."""

    category: FactorCategory

    def analyze(self, transactions: Sequence[Transaction]) -> FactorResult:
        ...


# =============================================================================
# Helpers
# =============================================================================

def month_key(transaction: Transaction) -> Tuple[int, int]:
    """Calendar month (UTC) a transaction falls in."""
    return transaction.occurred_at.year, transaction.occurred_at.month


def monthly_totals(transactions: Sequence[Transaction]) -> Dict[Tuple[int, int], float]:
    """Sum amounts per calendar month, in chronological month order."""
    totals: Dict[Tuple[int, int], float] = defaultdict(float)
    for transaction in transactions:
        totals[month_key(transaction)] += float(transaction.amount)
    return dict(sorted(totals.items()))


def day_gaps(transactions: Sequence[Transaction]) -> List[int]:
    """Whole days between consecutive transactions in time order."""
    ordered = sorted(t.occurred_at for t in transactions)
    return [(later - earlier).days for earlier, later in zip(ordered, ordered[1:])]


def classify_frequency(transactions: Sequence[Transaction]) -> str:
    """
    Classify the cadence of a series of payments.

    Returns:
        "monthly" for an average gap of 25-35 days, "weekly" for 5-9 days,
        otherwise "irregular" (also for fewer than two payments)
    """
    gaps = day_gaps(transactions)
    if not gaps:
        return "irregular"

    average_gap = sum(gaps) / len(gaps)
    if 25 <= average_gap <= 35:
        return "monthly"
    if 5 <= average_gap <= 9:
        return "weekly"
    return "irregular"


def _mean(values: Sequence[float]) -> float:
    return math.fsum(values) / len(values) if values else 0.0


# =============================================================================
# Income Stability
# =============================================================================

class IncomeStabilityAnalyzer:
    """
    Scores how large and how predictable the user's income is.

    Algorithm:
        1. Income = credits categorized as salary, described as salary, or
           larger than the large-credit threshold
        2. Bucket income by calendar month; take the mean and the
           coefficient of variation (population stddev / mean)
        3. Classify the pay cadence from gaps between income credits
        4. Add bonuses for income level, low variability, a regular cadence,
           and the number of months with income (10 points each, max 100)

    Business Rationale:
        Steady income is the strongest predictor of repayment capacity for
        people without a bureau file. A user with no identifiable income
        gets the floor score.
    """

    category = FactorCategory.INCOME_STABILITY

    def __init__(self, settings: ScoringSettings = scoring_settings):
        self._settings = settings

    def is_income(self, transaction: Transaction) -> bool:
        if not transaction.is_credit:
            return False
        return (
            transaction.category == TransactionCategory.SALARY
            or "salary" in transaction.description.lower()
            or float(transaction.amount) > self._settings.large_credit_threshold
        )

    def analyze(self, transactions: Sequence[Transaction]) -> FactorResult:
        income = [t for t in transactions if self.is_income(t)]

        if not income:
            return FactorResult(
                category=self.category,
                score=self._settings.score_floor,
                observations={
                    "monthly_income": 0.0,
                    "income_variability": 1.0,
                    "salary_frequency": "irregular",
                    "consistency_months": 0,
                    "income_transactions": 0,
                },
            )

        monthly = list(monthly_totals(income).values())
        average = _mean(monthly)
        variance = math.fsum((m - average) ** 2 for m in monthly) / len(monthly)
        variability = math.sqrt(variance) / average if average > 0 else 1.0
        frequency = classify_frequency(income)
        consistency_months = sum(1 for m in monthly if m > 0)

        score = self._settings.score_floor

        if average > 100_000:
            score += 150
        elif average > 50_000:
            score += 120
        elif average > 25_000:
            score += 90
        elif average > 15_000:
            score += 60
        else:
            score += 30

        if variability < 0.2:
            score += 100
        elif variability < 0.4:
            score += 70
        elif variability < 0.6:
            score += 40
        else:
            score += 10

        if frequency == "monthly":
            score += 50
        elif frequency == "weekly":
            score += 30

        score += min(consistency_months * 10, 100)

        return FactorResult(
            category=self.category,
            score=min(score, self._settings.score_ceiling),
            observations={
                "monthly_income": average,
                "income_variability": variability,
                "salary_frequency": frequency,
                "consistency_months": consistency_months,
                "income_transactions": len(income),
            },
        )


# =============================================================================
# Savings Rate
# =============================================================================

class SavingsRateAnalyzer:
    """
    Scores the share of monthly inflow that is kept rather than spent.

    Algorithm:
        1. Per calendar month, total credits and total debits
        2. For months with credits, rate = max(0, (credits - debits) / credits)
        3. Average the monthly rates
        4. Trend: mean of the 3 most recent rates vs the 3 earliest
           (needs at least 3 rates; within 0.05 is stable)
        5. Emergency-fund coverage in months = average rate x 12
           (0 when there are no debits to cover)

    Business Rationale:
        Saving consistently shows discipline and leaves a buffer for
        unexpected expenses, so repayments are less likely to be missed.
    """

    category = FactorCategory.SAVINGS_RATE

    TREND_TOLERANCE = 0.05

    def __init__(self, settings: ScoringSettings = scoring_settings):
        self._settings = settings

    def analyze(self, transactions: Sequence[Transaction]) -> FactorResult:
        credits = monthly_totals([t for t in transactions if t.is_credit])
        debits = monthly_totals([t for t in transactions if t.is_debit])

        rates: List[float] = []
        for month in sorted(set(credits) | set(debits)):
            inflow = credits.get(month, 0.0)
            outflow = debits.get(month, 0.0)
            if inflow > 0:
                rates.append(max(0.0, (inflow - outflow) / inflow))

        average_rate = _mean(rates)
        trend = self._trend(rates)
        emergency_months = average_rate * 12 if debits else 0.0

        score = self._settings.score_floor

        if average_rate > 0.3:
            score += 150
        elif average_rate > 0.2:
            score += 120
        elif average_rate > 0.1:
            score += 90
        elif average_rate > 0.05:
            score += 60
        else:
            score += 20

        if trend == "increasing":
            score += 50
        elif trend == "stable":
            score += 30

        if emergency_months > 6:
            score += 50
        elif emergency_months > 3:
            score += 30
        elif emergency_months > 1:
            score += 15

        return FactorResult(
            category=self.category,
            score=min(score, self._settings.score_ceiling),
            observations={
                "average_savings_rate": average_rate,
                "savings_trend": trend,
                "emergency_fund_months": emergency_months,
                "months_analyzed": len(rates),
            },
        )

    def _trend(self, rates: Sequence[float]) -> str:
        if len(rates) < 3:
            return "stable"

        recent = _mean(rates[-3:])
        earlier = _mean(rates[:3])
        if recent > earlier + self.TREND_TOLERANCE:
            return "increasing"
        if recent < earlier - self.TREND_TOLERANCE:
            return "decreasing"
        return "stable"


# =============================================================================
# Payment Behavior
# =============================================================================

class PaymentBehaviorAnalyzer:
    """
    Scores bill-payment reliability.

    Algorithm:
        1. Qualifying payments = debits that are bills (utilities category
           or a utility keyword in the description) or flagged recurring,
           each counted once
        2. Overdrafts = transactions whose balance snapshot is negative
        3. On-time rate = (qualifying - overdrafts) / qualifying, floored
           at 0 (0 when there are no qualifying payments)
        4. Add bonuses for the on-time rate, few overdrafts, and the
           number of recurring debits

    Business Rationale:
        Regular bills paid without dipping below zero are the closest
        signal to a repayment history available from bank data. The feed
        carries no payment-failure status, so every payment that did not
        coincide with a negative balance is assumed on time; this is an
        approximation, not a verified payment record.
    """

    category = FactorCategory.PAYMENT_BEHAVIOR

    def __init__(self, settings: ScoringSettings = scoring_settings):
        self._settings = settings

    @staticmethod
    def is_bill(transaction: Transaction) -> bool:
        if not transaction.is_debit:
            return False
        if transaction.category == TransactionCategory.UTILITIES:
            return True
        description = transaction.description.lower()
        return any(keyword in description for keyword in BILL_KEYWORDS)

    def analyze(self, transactions: Sequence[Transaction]) -> FactorResult:
        bills = [t for t in transactions if self.is_bill(t)]
        recurring = [t for t in transactions if t.is_debit and t.is_recurring]
        qualifying = len({t.id for t in bills} | {t.id for t in recurring})
        overdrafts = sum(
            1 for t in transactions if t.balance is not None and t.balance < 0
        )

        if qualifying > 0:
            on_time_rate = max(0.0, (qualifying - overdrafts) / qualifying)
            bounce_rate = overdrafts / qualifying
        else:
            on_time_rate = 0.0
            bounce_rate = 0.0

        score = self._settings.score_floor

        if on_time_rate > 0.95:
            score += 150
        elif on_time_rate > 0.9:
            score += 120
        elif on_time_rate > 0.8:
            score += 90
        elif on_time_rate > 0.7:
            score += 60
        else:
            score += 20

        if overdrafts == 0:
            score += 100
        elif overdrafts <= 2:
            score += 50
        elif overdrafts <= 5:
            score += 20

        if len(recurring) > 10:
            score += 50
        elif len(recurring) > 5:
            score += 30
        elif len(recurring) > 2:
            score += 15

        return FactorResult(
            category=self.category,
            score=min(score, self._settings.score_ceiling),
            observations={
                "on_time_rate": on_time_rate,
                "overdrafts": overdrafts,
                "recurring_payments": len(recurring),
                "bill_payments": len(bills),
                "qualifying_payments": qualifying,
                "bounce_rate": bounce_rate,
            },
        )


# =============================================================================
# Investment Activity
# =============================================================================

class InvestmentActivityAnalyzer:
    """
    Scores long-term financial planning through investments.

    Algorithm:
        1. Investments = debits categorized as investment or with an
           investment keyword in the description
        2. Total amount and number of investment debits
        3. Instrument types: mutual_fund (sip, mutual fund), equity
           (equity, stock), fixed_deposit (fd, fixed deposit), other
        4. Risk profile: aggressive if any equity, moderate if any mutual
           fund, otherwise conservative
        5. Add bonuses for amount, frequency, 25 points per distinct
           type, and the risk profile

    Business Rationale:
        Regular investing indicates surplus income and planning beyond
        the current month.
    """

    category = FactorCategory.INVESTMENT_ACTIVITY

    def __init__(self, settings: ScoringSettings = scoring_settings):
        self._settings = settings

    @staticmethod
    def is_investment(transaction: Transaction) -> bool:
        if not transaction.is_debit:
            return False
        if transaction.category == TransactionCategory.INVESTMENT:
            return True
        description = transaction.description.lower()
        return any(keyword in description for keyword in INVESTMENT_KEYWORDS)

    @staticmethod
    def instrument_type(transaction: Transaction) -> str:
        description = transaction.description.lower()
        if "sip" in description or "mutual fund" in description:
            return "mutual_fund"
        if "equity" in description or "stock" in description:
            return "equity"
        if _FIXED_DEPOSIT.search(description):
            return "fixed_deposit"
        return "other"

    def analyze(self, transactions: Sequence[Transaction]) -> FactorResult:
        investments = [t for t in transactions if self.is_investment(t)]
        total = math.fsum(float(t.amount) for t in investments)
        count = len(investments)
        types = {self.instrument_type(t) for t in investments}

        if "equity" in types:
            risk_profile = "aggressive"
        elif "mutual_fund" in types:
            risk_profile = "moderate"
        else:
            risk_profile = "conservative"

        score = self._settings.score_floor

        if total > 500_000:
            score += 150
        elif total > 200_000:
            score += 120
        elif total > 100_000:
            score += 90
        elif total > 50_000:
            score += 60
        elif total > 10_000:
            score += 30

        if count > 24:
            score += 100
        elif count > 12:
            score += 70
        elif count > 6:
            score += 40
        elif count > 0:
            score += 20

        score += len(types) * 25

        if risk_profile == "aggressive":
            score += 30
        elif risk_profile == "moderate":
            score += 20
        else:
            score += 10

        return FactorResult(
            category=self.category,
            score=min(score, self._settings.score_ceiling),
            observations={
                "total_investments": total,
                "investment_count": count,
                "diversification": len(types),
                "risk_profile": risk_profile,
            },
        )


def default_analyzers(settings: ScoringSettings = scoring_settings) -> List[Analyzer]:
    """The four analyzers used by the scoring pipeline."""
    return [
        IncomeStabilityAnalyzer(settings),
        PaymentBehaviorAnalyzer(settings),
        SavingsRateAnalyzer(settings),
        InvestmentActivityAnalyzer(settings),
    ]
