"""
Data Sufficiency Evaluation.

Decides whether a user has enough transaction data for a meaningful
score, how good that data is, and what would improve it.

Requirements (defaults):
    Transaction History           >= 50 transactions   weight 0.30
    Account Connections           >= 2 active accounts weight 0.25
    Data Time Span                >= 90 days           weight 0.20
    Transaction Categories        >= 3 categories      weight 0.15
    Monthly Transaction Frequency >= 5 per month       weight 0.10
"""

import math
from typing import List, Sequence

from src.domain.entities import Account, AccountType, Transaction
from src.service.scoring import round_half_up, round_to_hundredths

from .models import (
    DataRecommendation,
    DataRequirement,
    ImprovementPlan,
    Priority,
    ProceedCheck,
    SufficiencyReport,
)
from .settings import SufficiencySettings, sufficiency_settings

TRANSACTION_HISTORY = "transaction_history"
ACCOUNT_CONNECTIONS = "account_connections"
DATA_TIMESPAN = "data_timespan"
TRANSACTION_CATEGORIES = "transaction_categories"
MONTHLY_FREQUENCY = "monthly_frequency"


# =============================================================================
# Measurements
# =============================================================================

def data_timespan_days(transactions: Sequence[Transaction]) -> int:
    """Whole days between the earliest and latest transaction."""
    if not transactions:
        return 0
    timestamps = [t.occurred_at for t in transactions]
    return (max(timestamps) - min(timestamps)).days


def count_categories(transactions: Sequence[Transaction]) -> int:
    """Number of distinct categories assigned to the transactions."""
    return len({t.category for t in transactions if t.category is not None})


def monthly_frequency(transactions: Sequence[Transaction]) -> int:
    """Average transactions per 30-day month, with at least one month assumed."""
    if not transactions:
        return 0
    months = max(1.0, data_timespan_days(transactions) / 30)
    return round_half_up(len(transactions) / months)


# =============================================================================
# Evaluation
# =============================================================================

def evaluate_requirements(
    transactions: Sequence[Transaction],
    accounts: Sequence[Account],
    settings: SufficiencySettings = sufficiency_settings,
) -> List[DataRequirement]:
    """Measure the five requirements for one user."""
    return [
        DataRequirement(
            key=TRANSACTION_HISTORY,
            name="Transaction History",
            category="transactions",
            current=len(transactions),
            required=settings.min_transactions,
            weight=settings.weight_transactions,
        ),
        DataRequirement(
            key=ACCOUNT_CONNECTIONS,
            name="Account Connections",
            category="accounts",
            current=len(accounts),
            required=settings.min_accounts,
            weight=settings.weight_accounts,
        ),
        DataRequirement(
            key=DATA_TIMESPAN,
            name="Data Time Span",
            category="timespan",
            current=data_timespan_days(transactions),
            required=settings.min_timespan_days,
            weight=settings.weight_timespan,
        ),
        DataRequirement(
            key=TRANSACTION_CATEGORIES,
            name="Transaction Categories",
            category="categories",
            current=count_categories(transactions),
            required=settings.min_categories,
            weight=settings.weight_categories,
        ),
        DataRequirement(
            key=MONTHLY_FREQUENCY,
            name="Monthly Transaction Frequency",
            category="transactions",
            current=monthly_frequency(transactions),
            required=settings.min_monthly_transactions,
            weight=settings.weight_monthly_frequency,
        ),
    ]


def calculate_quality_score(requirements: Sequence[DataRequirement]) -> int:
    """
    Weighted completion of all requirements on a 0-100 scale.

    Algorithm:
        round(sum(min(current / required, 1) x weight x 100) / sum(weights))

    Raising any requirement's current value never lowers the result.
    """
    total_weight = math.fsum(r.weight for r in requirements)
    if total_weight <= 0:
        return 0
    weighted = math.fsum(r.completion * r.weight * 100 for r in requirements)
    return round_half_up(weighted / total_weight)


def estimate_accuracy(
    quality_score: int,
    requirements: Sequence[DataRequirement],
    settings: SufficiencySettings = sufficiency_settings,
) -> float:
    """
    Estimate how accurate a score computed from this data would be.

    Algorithm:
        1. Start from quality_score / 100
        2. x0.7 if transaction history is unmet, x0.8 if account
           connections are unmet (both can apply)
        3. +0.1 above the optimal transaction count, +0.05 above the
           optimal account count
        4. Clamp to [0, 1]
    """
    by_key = {r.key: r for r in requirements}
    history = by_key.get(TRANSACTION_HISTORY)
    accounts = by_key.get(ACCOUNT_CONNECTIONS)

    accuracy = quality_score / 100
    if history is not None and not history.met:
        accuracy *= 0.7
    if accounts is not None and not accounts.met:
        accuracy *= 0.8

    if history is not None and history.current > settings.optimal_transactions:
        accuracy += 0.1
    if accounts is not None and accounts.current > settings.optimal_accounts:
        accuracy += 0.05

    return round_to_hundredths(max(0.0, min(1.0, accuracy)))


# =============================================================================
# Recommendations
# =============================================================================

def requirement_recommendation(requirement: DataRequirement) -> DataRecommendation | None:
    """Advice for one unmet requirement."""
    shortfall = max(0, requirement.required - requirement.current)

    if requirement.key == TRANSACTION_HISTORY:
        return DataRecommendation(
            priority=Priority.HIGH,
            title="Increase Transaction History",
            description=f"You need {shortfall} more transactions for accurate scoring.",
            action_items=[
                "Connect additional bank accounts",
                "Include credit card accounts",
                "Wait for more transaction data to accumulate",
                "Ensure all primary accounts are connected",
            ],
            potential_impact=40,
        )
    if requirement.key == MONTHLY_FREQUENCY:
        return DataRecommendation(
            priority=Priority.MEDIUM,
            title="Improve Transaction Frequency",
            description="More regular transactions provide better insights into your financial behavior.",
            action_items=[
                "Use connected accounts more regularly",
                "Connect accounts with higher transaction volume",
                "Include salary and utility payment accounts",
            ],
            potential_impact=20,
        )
    if requirement.key == ACCOUNT_CONNECTIONS:
        return DataRecommendation(
            priority=Priority.HIGH,
            title="Connect More Accounts",
            description=f"Connect {shortfall} more accounts for comprehensive analysis.",
            action_items=[
                "Add your primary savings account",
                "Connect credit card accounts",
                "Include investment accounts if available",
                "Add loan accounts for complete picture",
            ],
            potential_impact=35,
        )
    if requirement.key == DATA_TIMESPAN:
        return DataRecommendation(
            priority=Priority.MEDIUM,
            title="Extend Data History",
            description=f"Need {math.ceil(shortfall / 30)} more months of data.",
            action_items=[
                "Wait for more transaction history to accumulate",
                "Connect older accounts with longer history",
                "Ensure data sync is working properly",
            ],
            potential_impact=25,
        )
    if requirement.key == TRANSACTION_CATEGORIES:
        return DataRecommendation(
            priority=Priority.MEDIUM,
            title="Diversify Transaction Types",
            description=f"Need {shortfall} more transaction categories.",
            action_items=[
                "Connect accounts used for different purposes",
                "Include utility payment accounts",
                "Add investment and loan accounts",
                "Connect credit cards for spending patterns",
            ],
            potential_impact=15,
        )
    return None


def account_mix_recommendations(accounts: Sequence[Account]) -> List[DataRecommendation]:
    """Advice on account types missing from the user's connections."""
    types = {a.account_type for a in accounts}
    recommendations: List[DataRecommendation] = []

    if AccountType.SAVINGS not in types:
        recommendations.append(
            DataRecommendation(
                priority=Priority.HIGH,
                title="Connect Savings Account",
                description="Savings account data is crucial for analyzing your financial stability.",
                action_items=[
                    "Connect your primary savings account",
                    "Include salary account if different",
                    "Add any fixed deposit accounts",
                ],
                potential_impact=30,
            )
        )
    if AccountType.CREDIT not in types:
        recommendations.append(
            DataRecommendation(
                priority=Priority.MEDIUM,
                title="Add Credit Accounts",
                description="Credit card data helps analyze spending patterns and payment behavior.",
                action_items=[
                    "Connect credit card accounts",
                    "Include any loan accounts",
                    "Add overdraft facilities if available",
                ],
                potential_impact=25,
            )
        )
    if AccountType.INVESTMENT not in types:
        recommendations.append(
            DataRecommendation(
                priority=Priority.LOW,
                title="Include Investment Accounts",
                description="Investment data shows financial planning and risk appetite.",
                action_items=[
                    "Connect mutual fund accounts",
                    "Add stock trading accounts",
                    "Include SIP and recurring investment accounts",
                ],
                potential_impact=15,
            )
        )
    return recommendations


def rank_recommendations(
    recommendations: Sequence[DataRecommendation],
    limit: int = 5,
) -> List[DataRecommendation]:
    """Order by priority, then by potential impact, and keep the top entries."""
    ranked = sorted(
        recommendations,
        key=lambda r: (r.priority.rank, r.potential_impact),
        reverse=True,
    )
    return ranked[:limit]


# =============================================================================
# Entry points
# =============================================================================

def evaluate_sufficiency(
    transactions: Sequence[Transaction],
    accounts: Sequence[Account],
    settings: SufficiencySettings = sufficiency_settings,
) -> SufficiencyReport:
    """
    Evaluate a user's data against all requirements.

    Args:
        transactions: The user's transactions in the lookback window
        accounts: The user's active account connections
        settings: Thresholds and weights

    Returns:
        SufficiencyReport with requirements, quality score, top-5
        recommendations and estimated accuracy
    """
    requirements = evaluate_requirements(transactions, accounts, settings)
    quality = calculate_quality_score(requirements)

    recommendations = [
        rec
        for rec in (requirement_recommendation(r) for r in requirements if not r.met)
        if rec is not None
    ]
    recommendations.extend(account_mix_recommendations(accounts))

    return SufficiencyReport(
        requirements=requirements,
        quality_score=quality,
        recommendations=rank_recommendations(recommendations),
        estimated_accuracy=estimate_accuracy(quality, requirements, settings),
    )


def check_can_proceed(
    report: SufficiencyReport,
    settings: SufficiencySettings = sufficiency_settings,
) -> ProceedCheck:
    """Scoring may proceed once every critical requirement is met."""
    blocking = [
        r for r in report.requirements
        if r.weight >= settings.critical_weight and not r.met
    ]
    return ProceedCheck(
        can_proceed=not blocking,
        unmet_requirements=[r.summary() for r in blocking],
    )


def plan_improvements(
    report: SufficiencyReport,
    settings: SufficiencySettings = sufficiency_settings,
) -> ImprovementPlan:
    """Gap to the target data quality with a rough timeframe to close it."""
    gap = max(0, settings.target_quality_score - report.quality_score)

    if gap > 40:
        timeframe = "4-8 weeks"
    elif gap > 20:
        timeframe = "2-4 weeks"
    else:
        timeframe = "1-2 weeks"

    return ImprovementPlan(
        current_score=report.quality_score,
        target_score=settings.target_quality_score,
        suggestions=report.recommendations,
        estimated_timeframe=timeframe,
    )
