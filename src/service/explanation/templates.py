"""
Narrative templates for score explanations.

Explanations are chosen from five impact bands per factor. Bands are
listed highest first as (exclusive lower bound, text); the last band has
no lower bound.
"""

from typing import Dict, List, Optional, Sequence, Tuple

from src.domain.entities import FactorCategory
from src.service.sufficiency.models import Priority

from .models import ImprovementTip

Band = Tuple[Optional[int], str]

FACTOR_NAMES: Dict[FactorCategory, str] = {
    FactorCategory.INCOME_STABILITY: "Income Stability",
    FactorCategory.SAVINGS_RATE: "Savings Rate",
    FactorCategory.PAYMENT_BEHAVIOR: "Payment Behavior",
    FactorCategory.INVESTMENT_ACTIVITY: "Investment Activity",
}

EXPLANATION_BANDS: Dict[FactorCategory, Sequence[Band]] = {
    FactorCategory.INCOME_STABILITY: (
        (30, "Your income is very stable and consistent, which significantly boosts your credit score. "
             "Lenders view stable income as a strong indicator of your ability to repay loans."),
        (10, "Your income shows good stability, positively contributing to your credit score. "
             "Regular income patterns demonstrate financial reliability."),
        (-10, "Your income stability is moderate. While not negatively impacting your score significantly, "
              "there's room for improvement in income consistency."),
        (-30, "Your income shows some variability, which is reducing your credit score. "
              "Irregular income patterns make lenders cautious about lending decisions."),
        (None, "Your income is highly variable, significantly reducing your credit score. "
               "Inconsistent income makes it difficult for lenders to assess your repayment capacity."),
    ),
    FactorCategory.SAVINGS_RATE: (
        (30, "Excellent savings rate! You consistently save a significant portion of your income, "
             "which significantly boosts your score through strong financial discipline."),
        (10, "Good savings habits are positively contributing to your score. "
             "Regular savings show financial responsibility and planning for the future."),
        (-10, "Your savings rate is moderate. Building a more consistent savings habit "
              "could help improve your credit score over time."),
        (-30, "Low savings rate is impacting your score. Increasing your monthly savings "
              "would demonstrate better financial management to lenders."),
        (None, "Very low or negative savings rate is significantly reducing your credit score. "
               "Focus on reducing expenses and increasing savings."),
    ),
    FactorCategory.PAYMENT_BEHAVIOR: (
        (30, "Excellent payment history! You consistently pay bills on time with no overdrafts, "
             "which significantly boosts your credit score."),
        (10, "Good payment behavior is helping your credit score. "
             "Most of your payments are on time with minimal issues."),
        (-10, "Your payment behavior is average. Some late payments or overdrafts "
              "are preventing a higher score."),
        (-30, "Payment issues are negatively affecting your score. Multiple late payments "
              "or overdrafts indicate financial stress to lenders."),
        (None, "Poor payment history is significantly reducing your credit score. "
               "Frequent overdrafts and missed payments are major red flags for lenders."),
    ),
    FactorCategory.INVESTMENT_ACTIVITY: (
        (30, "Strong investment activity shows financial sophistication and long-term planning, "
             "which significantly boosts your credit score."),
        (10, "Regular investments demonstrate good financial planning "
             "and contribute positively to your creditworthiness."),
        (-10, "Limited investment activity. While not negatively impacting your score, "
              "regular investments could help improve it."),
        (-30, "Occasional or small investments add little to your score. "
              "Investing regularly would show stronger long-term planning."),
        (None, "No significant investment activity detected, which is reducing your score. "
               "Starting regular investments could help improve your credit score over time."),
    ),
}

# (exclusive upper bound, actions); the last entry has no bound
ACTION_BANDS: Dict[FactorCategory, Sequence[Tuple[Optional[int], List[str]]]] = {
    FactorCategory.INCOME_STABILITY: (
        (0, [
            "Consider finding additional income sources to reduce income variability",
            "Negotiate for a more stable salary structure with your employer",
            "Build skills that could lead to higher, more stable income",
            "Consider freelancing or part-time work to supplement irregular income",
        ]),
        (20, [
            "Maintain current income stability",
            "Look for opportunities to increase income gradually",
            "Document all income sources for better credit assessment",
        ]),
        (None, ["Continue maintaining excellent income stability"]),
    ),
    FactorCategory.SAVINGS_RATE: (
        (0, [
            "Create a monthly budget to track expenses",
            "Set up automatic transfers to savings account",
            "Start with saving at least 10% of monthly income",
            "Reduce unnecessary expenses to increase savings rate",
        ]),
        (20, [
            "Increase savings rate gradually by 2-3% each month",
            "Set up emergency fund covering 3-6 months of expenses",
            "Consider high-yield savings accounts for better returns",
        ]),
        (None, [
            "Maintain excellent savings discipline",
            "Consider investment options for surplus savings",
        ]),
    ),
    FactorCategory.PAYMENT_BEHAVIOR: (
        (0, [
            "Set up automatic payments for all recurring bills",
            "Maintain minimum balance to avoid overdrafts",
            "Use calendar reminders for payment due dates",
            "Consider consolidating bills to reduce payment complexity",
        ]),
        (20, [
            "Continue current payment discipline",
            "Set up alerts for low account balances",
            "Pay bills a few days before due date for safety",
        ]),
        (None, [
            "Maintain excellent payment history",
            "Consider increasing credit utilization responsibly",
        ]),
    ),
    FactorCategory.INVESTMENT_ACTIVITY: (
        (5, [
            "Start with small SIP investments in mutual funds",
            "Learn about different investment options",
            "Set aside 10-15% of income for investments",
            "Consider consulting a financial advisor",
        ]),
        (15, [
            "Diversify investment portfolio across asset classes",
            "Increase investment amount gradually",
            "Review and rebalance portfolio quarterly",
        ]),
        (None, [
            "Maintain current investment discipline",
            "Consider advanced investment strategies",
        ]),
    ),
}

# (exclusive bound, reason); positive bounds apply to increases, negative to decreases
CHANGE_REASONS: Sequence[Tuple[int, str]] = (
    (20, "Significant improvement in financial behavior"),
    (10, "Positive changes in spending and saving patterns"),
    (5, "Minor improvements in financial management"),
    (-20, "Concerning changes in financial behavior"),
    (-10, "Some negative changes in financial patterns"),
    (-5, "Minor decline in financial metrics"),
)

FACTOR_TIPS: Dict[FactorCategory, ImprovementTip] = {
    FactorCategory.INCOME_STABILITY: ImprovementTip(
        category="Income",
        priority=Priority.HIGH,
        title="Stabilize Your Income",
        description="Consistent income is crucial for a good credit score. "
                    "Focus on creating predictable income streams.",
        potential_impact=50,
        timeframe="3-6 months",
        action_items=[
            "Negotiate for a fixed salary component",
            "Develop multiple income sources",
            "Build skills for higher-paying stable jobs",
        ],
    ),
    FactorCategory.SAVINGS_RATE: ImprovementTip(
        category="Savings",
        priority=Priority.HIGH,
        title="Increase Your Savings Rate",
        description="Higher savings rate demonstrates financial discipline "
                    "and improves your creditworthiness.",
        potential_impact=40,
        timeframe="2-3 months",
        action_items=[
            "Create and stick to a monthly budget",
            "Automate savings transfers",
            "Reduce discretionary spending by 10-15%",
        ],
    ),
    FactorCategory.PAYMENT_BEHAVIOR: ImprovementTip(
        category="Payments",
        priority=Priority.HIGH,
        title="Perfect Your Payment History",
        description="Payment history is the most important factor. "
                    "Never miss a payment or overdraft.",
        potential_impact=60,
        timeframe="1-2 months",
        action_items=[
            "Set up automatic bill payments",
            "Maintain buffer balance in accounts",
            "Use payment reminder apps",
        ],
    ),
    FactorCategory.INVESTMENT_ACTIVITY: ImprovementTip(
        category="Investments",
        priority=Priority.MEDIUM,
        title="Start Regular Investments",
        description="Regular investments show financial planning "
                    "and can boost your credit score.",
        potential_impact=25,
        timeframe="1-3 months",
        action_items=[
            "Start SIP in mutual funds",
            "Invest 10-15% of monthly income",
            "Diversify across different asset classes",
        ],
    ),
}

GENERAL_TIPS: Sequence[ImprovementTip] = (
    ImprovementTip(
        category="General",
        priority=Priority.MEDIUM,
        title="Build Emergency Fund",
        description="An emergency fund covering 3-6 months of expenses shows financial preparedness.",
        potential_impact=30,
        timeframe="6-12 months",
        action_items=[
            "Calculate monthly expenses",
            "Save 20% of income until target is reached",
            "Keep emergency fund in liquid savings account",
        ],
    ),
    ImprovementTip(
        category="General",
        priority=Priority.LOW,
        title="Monitor Your Score Regularly",
        description="Regular monitoring helps you track progress and catch issues early.",
        potential_impact=10,
        timeframe="Ongoing",
        action_items=[
            "Check score monthly",
            "Review factor changes",
            "Adjust financial behavior based on insights",
        ],
    ),
)

# (inclusive lower bound, upper bound, name), highest first
SCORE_RANGES: Sequence[Tuple[int, int, str]] = (
    (750, 850, "Excellent"),
    (700, 749, "Very Good"),
    (650, 699, "Good"),
    (600, 649, "Fair"),
    (300, 599, "Poor"),
)
