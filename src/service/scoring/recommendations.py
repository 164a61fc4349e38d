"""Short, actionable recommendations produced with every score."""

from typing import List

from .models import ScoreAnalysis


def generate_recommendations(analysis: ScoreAnalysis) -> List[str]:
    """
    Turn weak observations into advice, in factor order.

    Each rule fires independently; a user with no weak spots gets an
    empty list.
    """
    recommendations: List[str] = []
    income = analysis.income
    savings = analysis.savings
    payment = analysis.payment
    investment = analysis.investment

    if float(income.get("income_variability", 1.0)) > 0.4:
        recommendations.append(
            "Consider diversifying income sources to reduce income variability"
        )
    if float(income.get("monthly_income")) < 25_000:
        recommendations.append(
            "Focus on increasing monthly income through skill development "
            "or additional income streams"
        )

    if float(savings.get("average_savings_rate")) < 0.1:
        recommendations.append("Aim to save at least 10% of your monthly income")
    if float(savings.get("emergency_fund_months")) < 3:
        recommendations.append("Build an emergency fund covering 3-6 months of expenses")

    if float(payment.get("on_time_rate")) < 0.9:
        recommendations.append(
            "Set up automatic payments for recurring bills to improve payment history"
        )
    if int(payment.get("overdrafts")) > 2:
        recommendations.append("Maintain a buffer balance to avoid overdrafts")

    if float(investment.get("total_investments")) < 50_000:
        recommendations.append(
            "Start investing regularly through SIPs to build long-term wealth"
        )
    if int(investment.get("diversification")) < 2:
        recommendations.append("Diversify investments across different asset classes")

    return recommendations
