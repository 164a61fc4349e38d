"""
Human-readable factor descriptions.

The description stored with each ScoreFactor is the only place the raw
observations survive persistence, so the formatting and the parsing of
the headline value are kept side by side.
"""

import math
import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, Dict

from src.domain.entities import FactorCategory

from .models import FactorResult


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves towards positive infinity."""
    return math.floor(value + 0.5)


def round_to_hundredths(value: float) -> float:
    """Half-up rounding to two decimals, ignoring float representation noise."""
    exact = Decimal(str(round(value, 10)))
    return float(exact.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def _income(result: FactorResult, currency: str) -> str:
    income = round_half_up(float(result.get("monthly_income")))
    months = int(result.get("consistency_months"))
    return f"Monthly income: {currency}{income:,}, Consistency: {months} months"


def _payment(result: FactorResult, currency: str) -> str:
    on_time = round_half_up(float(result.get("on_time_rate")) * 100)
    overdrafts = int(result.get("overdrafts"))
    return f"On-time payments: {on_time}%, Overdrafts: {overdrafts}"


def _savings(result: FactorResult, currency: str) -> str:
    rate = round_half_up(float(result.get("average_savings_rate")) * 100)
    trend = result.get("savings_trend", "stable")
    return f"Average savings rate: {rate}%, Trend: {trend}"


def _investment(result: FactorResult, currency: str) -> str:
    total = round_half_up(float(result.get("total_investments")))
    profile = result.get("risk_profile", "conservative")
    return f"Total investments: {currency}{total:,}, Risk profile: {profile}"


_FORMATTERS: Dict[FactorCategory, Callable[[FactorResult, str], str]] = {
    FactorCategory.INCOME_STABILITY: _income,
    FactorCategory.PAYMENT_BEHAVIOR: _payment,
    FactorCategory.SAVINGS_RATE: _savings,
    FactorCategory.INVESTMENT_ACTIVITY: _investment,
}


def describe(result: FactorResult, currency: str) -> str:
    """Render the description persisted with a factor."""
    return _FORMATTERS[result.category](result, currency)


def current_value(category: FactorCategory, description: str, currency: str) -> str:
    """
    Extract the headline value from a stored factor description.

    Returns "N/A" when the description does not have the expected shape.
    """
    symbol = re.escape(currency)

    if category == FactorCategory.INCOME_STABILITY:
        match = re.search(rf"Monthly income: {symbol}(\d[\d,]*\d|\d)", description)
        return f"{currency}{match.group(1)}/month" if match else "N/A"
    if category == FactorCategory.SAVINGS_RATE:
        match = re.search(r"Average savings rate: (\d+)%", description)
        return f"{match.group(1)}%" if match else "N/A"
    if category == FactorCategory.PAYMENT_BEHAVIOR:
        match = re.search(r"On-time payments: (\d+)%", description)
        return f"{match.group(1)}%" if match else "N/A"
    if category == FactorCategory.INVESTMENT_ACTIVITY:
        match = re.search(rf"Total investments: {symbol}(\d[\d,]*\d|\d)", description)
        return f"{currency}{match.group(1)}" if match else "N/A"
    return "N/A"
