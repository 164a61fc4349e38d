"""
Scoring Settings for the alternative credit scoring engine.

This module contains the configurable parameters of the score aggregation.
The analyzer bonus bands are fixed business rules and live with the
analyzers; what is tuned per deployment lives here.

Environment variables use the SCORING_ prefix:
    SCORING_WEIGHT_INCOME=0.35
    SCORING_ANALYSIS_WINDOW_DAYS=365
    SCORING_TREND_THRESHOLD=20

Usage:
    from src.service.scoring.settings import scoring_settings

    # Use default settings (loaded from env)
    weights = scoring_settings.weights

    # Or create custom settings for testing
    custom = ScoringSettings(trend_threshold=10)
"""

import math
from functools import lru_cache
from typing import Dict

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.domain.entities import FactorCategory


class ScoringSettings(BaseSettings):
    """
    Configurable parameters for the scoring pipeline.

    All settings can be overridden via environment variables with SCORING_ prefix.
    Scores are on the 300-850 scale.
    """

    model_config = SettingsConfigDict(
        env_prefix="SCORING_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Factor Weights ===
    weight_income: float = Field(
        default=0.35,
        ge=0.0,
        le=1.0,
        description="Weight for Income Stability in the final score",
    )
    weight_payment: float = Field(
        default=0.25,
        ge=0.0,
        le=1.0,
        description="Weight for Payment Behavior in the final score",
    )
    weight_savings: float = Field(
        default=0.25,
        ge=0.0,
        le=1.0,
        description="Weight for Savings Rate in the final score",
    )
    weight_investment: float = Field(
        default=0.15,
        ge=0.0,
        le=1.0,
        description="Weight for Investment Activity in the final score",
    )

    # === Score Range ===
    score_floor: int = Field(
        default=300,
        description="Lowest possible score and starting point of every analyzer",
    )
    score_ceiling: int = Field(
        default=850,
        description="Highest possible score",
    )

    # === Analysis Window ===
    analysis_window_days: int = Field(
        default=365,
        ge=30,
        description="Days of transaction history fed to the analyzers",
    )
    large_credit_threshold: float = Field(
        default=10_000.0,
        gt=0.0,
        description="Credits above this amount are treated as income",
    )

    # === Trend ===
    trend_threshold: int = Field(
        default=20,
        ge=0,
        description="Score change between snapshots needed to call a trend",
    )
    trend_history_limit: int = Field(
        default=2,
        ge=2,
        description="Snapshots read to derive the trend",
    )

    # === Presentation ===
    currency_symbol: str = Field(
        default="₹",
        description="Currency symbol used in factor descriptions",
    )

    @model_validator(mode="after")
    def validate_weights(self) -> "ScoringSettings":
        """Factor weights must add up to exactly 1.0."""
        total = math.fsum(self.weights.values())
        if not math.isclose(total, 1.0, abs_tol=1e-9):
            raise ValueError(f"Factor weights must sum to 1.0, got {total}")
        if self.score_floor >= self.score_ceiling:
            raise ValueError(
                f"score_floor ({self.score_floor}) must be below score_ceiling ({self.score_ceiling})"
            )
        return self

    @property
    def weights(self) -> Dict[FactorCategory, float]:
        """Weight per factor category, in display order."""
        return {
            FactorCategory.INCOME_STABILITY: self.weight_income,
            FactorCategory.PAYMENT_BEHAVIOR: self.weight_payment,
            FactorCategory.SAVINGS_RATE: self.weight_savings,
            FactorCategory.INVESTMENT_ACTIVITY: self.weight_investment,
        }

    @property
    def score_span(self) -> int:
        """Width of the score range."""
        return self.score_ceiling - self.score_floor


@lru_cache
def get_scoring_settings() -> ScoringSettings:
    """Get cached scoring settings instance."""
    return ScoringSettings()


scoring_settings = get_scoring_settings()
