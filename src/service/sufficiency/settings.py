"""
Data Sufficiency Settings.

Environment variables use the SUFFICIENCY_ prefix:
    SUFFICIENCY_MIN_TRANSACTIONS=50
    SUFFICIENCY_CRITICAL_WEIGHT=0.25
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SufficiencySettings(BaseSettings):
    """
    Minimum and optimal data requirements for scoring.

    All settings can be overridden via environment variables with SUFFICIENCY_ prefix.
    """

    model_config = SettingsConfigDict(
        env_prefix="SUFFICIENCY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Minimum Requirements ===
    min_transactions: int = Field(default=50, ge=1, description="Minimum transactions")
    min_accounts: int = Field(default=2, ge=1, description="Minimum active account connections")
    min_timespan_days: int = Field(default=90, ge=1, description="Minimum days between first and last transaction")
    min_categories: int = Field(default=3, ge=1, description="Minimum distinct transaction categories")
    min_monthly_transactions: int = Field(default=5, ge=1, description="Minimum average transactions per month")

    # === Optimal Requirements (accuracy bonuses) ===
    optimal_transactions: int = Field(default=200, ge=1, description="Transactions above this raise estimated accuracy")
    optimal_accounts: int = Field(default=4, ge=1, description="Accounts above this raise estimated accuracy")

    # === Requirement Weights ===
    weight_transactions: float = Field(default=0.30, ge=0.0, le=1.0)
    weight_accounts: float = Field(default=0.25, ge=0.0, le=1.0)
    weight_timespan: float = Field(default=0.20, ge=0.0, le=1.0)
    weight_categories: float = Field(default=0.15, ge=0.0, le=1.0)
    weight_monthly_frequency: float = Field(default=0.10, ge=0.0, le=1.0)

    critical_weight: float = Field(
        default=0.25,
        ge=0.0,
        le=1.0,
        description="Requirements weighing at least this must be met before scoring",
    )

    # === Data Improvement ===
    target_quality_score: int = Field(
        default=85,
        ge=0,
        le=100,
        description="Data quality score considered good",
    )
    lookback_days: int = Field(
        default=365,
        ge=30,
        description="Days of history evaluated",
    )


@lru_cache
def get_sufficiency_settings() -> SufficiencySettings:
    """Get cached sufficiency settings instance."""
    return SufficiencySettings()


sufficiency_settings = get_sufficiency_settings()
