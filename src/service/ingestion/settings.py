"""
Ingestion Settings for the alternative credit scoring engine.

Environment variables use the INGESTION_ prefix:
    INGESTION_DEDUP_WINDOW_DAYS=90
    INGESTION_WRITE_BATCH_SIZE=100
"""

from decimal import Decimal
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class IngestionSettings(BaseSettings):
    """
    Configurable parameters for transaction normalization and storage.

    All settings can be overridden via environment variables with INGESTION_ prefix.
    """

    model_config = SettingsConfigDict(
        env_prefix="INGESTION_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    dedup_window_days: int = Field(
        default=90,
        ge=1,
        description="Trailing window of stored transactions compared for duplicates",
    )
    write_batch_size: int = Field(
        default=100,
        ge=1,
        le=10_000,
        description="Rows written per atomic chunk",
    )
    max_text_length: int = Field(
        default=255,
        ge=1,
        description="Maximum length of description and merchant text",
    )
    large_amount_warning: Decimal = Field(
        default=Decimal("10000000"),
        gt=0,
        description="Amounts above this are flagged (not rejected) as improbable",
    )
    recurrence_tolerance_days: float = Field(
        default=3.0,
        ge=0.0,
        description="Max deviation from the mean interval for a recurring series",
    )


@lru_cache
def get_ingestion_settings() -> IngestionSettings:
    """Get cached ingestion settings instance."""
    return IngestionSettings()


ingestion_settings = get_ingestion_settings()
