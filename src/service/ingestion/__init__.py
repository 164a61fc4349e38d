"""
Transaction Ingestion Module: normalization, deduplication, categorization
"""

from .settings import IngestionSettings, ingestion_settings
from .normalizer import NormalizationResult, normalize_batch, normalize_record, sanitize_text
from .deduplicator import dedup_window_start, remove_duplicates
from .categorizer import CATEGORY_RULES, CategoryRule, annotate, categorize, detect_recurring

__all__ = [
    # Settings
    "IngestionSettings",
    "ingestion_settings",
    # Normalizer
    "NormalizationResult",
    "normalize_batch",
    "normalize_record",
    "sanitize_text",
    # Deduplicator
    "dedup_window_start",
    "remove_duplicates",
    # Categorizer
    "CATEGORY_RULES",
    "CategoryRule",
    "annotate",
    "categorize",
    "detect_recurring",
]
