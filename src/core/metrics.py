"""Prometheus metrics for the alternative credit scoring service.

Metrics are organized into two categories:

Business Metrics (for Product/Risk):
- altscore_score_calculations_total: Scoring runs by outcome
- altscore_score_band_total: Computed scores by band
- altscore_transactions_ingested_total: Ingested records by status

Technical Metrics (for Engineering/SRE):
- altscore_scoring_latency_seconds: Score computation latency
- altscore_ingestion_latency_seconds: Batch ingestion latency
- altscore_http_requests_total: HTTP requests by endpoint/status
- altscore_http_request_latency_seconds: HTTP latency by endpoint
"""

import time
from contextlib import contextmanager
from typing import Generator

from prometheus_client import Counter, Histogram, REGISTRY, generate_latest
from prometheus_client.exposition import CONTENT_TYPE_LATEST

from src.application.dto import IngestionStats
from src.service.explanation import score_range


# =============================================================================
# Business Metrics (Product/Risk dashboards)
# =============================================================================

score_calculations_total = Counter(
    "altscore_score_calculations_total",
    "Total number of credit score calculations",
    ["outcome"],  # success, insufficient_data, error
)

score_band_total = Counter(
    "altscore_score_band_total",
    "Computed credit scores by band",
    ["band"],
)

transactions_ingested_total = Counter(
    "altscore_transactions_ingested_total",
    "Total number of ingested transaction records",
    ["status"],  # stored, duplicate, rejected, failed
)


# =============================================================================
# Technical Metrics (Engineering/SRE dashboards)
# =============================================================================

scoring_latency = Histogram(
    "altscore_scoring_latency_seconds",
    "Credit score computation latency in seconds",
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

ingestion_latency = Histogram(
    "altscore_ingestion_latency_seconds",
    "Transaction batch ingestion latency in seconds",
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

http_requests_total = Counter(
    "altscore_http_requests_total",
    "Total HTTP requests by endpoint and status",
    ["method", "endpoint", "status"],
)

http_request_latency = Histogram(
    "altscore_http_request_latency_seconds",
    "HTTP request latency by endpoint",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)


# =============================================================================
# Helper Functions
# =============================================================================

def record_score_calculation(outcome: str) -> None:
    """Record the outcome of a scoring run."""
    score_calculations_total.labels(outcome=outcome).inc()


def record_score_band(score: int) -> None:
    """Record a computed score in its band."""
    score_band_total.labels(band=_get_score_band(score)).inc()


def _get_score_band(score: int) -> str:
    """Map a score to its band label (e.g. "very_good")."""
    return score_range(score).category.lower().replace(" ", "_")


def record_ingestion(stats: IngestionStats) -> None:
    """Record the counters of one ingestion batch."""
    for status, count in (
        ("stored", stats.stored),
        ("duplicate", stats.duplicates),
        ("rejected", stats.rejected),
        ("failed", stats.failed),
    ):
        if count:
            transactions_ingested_total.labels(status=status).inc(count)


@contextmanager
def track_scoring_latency() -> Generator[None, None, None]:
    """Context manager to track score computation latency."""
    start = time.perf_counter()
    try:
        yield
    finally:
        duration = time.perf_counter() - start
        scoring_latency.observe(duration)


@contextmanager
def track_ingestion_latency() -> Generator[None, None, None]:
    """Context manager to track ingestion latency."""
    start = time.perf_counter()
    try:
        yield
    finally:
        duration = time.perf_counter() - start
        ingestion_latency.observe(duration)


def record_http_request(method: str, endpoint: str, status: int, duration: float) -> None:
    """Record an HTTP request."""
    http_requests_total.labels(method=method, endpoint=endpoint, status=str(status)).inc()
    http_request_latency.labels(method=method, endpoint=endpoint).observe(duration)


def get_metrics() -> bytes:
    """Get current metrics in Prometheus format."""
    return generate_latest(REGISTRY)


def get_metrics_content_type() -> str:
    """Get the content type for metrics response."""
    return CONTENT_TYPE_LATEST
