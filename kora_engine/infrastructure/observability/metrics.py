"""Prometheus metrics for engine calculations, risk scores and surfaced alerts"""

from typing import Optional
from prometheus_client import Counter, Histogram

# Engine metrics
calculation_counter = Counter(
    "kora_calculation_total",
    "Engine calculations performed",
    ["operation"],  # financial_state | patterns | streak | alerts | insights
)

invalid_argument_counter = Counter(
    "kora_invalid_argument_total",
    "Calculations rejected for caller contract violations",
    ["operation"],
)

risk_score_histogram = Histogram(
    "kora_risk_score",
    "Distribution of computed risk scores",
    buckets=[10, 20, 30, 40, 50, 60, 70, 80, 90, 100],
)

# Alert metrics
alert_counter = Counter(
    "kora_alert_total",
    "Proactive alerts surfaced",
    ["type"],  # danger_zone | weekend_warning | payday_checkin | limit_followup | none
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_calculation(operation: str) -> None:
    calculation_counter.labels(operation=operation).inc()


def record_risk_score(score: int) -> None:
    risk_score_histogram.observe(score)


def record_alert(alert_type: Optional[str]) -> None:
    """Count surfaced alerts, including evaluations where nothing fired"""
    alert_counter.labels(type=alert_type or "none").inc()
