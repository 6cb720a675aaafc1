"""Prometheus metrics for monitoring assessments, validation failures and score persistence"""

from prometheus_client import Counter, Histogram

# Assessment metrics
assessment_counter = Counter(
    "riskscore_assessment_total",
    "Total risk assessments scored",
    ["category"],  # Low Risk | Moderate Risk | High Risk
)

validation_failure_counter = Counter(
    "riskscore_validation_failures_total",
    "Submissions rejected by form validation",
)

# Persistence metrics
persist_outcome_counter = Counter(
    "riskscore_persist_total",
    "Score persistence attempts by outcome",
    ["outcome"],  # saved | unauthenticated | rejected | transport | stale
)

persist_latency_histogram = Histogram(
    "score_persist_latency_seconds",
    "Score-record API response time",
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_assessment(category: str) -> None:
    """Record the risk category of a freshly scored assessment"""
    assessment_counter.labels(category=category).inc()


def record_persist_outcome(outcome: str) -> None:
    persist_outcome_counter.labels(outcome=outcome).inc()
