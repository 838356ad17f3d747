"""Prometheus metrics for monitoring vibe scores, budget statuses and reporting fetches"""

from typing import List

from prometheus_client import Counter, Histogram

from finzen_health.domain.models import BudgetAssessment, VibeAssessment

# Vibe metrics
vibe_assessment_counter = Counter(
    "finzen_vibe_assessment_total",
    "Total vibe assessments made",
    ["runway_level"],  # danger | tight | getting-by | stable
)

attention_score_histogram = Histogram(
    "finzen_attention_score",
    "Distribution of composite attention scores",
    buckets=[10, 20, 30, 40, 50, 60, 70, 80, 90, 100],
)

# Budget metrics
budget_status_counter = Counter(
    "finzen_budget_status_total",
    "Budgets assessed by status",
    ["status"],  # normal | warning | danger
)

projection_alert_counter = Counter(
    "finzen_projection_alerts_total",
    "Budgets projected to exceed their limit by period end",
)

invalid_input_counter = Counter(
    "finzen_invalid_input_total",
    "Requests rejected for invalid metrics or budgets",
    ["kind"],  # metrics | budget
)

# Reporting API metrics
reporting_fetch_failures_counter = Counter(
    "reporting_fetch_failures_total",
    "Failed reporting API calls",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_vibe(assessment: VibeAssessment) -> None:
    vibe_assessment_counter.labels(runway_level=assessment.runway_level.value).inc()
    attention_score_histogram.observe(assessment.attention_score)


def record_budgets(assessments: List[BudgetAssessment]) -> None:
    """Record status distribution and count budgets heading over their limit"""
    for assessment in assessments:
        budget_status_counter.labels(status=assessment.status.value).inc()
        if assessment.projected_overspend:
            projection_alert_counter.inc()
