"""Prometheus metrics for monitoring loan origination, risk mix and API latency"""

from prometheus_client import Counter, Histogram

# Loan metrics
loans_created_counter = Counter(
    "loan_portfolio_loans_created_total",
    "Total loans created",
    ["risk_level"],  # low | medium | high | very-high
)

risk_score_histogram = Histogram(
    "loan_portfolio_risk_score",
    "Risk scores assigned on create and update",
    buckets=[10, 20, 30, 40, 50, 60, 70, 80, 90, 100],
)

payments_generated_counter = Counter(
    "loan_portfolio_payments_generated_total",
    "Payment rows generated for loan schedules",
)

payment_status_counter = Counter(
    "loan_portfolio_payment_status_updates_total",
    "Manual payment status changes",
    ["status"],
)

# Calculator usage
calculator_counter = Counter(
    "loan_portfolio_calculator_requests_total",
    "Calculator requests served",
    ["calculator"],  # repayment | affordability | comparison
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_loan_created(risk_level: str, risk_score: int, payment_count: int) -> None:
    """Record origination metrics for monitoring the portfolio's risk mix"""
    loans_created_counter.labels(risk_level=risk_level).inc()
    risk_score_histogram.observe(risk_score)
    payments_generated_counter.inc(payment_count)


def record_loan_updated(risk_score: int, payment_count: int | None) -> None:
    """Record a re-scored loan; payment_count is None when the schedule was kept"""
    risk_score_histogram.observe(risk_score)
    if payment_count is not None:
        payments_generated_counter.inc(payment_count)
