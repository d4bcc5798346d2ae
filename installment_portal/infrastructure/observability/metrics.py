"""Prometheus metrics for login outcomes, dashboard loads, and store health"""

from prometheus_client import Counter, Histogram

login_counter = Counter(
    "portal_login_total",
    "Customer login attempts",
    ["outcome"],  # success | invalid | not_found | error
)

dashboard_load_counter = Counter(
    "portal_dashboard_load_total",
    "Dashboard loads by resulting screen state",
    ["state"],  # resolved_with_data | resolved_empty | error
)

# Store metrics
store_failures_counter = Counter(
    "store_query_failures_total",
    "Failed backing store queries",
    ["operation"],  # login | dashboard
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_login(outcome: str) -> None:
    login_counter.labels(outcome=outcome).inc()


def record_dashboard_load(state: str) -> None:
    dashboard_load_counter.labels(state=state).inc()
