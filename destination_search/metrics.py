"""
Prometheus metrics for destination search.

Tracks search invocations, dataset loads, scoring failures and stale renders.
"""

from fastapi import Response
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

# Request metrics
http_requests_total = Counter(
    "destination_http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"],
)

http_request_duration_seconds = Histogram(
    "destination_http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0),
)

# Search metrics
search_queries_total = Counter(
    "destination_search_queries_total", "Total search queries", ["status"]
)

search_query_duration_seconds = Histogram(
    "destination_search_query_duration_seconds",
    "Search pipeline duration in seconds",
    buckets=(0.001, 0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5),
)

search_results_per_query = Histogram(
    "destination_search_results_per_query",
    "Number of candidates passing the match threshold per query",
    buckets=(0, 1, 2, 5, 10, 25, 50, 100),
)

score_failures_total = Counter(
    "destination_score_failures_total", "Candidates scored 0 after a scoring error"
)

# Dataset metrics
dataset_loads_total = Counter(
    "destination_dataset_loads_total", "Dataset load attempts", ["status"]
)

# Rendering metrics
stale_renders_discarded_total = Counter(
    "destination_stale_renders_discarded_total",
    "Render states discarded because a newer invocation already rendered",
)


def track_request_metrics(
    method: str, endpoint: str, status_code: int, duration: float
):
    """Track HTTP request metrics."""
    http_requests_total.labels(
        method=method, endpoint=endpoint, status=status_code
    ).inc()
    http_request_duration_seconds.labels(method=method, endpoint=endpoint).observe(
        duration
    )


def track_search_query(success: bool, duration: float, result_count: int = 0):
    """Track search query metrics."""
    status = "success" if success else "failure"
    search_queries_total.labels(status=status).inc()
    search_query_duration_seconds.observe(duration)
    if success:
        search_results_per_query.observe(result_count)


def track_dataset_load(success: bool):
    """Track dataset load attempts."""
    dataset_loads_total.labels(status="success" if success else "failure").inc()


def track_score_failure():
    score_failures_total.inc()


def track_stale_render():
    stale_renders_discarded_total.inc()


async def metrics_endpoint():
    """
    Prometheus metrics endpoint.

    Returns:
        Response with Prometheus metrics in text format
    """
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
