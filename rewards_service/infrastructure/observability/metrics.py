"""Prometheus metrics for monitoring rewards queries, points issued and cache efficiency"""

from prometheus_client import Counter, Histogram

# Query metrics
rewards_query_counter = Counter(
    "rewards_query_total",
    "Total rewards queries served",
    ["outcome"],  # ok | not_found | invalid | error
)

points_awarded_histogram = Histogram(
    "rewards_points_awarded",
    "Total points per rewards summary",
    buckets=[0, 50, 100, 250, 500, 1000, 2500, 5000, 10000],
)

computation_duration_histogram = Histogram(
    "rewards_computation_seconds",
    "Time spent computing a rewards summary on a cache miss",
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5],
)

# Cache metrics
cache_event_counter = Counter(
    "rewards_cache_events_total",
    "Rewards cache events",
    ["event"],  # hit | miss | eviction | expiration | rejection | invalidation
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_query(outcome: str, total_points: int | None = None) -> None:
    """Record query outcome and, on success, the size of the summary"""
    rewards_query_counter.labels(outcome=outcome).inc()
    if total_points is not None:
        points_awarded_histogram.observe(total_points)


def record_cache_event(event: str, count: int = 1) -> None:
    cache_event_counter.labels(event=event).inc(count)
