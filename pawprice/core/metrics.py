"""Prometheus metrics."""

from prometheus_client import Counter, Gauge

REQUESTS_TOTAL = Counter(
    "pawprice_http_requests_total",
    "Total number of HTTP requests",
    labelnames=["method", "path"],
)

RESPONSES_TOTAL = Counter(
    "pawprice_http_responses_total",
    "Total number of HTTP responses",
    labelnames=["status_code"],
)

RATE_LIMITED_TOTAL = Counter(
    "pawprice_rate_limited_total",
    "Requests rejected by the rate limiter",
)

LLM_SLOTS_IN_USE = Gauge(
    "pawprice_llm_slots_in_use",
    "Model concurrency slots currently held",
)

LLM_QUEUE_DEPTH = Gauge(
    "pawprice_llm_queue_depth",
    "Callers waiting for a model concurrency slot",
)

FALLBACK_SEARCHES_TOTAL = Counter(
    "pawprice_fallback_searches_total",
    "Searches answered with synthesized groomers",
)

ESTIMATES_TOTAL = Counter(
    "pawprice_estimate_total",
    "Price estimates produced, by method",
    labelnames=["method"],
)
