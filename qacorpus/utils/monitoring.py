"""Monitoring utilities leveraging Prometheus client."""

from __future__ import annotations

from prometheus_client import Counter, Histogram

http_requests_total = Counter(
    "qacorpus_http_requests_total",
    "Total HTTP requests",
    ["method", "path", "status"],
)

http_request_latency_seconds = Histogram(
    "qacorpus_http_request_latency_seconds",
    "HTTP request latency",
    ["method", "path"],
)

documents_ingested_total = Counter(
    "qacorpus_documents_ingested_total",
    "Documents written to the corpus store",
    ["schema"],
)

store_errors_total = Counter(
    "qacorpus_store_errors_total",
    "Document store failures",
    ["operation"],
)


def observe_request(method: str, path: str, status: int, duration_seconds: float) -> None:
    http_requests_total.labels(method=method, path=path, status=str(status)).inc()
    http_request_latency_seconds.labels(method=method, path=path).observe(duration_seconds)


def record_ingestion(schema: str, count: int) -> None:
    documents_ingested_total.labels(schema=schema).inc(count)


def record_store_error(operation: str) -> None:
    store_errors_total.labels(operation=operation).inc()
