"""Prometheus metrics for upstream calls, cache and fallbacks."""

from prometheus_client import Counter, Histogram

upstream_latency_ms = Histogram(
    "upstream_latency_ms",
    "Upstream call latency in milliseconds",
    ["service", "outcome"],
    buckets=[10, 50, 100, 200, 500, 1000, 2000, 5000, 10000, 30000],
)

upstream_errors_total = Counter(
    "upstream_errors_total",
    "Total upstream call errors",
    ["service", "reason"],
)

weather_cache_hits_total = Counter(
    "weather_cache_hits_total",
    "Total weather cache hits",
)

generation_fallbacks_total = Counter(
    "generation_fallbacks_total",
    "Total times a generation strategy fell back to a lower tier",
    ["strategy", "reason"],
)


class CallMetrics:
    """No-op metrics interface (default for clients and tests)."""

    def record_latency(self, service: str, outcome: str, latency_ms: float) -> None:
        """Record upstream call latency."""
        pass

    def inc_error(self, service: str, reason: str) -> None:
        """Increment error counter."""
        pass

    def inc_cache_hit(self) -> None:
        """Increment weather cache hit counter."""
        pass

    def inc_fallback(self, strategy: str, reason: str) -> None:
        """Increment fallback counter."""
        pass


class PrometheusCallMetrics(CallMetrics):
    """Prometheus-based metrics implementation."""

    def record_latency(self, service: str, outcome: str, latency_ms: float) -> None:
        upstream_latency_ms.labels(service=service, outcome=outcome).observe(latency_ms)

    def inc_error(self, service: str, reason: str) -> None:
        upstream_errors_total.labels(service=service, reason=reason).inc()

    def inc_cache_hit(self) -> None:
        weather_cache_hits_total.inc()

    def inc_fallback(self, strategy: str, reason: str) -> None:
        generation_fallbacks_total.labels(strategy=strategy, reason=reason).inc()
