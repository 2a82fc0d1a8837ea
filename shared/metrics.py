"""
Shared metrics configuration for the Generation Roster service.
"""

from typing import Dict, Any, Optional

from prometheus_client import CollectorRegistry, Counter, Histogram, Info


class MetricsCollector:
    """Centralized metrics collector for a service."""

    def __init__(self, service_name: str, registry: Optional[CollectorRegistry] = None):
        self.service_name = service_name
        # Each collector owns its registry so several services can coexist in one process
        self.registry = registry if registry is not None else CollectorRegistry()
        self._metrics: Dict[str, Any] = {}
        self._setup_metrics()

    def _setup_metrics(self):
        """Set up common metrics for the service."""

        self._metrics["service_info"] = Info(
            "service_info",
            "Service information",
            registry=self.registry
        )
        self._metrics["service_info"].info({
            "service": self.service_name,
            "version": "1.0.0"
        })

        # HTTP metrics
        self._metrics["http_requests_total"] = Counter(
            "http_requests_total",
            "Total HTTP requests",
            ["method", "endpoint", "status_code"],
            registry=self.registry
        )

        self._metrics["http_request_duration_seconds"] = Histogram(
            "http_request_duration_seconds",
            "HTTP request duration in seconds",
            ["method", "endpoint"],
            registry=self.registry
        )

        self._metrics["health_check_total"] = Counter(
            "health_check_total",
            "Total health check requests",
            ["status"],
            registry=self.registry
        )

        self._metrics["errors_total"] = Counter(
            "errors_total",
            "Total errors",
            ["error_type", "service"],
            registry=self.registry
        )

        self._setup_roster_metrics()

    def _setup_roster_metrics(self):
        """Set up generation fetch metrics."""
        self._metrics["generation_cache_lookups_total"] = Counter(
            "generation_cache_lookups_total",
            "Generation cache lookups",
            ["generation", "result"],
            registry=self.registry
        )

        self._metrics["generation_item_failures_total"] = Counter(
            "generation_item_failures_total",
            "Detail fetches dropped from a generation",
            ["generation"],
            registry=self.registry
        )

        self._metrics["generation_fetch_duration_seconds"] = Histogram(
            "generation_fetch_duration_seconds",
            "Fetch-and-normalize pipeline duration in seconds",
            ["generation", "source"],
            registry=self.registry
        )

    def get_metric(self, name: str):
        """Get a metric by name."""
        return self._metrics.get(name)

    def record_http_request(self, method: str, endpoint: str, status_code: int, duration: float):
        """Record HTTP request metrics."""
        self._metrics["http_requests_total"].labels(
            method=method,
            endpoint=endpoint,
            status_code=str(status_code)
        ).inc()

        self._metrics["http_request_duration_seconds"].labels(
            method=method,
            endpoint=endpoint
        ).observe(duration)

    def record_health_check(self, status: str):
        """Record health check metrics."""
        self._metrics["health_check_total"].labels(status=status).inc()

    def record_error(self, error_type: str, service: Optional[str] = None):
        """Record error metrics."""
        service_name = service or self.service_name
        self._metrics["errors_total"].labels(error_type=error_type, service=service_name).inc()

    def record_cache_lookup(self, generation: str, hit: bool):
        """Record a cache gate lookup."""
        self._metrics["generation_cache_lookups_total"].labels(
            generation=generation,
            result="hit" if hit else "miss"
        ).inc()

    def record_item_failures(self, generation: str, count: int):
        """Record dropped items for a generation."""
        if count:
            self._metrics["generation_item_failures_total"].labels(generation=generation).inc(count)

    def observe_fetch_duration(self, generation: str, source: str, duration: float):
        """Observe pipeline duration for a cache miss."""
        self._metrics["generation_fetch_duration_seconds"].labels(
            generation=generation,
            source=source
        ).observe(duration)


def get_metrics_collector(service_name: str, registry: Optional[CollectorRegistry] = None) -> MetricsCollector:
    """Get a metrics collector for a service."""
    return MetricsCollector(service_name, registry)
