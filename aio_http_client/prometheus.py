import collections.abc

import prometheus_client
import yarl

from .base import Request
from .metrics import MetricsCollector

DEFAULT_HISTOGRAM_BUCKETS = (
    0.005,
    0.01,
    0.025,
    0.05,
    0.075,
    0.1,
    0.15,
    0.2,
    0.25,
    0.3,
    0.35,
    0.4,
    0.45,
    0.5,
    0.75,
    1.0,
    5.0,
    10.0,
    15.0,
    20.0,
)


class PrometheusMetricsCollector(MetricsCollector):
    __slots__ = ("_latency_histogram",)

    def __init__(
        self,
        registry: prometheus_client.CollectorRegistry = prometheus_client.REGISTRY,
        *,
        histogram_buckets: collections.abc.Sequence[float] = DEFAULT_HISTOGRAM_BUCKETS,
    ) -> None:
        self._latency_histogram = prometheus_client.Histogram(
            "aio_http_client_latency",
            "Duration of client requests.",
            labelnames=(
                "request_method",
                "request_host",
                "response_status",
            ),
            buckets=histogram_buckets,
            registry=registry,
        )

    def collect(self, request: Request, outcome: str, elapsed_seconds: float) -> None:
        label_values = (
            request.method.value,
            _get_host(request.url),
            outcome,
        )
        self._latency_histogram.labels(*label_values).observe(elapsed_seconds)


def _get_host(url: str) -> str:
    try:
        return yarl.URL(url).host or "unknown"
    except ValueError:
        return "unknown"
