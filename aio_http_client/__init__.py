from .base import (
    BytesResponseBody,
    Header,
    Method,
    Request,
    RequestBuilder,
    Response,
    ResponseBody,
    build_url,
    decode_headers,
    parse_url,
)
from .client import Client
from .errors import (
    BodyError,
    DeserializationError,
    HttpError,
    InvalidUrlError,
    SerializationError,
    TransportError,
    wrap_errors,
)
from .instrumentation import InstrumentedClient
from .metrics import NOOP_METRICS_COLLECTOR, MetricsCollector, NoopMetricsCollector
from .request import delete, get, patch, post, put, request, request_json
from .setup import setup, setup_aiohttp, setup_httpx
from .tracing import NOOP_TRACER, NoopTracer, Span, Tracer

__all__: tuple[str, ...] = (
    "BodyError",
    "BytesResponseBody",
    "Client",
    "DeserializationError",
    "Header",
    "HttpError",
    "InstrumentedClient",
    "InvalidUrlError",
    "Method",
    "MetricsCollector",
    "NOOP_METRICS_COLLECTOR",
    "NOOP_TRACER",
    "NoopMetricsCollector",
    "NoopTracer",
    "Request",
    "RequestBuilder",
    "Response",
    "ResponseBody",
    "SerializationError",
    "Span",
    "Tracer",
    "TransportError",
    "build_url",
    "decode_headers",
    "delete",
    "get",
    "parse_url",
    "patch",
    "post",
    "put",
    "request",
    "request_json",
    "setup",
    "setup_aiohttp",
    "setup_httpx",
    "wrap_errors",
)

try:
    import aiohttp  # noqa

    from .aiohttp import AioHttpClient, AioHttpResponseBody

    __all__ += ("AioHttpClient", "AioHttpResponseBody")  # type: ignore
except ImportError:
    pass

try:
    import httpx  # noqa

    from .httpx import HttpxClient, HttpxResponseBody

    __all__ += ("HttpxClient", "HttpxResponseBody")  # type: ignore
except ImportError:
    pass

try:
    import prometheus_client  # noqa

    from .prometheus import PrometheusMetricsCollector

    __all__ += ("PrometheusMetricsCollector",)  # type: ignore
except ImportError:
    pass

try:
    import opentelemetry.trace  # noqa

    from .opentelemetry import OpenTelemetryTracer

    __all__ += ("OpenTelemetryTracer",)  # type: ignore
except ImportError:
    pass

__version__ = "0.1.0"
