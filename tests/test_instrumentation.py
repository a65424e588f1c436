import asyncio

import prometheus_client
import pytest
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter
from opentelemetry.trace import StatusCode

import aio_http_client

from .conftest import FakeClient


class RecordingMetricsCollector(aio_http_client.MetricsCollector):
    def __init__(self) -> None:
        self.outcomes: list[tuple[aio_http_client.Method, str]] = []

    def collect(self, request: aio_http_client.Request, outcome: str, elapsed_seconds: float) -> None:
        assert elapsed_seconds >= 0
        self.outcomes.append((request.method, outcome))


@pytest.fixture
def span_exporter() -> InMemorySpanExporter:
    return InMemorySpanExporter()


@pytest.fixture
def tracer(span_exporter: InMemorySpanExporter) -> aio_http_client.Tracer:
    provider = TracerProvider()
    provider.add_span_processor(SimpleSpanProcessor(span_exporter))
    return aio_http_client.OpenTelemetryTracer(provider)


async def test_collects_status() -> None:
    collector = RecordingMetricsCollector()
    client = aio_http_client.InstrumentedClient(FakeClient(200, 503), metrics_collector=collector)

    assert (await client.send(client.get("http://h").build())).status == 200
    assert (await client.send(client.post("http://h").build())).status == 503

    assert collector.outcomes == [(aio_http_client.Method.GET, "200"), (aio_http_client.Method.POST, "503")]


async def test_collects_errors_and_reraises() -> None:
    collector = RecordingMetricsCollector()
    client = aio_http_client.InstrumentedClient(FakeClient(OSError("down")), metrics_collector=collector)

    with pytest.raises(aio_http_client.InvalidUrlError):
        await client.send(client.get("not-a-valid-url").build())
    with pytest.raises(aio_http_client.TransportError):
        await client.send(client.get("http://h").build())

    assert collector.outcomes == [
        (aio_http_client.Method.GET, "invalid_url"),
        (aio_http_client.Method.GET, "transport"),
    ]


async def test_collects_cancellation() -> None:
    class SlowClient(FakeClient):
        async def send(self, request: aio_http_client.Request) -> aio_http_client.Response:
            await asyncio.sleep(10)
            return await super().send(request)

    collector = RecordingMetricsCollector()
    client = aio_http_client.InstrumentedClient(SlowClient(200), metrics_collector=collector)
    task = asyncio.create_task(client.send(client.get("http://h").build()))
    await asyncio.sleep(0.01)

    task.cancel()

    with pytest.raises(asyncio.CancelledError):
        await task
    assert collector.outcomes == [(aio_http_client.Method.GET, "cancelled")]


async def test_prometheus_metrics_collector() -> None:
    registry = prometheus_client.CollectorRegistry()
    collector = aio_http_client.PrometheusMetricsCollector(registry)
    client = aio_http_client.InstrumentedClient(FakeClient(200, 200), metrics_collector=collector)

    await client.send(client.get("http://service.local/a").build())
    await client.send(client.get("http://service.local/b").build())
    with pytest.raises(aio_http_client.InvalidUrlError):
        await client.send(client.get("http://[::1/").build())

    assert (
        registry.get_sample_value(
            "aio_http_client_latency_count",
            {"request_method": "GET", "request_host": "service.local", "response_status": "200"},
        )
        == 2.0
    )
    assert (
        registry.get_sample_value(
            "aio_http_client_latency_count",
            {"request_method": "GET", "request_host": "unknown", "response_status": "invalid_url"},
        )
        == 1.0
    )


async def test_opentelemetry_tracer(
    tracer: aio_http_client.Tracer,
    span_exporter: InMemorySpanExporter,
) -> None:
    fake_client = FakeClient(201)
    client = aio_http_client.InstrumentedClient(fake_client, tracer=tracer)

    await client.send(client.put("http://h/x").build())

    (span,) = span_exporter.get_finished_spans()
    assert span.name == "HTTP PUT"
    assert span.attributes is not None
    assert span.attributes["http.request.method"] == "PUT"
    assert span.attributes["url.full"] == "http://h/x"
    assert span.attributes["http.response.status_code"] == 201
    assert span.status.status_code == StatusCode.UNSET
    assert "traceparent" in fake_client.requests[0].headers


async def test_opentelemetry_tracer_error(
    tracer: aio_http_client.Tracer,
    span_exporter: InMemorySpanExporter,
) -> None:
    client = aio_http_client.InstrumentedClient(FakeClient(ConnectionError("refused")), tracer=tracer)

    with pytest.raises(aio_http_client.TransportError):
        await client.send(client.get("http://h").build())

    (span,) = span_exporter.get_finished_spans()
    assert span.status.status_code == StatusCode.ERROR
    assert span.attributes is not None
    assert span.attributes["error.type"] == "transport"


async def test_opentelemetry_server_error_status(
    tracer: aio_http_client.Tracer,
    span_exporter: InMemorySpanExporter,
) -> None:
    client = aio_http_client.InstrumentedClient(FakeClient(500), tracer=tracer)

    await client.send(client.get("http://h").build())

    (span,) = span_exporter.get_finished_spans()
    assert span.status.status_code == StatusCode.ERROR


async def test_noop_tracer_adds_no_headers() -> None:
    fake_client = FakeClient(200)
    client = aio_http_client.InstrumentedClient(fake_client)

    await client.send(client.get("http://h").header("a", "b").build())

    assert list(fake_client.requests[0].headers.items()) == [("a", "b")]


def test_setup_without_options_returns_client() -> None:
    client = FakeClient()

    assert aio_http_client.setup(client) is client


def test_setup_with_metrics() -> None:
    client = aio_http_client.setup(FakeClient(), metrics_collector=RecordingMetricsCollector())

    assert isinstance(client, aio_http_client.InstrumentedClient)


def test_setup_twice() -> None:
    client = aio_http_client.setup(FakeClient(), tracer=aio_http_client.NOOP_TRACER)

    with pytest.raises(ValueError):
        aio_http_client.setup(client, tracer=aio_http_client.NOOP_TRACER)


async def test_setup_aiohttp(base_url: str) -> None:
    import aiohttp

    collector = RecordingMetricsCollector()
    async with aiohttp.ClientSession() as session:
        client = aio_http_client.setup_aiohttp(session, metrics_collector=collector)
        async with await client.send(client.get(base_url).path("status/204").build()) as response:
            assert response.status == 204

    assert collector.outcomes == [(aio_http_client.Method.GET, "204")]


async def test_setup_httpx(base_url: str) -> None:
    import httpx

    async with httpx.AsyncClient() as async_client:
        client = aio_http_client.setup_httpx(async_client)
        assert isinstance(client, aio_http_client.HttpxClient)
        async with await client.send(client.get(base_url).path("status/404").build()) as response:
            assert response.is_client_error()
