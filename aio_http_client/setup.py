from typing import TYPE_CHECKING

from .base import TBody
from .client import Client
from .instrumentation import InstrumentedClient
from .metrics import NOOP_METRICS_COLLECTOR, MetricsCollector
from .tracing import NOOP_TRACER, Tracer

if TYPE_CHECKING:
    import aiohttp
    import httpx

    from .aiohttp import AioHttpResponseBody
    from .httpx import HttpxResponseBody


def setup(
    client: Client[TBody],
    *,
    tracer: Tracer | None = None,
    metrics_collector: MetricsCollector | None = None,
) -> Client[TBody]:
    if tracer is None and metrics_collector is None:
        return client

    if isinstance(client, InstrumentedClient):
        raise ValueError("Client is already instrumented")

    return InstrumentedClient(
        client,
        tracer=tracer or NOOP_TRACER,
        metrics_collector=metrics_collector or NOOP_METRICS_COLLECTOR,
    )


def setup_aiohttp(
    client_session: "aiohttp.ClientSession",
    *,
    tracer: Tracer | None = None,
    metrics_collector: MetricsCollector | None = None,
) -> "Client[AioHttpResponseBody]":
    from .aiohttp import AioHttpClient

    return setup(AioHttpClient(client_session), tracer=tracer, metrics_collector=metrics_collector)


def setup_httpx(
    client: "httpx.AsyncClient",
    *,
    tracer: Tracer | None = None,
    metrics_collector: MetricsCollector | None = None,
) -> "Client[HttpxResponseBody]":
    from .httpx import HttpxClient

    return setup(HttpxClient(client), tracer=tracer, metrics_collector=metrics_collector)
