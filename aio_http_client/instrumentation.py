import asyncio
import logging

from .base import Request, Response, TBody
from .client import Client
from .errors import HttpError
from .metrics import NOOP_METRICS_COLLECTOR, MetricsCollector
from .tracing import NOOP_TRACER, Tracer
from .utils import perf_counter, perf_counter_elapsed

logger = logging.getLogger(__package__)


class InstrumentedClient(Client[TBody]):
    """Decorates any client with tracing and latency metrics.

    Outcomes are only observed: errors and cancellation propagate unchanged.
    """

    __slots__ = ("__client", "__tracer", "__metrics_collector")

    def __init__(
        self,
        client: Client[TBody],
        *,
        tracer: Tracer = NOOP_TRACER,
        metrics_collector: MetricsCollector = NOOP_METRICS_COLLECTOR,
    ) -> None:
        self.__client = client
        self.__tracer = tracer
        self.__metrics_collector = metrics_collector

    async def send(self, request: Request) -> Response[TBody]:
        started_at = perf_counter()
        with self.__tracer.start_span(f"HTTP {request.method.value}") as span:
            span.set_request_method(request.method)
            span.set_request_url(request.url)
            request = request.extend_headers(self.__tracer.get_context_headers())
            try:
                response = await self.__client.send(request)
            except asyncio.CancelledError:
                self.__metrics_collector.collect(request, "cancelled", perf_counter_elapsed(started_at))
                raise
            except HttpError as e:
                span.set_error(e.kind)
                self.__metrics_collector.collect(request, e.kind, perf_counter_elapsed(started_at))
                raise

            span.set_response_status(response.status)
            elapsed = perf_counter_elapsed(started_at)
            self.__metrics_collector.collect(request, str(response.status), elapsed)
            logger.debug(
                "Request %s %s has completed with status %s in %.3fs",
                request.method.value,
                request.url,
                response.status,
                elapsed,
                extra={
                    "request_method": request.method.value,
                    "request_url": request.url,
                    "response_status": response.status,
                },
            )
            return response
