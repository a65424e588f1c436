import collections.abc
import contextlib
from typing import ContextManager

import multidict
import opentelemetry.propagate as otel_propagate
import opentelemetry.trace as otel_trace
from opentelemetry.semconv.attributes import error_attributes, http_attributes, url_attributes

from .base import Headers, Method
from .tracing import Span, Tracer


class _OpenTelemetrySpan(Span):
    __slots__ = ("_span",)

    def __init__(self, span: otel_trace.Span):
        self._span = span

    def set_request_method(self, method: Method) -> None:
        if not self._span.is_recording():
            return

        self._span.set_attribute(http_attributes.HTTP_REQUEST_METHOD, method.value)

    def set_request_url(self, url: str) -> None:
        if not self._span.is_recording():
            return

        self._span.set_attribute(url_attributes.URL_FULL, url)

    def set_response_status(self, status: int) -> None:
        if not self._span.is_recording():
            return

        self._span.set_status(otel_trace.Status(self.status_to_status_code(status)))
        self._span.set_attribute(http_attributes.HTTP_RESPONSE_STATUS_CODE, status)

    def set_error(self, kind: str) -> None:
        if not self._span.is_recording():
            return

        self._span.set_status(otel_trace.Status(otel_trace.StatusCode.ERROR))
        self._span.set_attribute(error_attributes.ERROR_TYPE, kind)

    @staticmethod
    def status_to_status_code(status: int) -> otel_trace.StatusCode:
        if status < 100:
            return otel_trace.StatusCode.ERROR
        if status <= 399:
            return otel_trace.StatusCode.UNSET
        return otel_trace.StatusCode.ERROR


class OpenTelemetryTracer(Tracer):
    __slots__ = ("_tracer",)

    def __init__(self, trace_provider: otel_trace.TracerProvider | None = None):
        self._tracer = (trace_provider or otel_trace.get_tracer_provider()).get_tracer("aio_http_client")

    def start_span(self, name: str) -> ContextManager[Span]:
        return self._start_span(name)

    def get_context_headers(self) -> Headers:
        headers = multidict.CIMultiDict[str]()
        otel_propagate.inject(headers)
        return headers

    @contextlib.contextmanager
    def _start_span(self, name: str) -> collections.abc.Iterator[Span]:
        # errors are reported through set_error, exceptions are only propagated
        span_ctx = self._tracer.start_as_current_span(
            name=name,
            kind=otel_trace.SpanKind.CLIENT,
            record_exception=False,
            set_status_on_exception=False,
        )
        with span_ctx as span:
            yield _OpenTelemetrySpan(span)
