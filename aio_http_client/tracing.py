import abc
import contextlib
from typing import ContextManager

from .base import EMPTY_HEADERS, Headers, Method


class Span(abc.ABC):
    __slots__ = ()

    @abc.abstractmethod
    def set_request_method(self, method: Method) -> None: ...

    @abc.abstractmethod
    def set_request_url(self, url: str) -> None: ...

    @abc.abstractmethod
    def set_response_status(self, status: int) -> None: ...

    @abc.abstractmethod
    def set_error(self, kind: str) -> None: ...


class Tracer(abc.ABC):
    __slots__ = ()

    @abc.abstractmethod
    def start_span(self, name: str) -> ContextManager[Span]: ...

    @abc.abstractmethod
    def get_context_headers(self) -> Headers:
        """Headers propagating the current trace context to the remote side."""


class NoopSpan(Span):
    __slots__ = ()

    def set_request_method(self, method: Method) -> None:
        return

    def set_request_url(self, url: str) -> None:
        return

    def set_response_status(self, status: int) -> None:
        return

    def set_error(self, kind: str) -> None:
        return


class NoopTracer(Tracer):
    __slots__ = ()

    def start_span(self, name: str) -> ContextManager[Span]:
        return contextlib.nullcontext(NoopSpan())

    def get_context_headers(self) -> Headers:
        return EMPTY_HEADERS


NOOP_TRACER = NoopTracer()
