import abc
from typing import Generic

from .base import Method, Request, RequestBuilder, Response, TBody


class Client(abc.ABC, Generic[TBody]):
    """Capability every transport implements: send an immutable Request, get a Response back.

    ``send`` performs exactly one exchange. It raises InvalidUrlError before any I/O when the URL
    is malformed, TransportError when the transport fails, and never reads the response body:
    reading it is left to the caller through ``Response.body``.

    Implementations hold no per-call state, so a single instance can be shared by concurrent tasks.
    """

    __slots__ = ()

    def request(self, method: Method, url: str) -> RequestBuilder:
        return RequestBuilder(method, url)

    def get(self, url: str) -> RequestBuilder:
        return RequestBuilder(Method.GET, url)

    def post(self, url: str) -> RequestBuilder:
        return RequestBuilder(Method.POST, url)

    def put(self, url: str) -> RequestBuilder:
        return RequestBuilder(Method.PUT, url)

    def patch(self, url: str) -> RequestBuilder:
        return RequestBuilder(Method.PATCH, url)

    def delete(self, url: str) -> RequestBuilder:
        return RequestBuilder(Method.DELETE, url)

    @abc.abstractmethod
    async def send(self, request: Request) -> Response[TBody]: ...
