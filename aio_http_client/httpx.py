import logging

import httpx

from .base import Request, Response, ResponseBody, build_url, decode_headers
from .client import Client
from .errors import BodyError, TransportError, wrap_errors

logger = logging.getLogger(__package__)


class HttpxResponseBody(ResponseBody):
    __slots__ = ("__response",)

    def __init__(self, response: httpx.Response) -> None:
        super().__init__()
        self.__response = response

    async def _read(self) -> bytes:
        try:
            with wrap_errors((httpx.HTTPError, httpx.StreamError), into=BodyError):
                return await self.__response.aread()
        finally:
            await self.close()

    async def close(self) -> None:
        await self.__response.aclose()


class HttpxClient(Client[HttpxResponseBody]):
    """Client on top of an httpx.AsyncClient.

    The response is streamed: only the status line and headers are read by ``send``.
    """

    __slots__ = ("__client",)

    def __init__(self, client: httpx.AsyncClient) -> None:
        self.__client = client

    async def send(self, request: Request) -> Response[HttpxResponseBody]:
        url = build_url(request)
        method = request.method.value

        logger.debug(
            "Sending request %s %s",
            method,
            url,
            extra={
                "request_method": method,
                "request_url": url,
            },
        )
        try:
            client_request = self.__client.build_request(
                method=method,
                url=httpx.URL(str(url)),
                headers=list(request.headers.items()),
                content=request.body if request.body is not None else b"",
            )
            client_response = await self.__client.send(client_request, stream=True, follow_redirects=False)
        except (httpx.HTTPError, httpx.InvalidURL, httpx.StreamError, ValueError) as e:
            logger.warning(
                "Request %s %s has failed: network error",
                method,
                url,
                exc_info=True,
                extra={
                    "request_method": method,
                    "request_url": url,
                },
            )
            raise TransportError(e) from e

        return Response(
            status=client_response.status_code,
            headers=decode_headers(client_response.headers.raw),
            body=HttpxResponseBody(client_response),
        )
