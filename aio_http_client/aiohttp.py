import logging

import aiohttp

from .base import Request, Response, ResponseBody, build_url, decode_headers
from .client import Client
from .errors import BodyError, TransportError, wrap_errors

logger = logging.getLogger(__package__)


class AioHttpResponseBody(ResponseBody):
    __slots__ = ("__response",)

    def __init__(self, response: aiohttp.ClientResponse) -> None:
        super().__init__()
        self.__response = response

    async def _read(self) -> bytes:
        try:
            with wrap_errors((aiohttp.ClientError, TimeoutError), into=BodyError):
                return await self.__response.read()
        finally:
            await self.close()

    async def close(self) -> None:
        await self.__response.release()


class AioHttpClient(Client[AioHttpResponseBody]):
    """Client on top of an aiohttp session.

    The session is owned by the caller. Redirects are never followed: a 3xx response is returned as is.
    """

    __slots__ = ("__client_session",)

    def __init__(self, client_session: aiohttp.ClientSession) -> None:
        self.__client_session = client_session

    async def send(self, request: Request) -> Response[AioHttpResponseBody]:
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
            response = await self.__client_session.request(
                method,
                url,
                headers=request.headers,
                data=request.body if request.body is not None else b"",
                allow_redirects=False,
            )
        except (aiohttp.ClientError, TimeoutError, ValueError) as e:
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
            status=response.status,
            headers=decode_headers(response.raw_headers),
            body=AioHttpResponseBody(response),
        )
