import asyncio
import logging
import socket
from collections.abc import AsyncIterator, Callable

import aiohttp
import aiohttp.web
import aiohttp.web_request
import aiohttp.web_response
import httpx
import pytest
from _pytest.fixtures import SubRequest
from aiohttp.test_utils import TestServer

import aio_http_client

logging.basicConfig(level="DEBUG")


class FakeClient(aio_http_client.Client[aio_http_client.BytesResponseBody]):
    __slots__ = ("_responses", "requests")

    def __init__(self, *responses: int | tuple[int, bytes] | Exception) -> None:
        self._responses = list(reversed(responses))
        self.requests: list[aio_http_client.Request] = []

    async def send(self, request: aio_http_client.Request) -> aio_http_client.Response[aio_http_client.BytesResponseBody]:
        aio_http_client.build_url(request)
        self.requests.append(request)
        if not self._responses:
            raise RuntimeError("No response left")

        response = self._responses.pop()
        if isinstance(response, Exception):
            raise aio_http_client.TransportError(response) from response
        if isinstance(response, tuple):
            status, content = response
        else:
            status, content = response, b""

        return aio_http_client.Response(
            status=status,
            headers=aio_http_client.decode_headers(()),
            body=aio_http_client.BytesResponseBody(content),
        )


async def _echo(request: aiohttp.web_request.Request) -> aiohttp.web_response.Response:
    body = await request.read()
    return aiohttp.web.json_response(
        {
            "method": request.method,
            "url": str(request.url),
            "args": [list(pair) for pair in request.query.items()],
            "headers": [list(pair) for pair in request.headers.items()],
            "data": body.decode("utf-8", errors="replace"),
        }
    )


async def _status(request: aiohttp.web_request.Request) -> aiohttp.web_response.Response:
    return aiohttp.web_response.Response(status=int(request.match_info["status"]))


async def _bytes(request: aiohttp.web_request.Request) -> aiohttp.web_response.Response:
    return aiohttp.web_response.Response(body=bytes(range(int(request.match_info["size"]) % 256)))


async def _response_headers(request: aiohttp.web_request.Request) -> aiohttp.web_response.Response:
    response = aiohttp.web_response.Response()
    for name, value in request.query.items():
        response.headers.add(name, value)
    return response


async def _redirect(request: aiohttp.web_request.Request) -> aiohttp.web_response.Response:
    return aiohttp.web_response.Response(status=302, headers={"Location": "/anything"})


async def _delay(request: aiohttp.web_request.Request) -> aiohttp.web_response.Response:
    await asyncio.sleep(float(request.query.get("delay", "10")))
    return aiohttp.web_response.Response()


async def _text(request: aiohttp.web_request.Request) -> aiohttp.web_response.Response:
    return aiohttp.web_response.Response(text="definitely not json")


@pytest.fixture
async def server() -> AsyncIterator[TestServer]:
    app = aiohttp.web.Application()
    app.router.add_route("*", "/anything", _echo)
    app.router.add_route("*", "/anything/{tail:.*}", _echo)
    app.router.add_get("/status/{status}", _status)
    app.router.add_get("/bytes/{size}", _bytes)
    app.router.add_get("/response-headers", _response_headers)
    app.router.add_get("/redirect", _redirect)
    app.router.add_get("/delay", _delay)
    app.router.add_get("/text", _text)
    async with TestServer(app) as test_server:
        yield test_server


@pytest.fixture
def base_url(server: TestServer) -> str:
    return str(server.make_url("/"))


@pytest.fixture(scope="session")
def unused_port() -> Callable[[], int]:
    def f() -> int:
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            s.bind(("127.0.0.1", 0))
            return s.getsockname()[1]

    return f


@pytest.fixture(params=("aiohttp", "httpx"))
async def client(request: SubRequest) -> AsyncIterator[aio_http_client.Client]:
    if request.param == "aiohttp":
        async with aiohttp.ClientSession() as client_session:
            yield aio_http_client.AioHttpClient(client_session)
    elif request.param == "httpx":
        async with httpx.AsyncClient() as async_client:
            yield aio_http_client.HttpxClient(async_client)
    else:
        raise ValueError(f"Unknown transport {request.param}")
