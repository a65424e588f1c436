import abc
import collections.abc
import dataclasses
import enum
import functools
import json
import re
from typing import Any, Generic, TypeVar

import multidict
import yarl

from .errors import DeserializationError, InvalidUrlError, SerializationError
from .utils import Closable

EMPTY_HEADERS = multidict.CIMultiDictProxy[str](multidict.CIMultiDict[str]())
EMPTY_QUERY = multidict.MultiDictProxy[str](multidict.MultiDict[str]())


class Method(str, enum.Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"

    def __str__(self) -> str:
        return self.value


class Header:
    CONTENT_TYPE = multidict.istr("Content-Type")
    CONTENT_LENGTH = multidict.istr("Content-Length")
    LOCATION = multidict.istr("Location")


json_dumps = functools.partial(json.dumps, allow_nan=False, separators=(",", ":"))

json_re = re.compile(r"^application/(?:[\w.+-]+?\+)?json", re.RegexFlag.IGNORECASE)

Headers = (
    collections.abc.Mapping[str | multidict.istr, str]
    | collections.abc.Iterable[tuple[str | multidict.istr, str]]
    | multidict.CIMultiDictProxy[str]
    | multidict.CIMultiDict[str]
)


@dataclasses.dataclass(frozen=True, slots=True, kw_only=True)
class Request:
    """An immutable, fully specified request.

    ``query`` and ``headers`` are ordered multi-valued collections: a key may repeat and every
    pair is kept in the order it was added.
    """

    method: Method
    url: str
    query: multidict.MultiDictProxy[str] = dataclasses.field(default_factory=lambda: EMPTY_QUERY)
    headers: multidict.CIMultiDictProxy[str] = dataclasses.field(default_factory=lambda: EMPTY_HEADERS)
    body: bytes | None = None

    def update_headers(self, headers: Headers) -> "Request":
        updated_headers = multidict.CIMultiDict[str](self.headers)
        updated_headers.update(headers)
        return dataclasses.replace(self, headers=multidict.CIMultiDictProxy[str](updated_headers))

    def extend_headers(self, headers: Headers) -> "Request":
        updated_headers = multidict.CIMultiDict[str](self.headers)
        updated_headers.extend(headers)
        return dataclasses.replace(self, headers=multidict.CIMultiDictProxy[str](updated_headers))

    def __repr__(self) -> str:
        return f"<Request [{self.method.value} {self.url}]>"


class RequestBuilder:
    """Fluent, mutable accumulator of request attributes.

    Every method returns the builder itself. ``build`` copies the accumulated state, so the builder
    can be reused and later changes never affect already built requests.
    """

    __slots__ = ("__method", "__url", "__query", "__headers", "__body")

    def __init__(self, method: Method, url: str) -> None:
        self.__method = Method(method)
        self.__url = url
        self.__query = multidict.MultiDict[str]()
        self.__headers = multidict.CIMultiDict[str]()
        self.__body: bytes | None = None

    def path(self, segment: str) -> "RequestBuilder":
        self.__url = f"{self.__url.rstrip('/')}/{segment.lstrip('/')}"
        return self

    def query(self, key: str, value: str) -> "RequestBuilder":
        self.__query.add(key, value)
        return self

    def header(self, key: str, value: str) -> "RequestBuilder":
        self.__headers.add(key, value)
        return self

    def body(self, content: bytes | bytearray | memoryview | str) -> "RequestBuilder":
        self.__body = content.encode("utf-8") if isinstance(content, str) else bytes(content)
        return self

    def json(self, value: Any, *, dumps: collections.abc.Callable[[Any], str] = json_dumps) -> "RequestBuilder":
        """Encode ``value`` as the JSON body and add ``Content-Type: application/json``.

        NaN and infinities are rejected by the default encoder, as are circular structures.
        """
        try:
            encoded = dumps(value)
        except (TypeError, ValueError, RecursionError) as e:
            raise SerializationError(e) from e

        self.__body = encoded.encode("utf-8")
        self.__headers.add(Header.CONTENT_TYPE, "application/json")
        return self

    def build(self) -> Request:
        return Request(
            method=self.__method,
            url=self.__url,
            query=multidict.MultiDictProxy[str](multidict.MultiDict[str](self.__query)),
            headers=multidict.CIMultiDictProxy[str](multidict.CIMultiDict[str](self.__headers)),
            body=self.__body,
        )

    def __repr__(self) -> str:
        return f"<RequestBuilder [{self.__method.value} {self.__url}]>"


class ResponseBody(Closable):
    """A not yet read response body.

    The body can be consumed only once: ``into_bytes`` and ``json`` both drain it, and any further
    consumption raises RuntimeError.
    """

    __slots__ = ("__consumed",)

    def __init__(self) -> None:
        self.__consumed = False

    @property
    def consumed(self) -> bool:
        return self.__consumed

    async def into_bytes(self) -> bytes:
        if self.__consumed:
            raise RuntimeError("Response body has already been consumed")
        self.__consumed = True
        return await self._read()

    async def json(self, *, loads: collections.abc.Callable[[bytes], Any] = json.loads) -> Any:
        content = await self.into_bytes()
        try:
            return loads(content)
        except ValueError as e:
            raise DeserializationError(e) from e

    @abc.abstractmethod
    async def _read(self) -> bytes:
        """Read the whole body and release the underlying resource."""


class BytesResponseBody(ResponseBody):
    __slots__ = ("__content",)

    def __init__(self, content: bytes = b"") -> None:
        super().__init__()
        self.__content = content

    async def _read(self) -> bytes:
        return self.__content

    async def close(self) -> None:
        pass


TBody = TypeVar("TBody", bound=ResponseBody)


@dataclasses.dataclass(frozen=True, slots=True, kw_only=True)
class Response(Generic[TBody]):
    status: int
    headers: multidict.CIMultiDictProxy[str]
    body: TBody

    def is_informational(self) -> bool:
        return 100 <= self.status < 200

    def is_success(self) -> bool:
        return 200 <= self.status < 300

    def is_redirection(self) -> bool:
        return 300 <= self.status < 400

    def is_client_error(self) -> bool:
        return 400 <= self.status < 500

    def is_server_error(self) -> bool:
        return 500 <= self.status < 600

    @property
    def content_type(self) -> str | None:
        return self.headers.get(Header.CONTENT_TYPE)

    @property
    def is_json(self) -> bool:
        return bool(json_re.match(self.content_type or ""))

    async def close(self) -> None:
        await self.body.close()

    async def __aenter__(self) -> "Response[TBody]":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    def __repr__(self) -> str:
        return f"<Response [{self.status}]>"


def parse_url(url: str) -> yarl.URL:
    try:
        parsed = yarl.URL(url)
    except (TypeError, ValueError) as e:
        raise InvalidUrlError(url, str(e)) from e

    if not parsed.scheme:
        raise InvalidUrlError(url, "relative URL without a base")
    if not parsed.absolute or not parsed.host:
        raise InvalidUrlError(url, "empty host")
    return parsed


def build_url(request: Request) -> yarl.URL:
    """Parse the request URL and append the request query pairs to the query it may already have."""
    url = parse_url(request.url)
    if request.query:
        url = url.extend_query(list(request.query.items()))
    return url


def decode_headers(raw_headers: collections.abc.Iterable[tuple[bytes, bytes]]) -> multidict.CIMultiDictProxy[str]:
    headers = multidict.CIMultiDict[str]()
    for name, value in raw_headers:
        headers.add(name.decode("latin-1"), _decode_header_value(value))
    return multidict.CIMultiDictProxy[str](headers)


def _decode_header_value(value: bytes) -> str:
    try:
        return value.decode("utf-8")
    except UnicodeDecodeError:
        return ""
