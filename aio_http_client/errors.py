import collections.abc
import contextlib
from typing import Any, Generic, TypeVar

E = TypeVar("E")


class HttpError(Exception, Generic[E]):
    """Base of every failure raised by a client or a response body.

    Catching HttpError is enough to handle any failure regardless of the transport in use;
    the concrete subclass tells which stage failed.
    """

    kind: str = "unknown"


class InvalidUrlError(HttpError[Any]):
    """The request URL can't be parsed or is not absolute. Raised before any I/O."""

    kind = "invalid_url"

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"invalid URL: {url}: {reason}")
        self.url = url
        self.reason = reason


class SerializationError(HttpError[Any]):
    """A value can't be encoded as a JSON request body."""

    kind = "serialization"

    def __init__(self, error: Exception) -> None:
        super().__init__(f"JSON serialization error: {error}")
        self.error = error


class TransportError(HttpError[E]):
    """The underlying transport failed to perform the exchange.

    The transport's own exception is kept untouched in ``error``.
    """

    kind = "transport"

    def __init__(self, error: E) -> None:
        super().__init__(f"client error: {error}")
        self.error = error


class BodyError(HttpError[E]):
    """The transport failed while the response body was being read."""

    kind = "body"

    def __init__(self, error: E) -> None:
        super().__init__(f"body error: {error}")
        self.error = error


class DeserializationError(HttpError[Any]):
    """The response body is not a valid JSON document."""

    kind = "deserialization"

    def __init__(self, error: Exception) -> None:
        super().__init__(f"JSON deserialization error: {error}")
        self.error = error


@contextlib.contextmanager
def wrap_errors(
    error_types: type[BaseException] | tuple[type[BaseException], ...],
    into: collections.abc.Callable[[Any], HttpError[Any]],
) -> collections.abc.Iterator[None]:
    try:
        yield
    except HttpError:
        raise
    except error_types as e:
        raise into(e) from e
