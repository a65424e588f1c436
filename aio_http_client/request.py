import collections.abc
from typing import Any

from .base import Headers, Method, RequestBuilder, json_dumps

QueryParameters = collections.abc.Mapping[str, str] | collections.abc.Iterable[tuple[str, str]]


def get(
    url: str,
    *,
    headers: Headers | None = None,
    query_parameters: QueryParameters | None = None,
) -> RequestBuilder:
    return request(Method.GET, url, headers=headers, query_parameters=query_parameters)


def post(
    url: str,
    body: bytes | None = None,
    *,
    headers: Headers | None = None,
    query_parameters: QueryParameters | None = None,
) -> RequestBuilder:
    return request(Method.POST, url, headers=headers, query_parameters=query_parameters, body=body)


def put(
    url: str,
    body: bytes | None = None,
    *,
    headers: Headers | None = None,
    query_parameters: QueryParameters | None = None,
) -> RequestBuilder:
    return request(Method.PUT, url, headers=headers, query_parameters=query_parameters, body=body)


def patch(
    url: str,
    body: bytes | None = None,
    *,
    headers: Headers | None = None,
    query_parameters: QueryParameters | None = None,
) -> RequestBuilder:
    return request(Method.PATCH, url, headers=headers, query_parameters=query_parameters, body=body)


def delete(
    url: str,
    *,
    headers: Headers | None = None,
    query_parameters: QueryParameters | None = None,
) -> RequestBuilder:
    return request(Method.DELETE, url, headers=headers, query_parameters=query_parameters)


def request_json(
    method: Method,
    url: str,
    data: Any,
    *,
    headers: Headers | None = None,
    query_parameters: QueryParameters | None = None,
    dumps: collections.abc.Callable[[Any], str] = json_dumps,
) -> RequestBuilder:
    return request(method, url, headers=headers, query_parameters=query_parameters).json(data, dumps=dumps)


def request(
    method: Method,
    url: str,
    *,
    headers: Headers | None = None,
    query_parameters: QueryParameters | None = None,
    body: bytes | None = None,
) -> RequestBuilder:
    builder = RequestBuilder(method, url)
    for key, value in _pairs(query_parameters):
        builder.query(key, value)
    for key, value in _pairs(headers):
        builder.header(key, value)
    if body is not None:
        builder.body(body)
    return builder


def _pairs(
    items: collections.abc.Mapping[Any, str] | collections.abc.Iterable[tuple[Any, str]] | None,
) -> collections.abc.Iterable[tuple[str, str]]:
    if items is None:
        return ()
    if isinstance(items, collections.abc.Mapping):
        return items.items()
    return items
