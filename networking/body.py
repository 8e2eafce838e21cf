"""
Request/response payloads.

A body wraps a lazy, asynchronously resolved value so that nothing is
materialized until the request is dispatched or the response is inspected.
"""

import asyncio
import inspect
import json
from collections.abc import Awaitable, Callable
from typing import Any, Union

from .lazy import Lazy

Text = str
Binary = Union[bytes, bytearray, memoryview]
JSONObject = dict[str, Any]
JSONArray = list[Any]
Anything = Union[None, Text, Binary, JSONObject, JSONArray]

TransportBody = Union[None, str, bytes, bytearray, memoryview]

_BINARY_TYPES = (bytes, bytearray, memoryview)


class HttpBody:
    def __init__(self, producer: Callable[[], Anything | Awaitable[Anything]]):
        async def compute() -> Anything:
            value = producer()
            if inspect.isawaitable(value):
                value = await value
            return value

        self._lazy: Lazy[asyncio.Future[Anything]] = Lazy.of_async(compute)

    @property
    def resolved(self) -> bool:
        if self is _EMPTY:
            return True
        if not self._lazy.evaluated:
            return False
        future = self._lazy.get()
        return future.done() and not future.cancelled() and future.exception() is None

    async def resolve(self) -> Anything:
        if self is _EMPTY:
            return None
        return await self._lazy.get()

    def __repr__(self) -> str:
        if self is _EMPTY:
            return "HttpBody(<empty>)"
        return f"HttpBody({extract(self, '...')!r})"


_EMPTY = HttpBody(lambda: None)


def empty() -> HttpBody:
    """The canonical body that stands for "no body"."""
    return _EMPTY


def of(producer: Callable[[], Anything | Awaitable[Anything]]) -> HttpBody:
    return HttpBody(producer)


def is_empty(body: HttpBody) -> bool:
    # identity, not content: of(lambda: None) is not empty
    return body is _EMPTY


def extract(body: HttpBody, default: Any = None) -> Any:
    """Returns the body value if it was already resolved, without resolving it."""
    if not body.resolved:
        return default
    if is_empty(body):
        return None
    return body._lazy.get().result()


async def convert(body: HttpBody) -> TransportBody:
    """Resolves ``body`` and renders it in a shape the transport can send."""
    if is_empty(body):
        return None

    value = await body.resolve()
    if value is None:
        return None
    if isinstance(value, _BINARY_TYPES):
        return value
    if isinstance(value, (dict, list)):
        return json.dumps(value)
    return value
