from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field, replace
from enum import StrEnum
from types import MappingProxyType
from typing import Any

import httpx

from .body import HttpBody, convert, empty
from .media_type import MediaType
from .url import append_query

HttpHeaders = Mapping[str, str]


class HttpVerb(StrEnum):
    GET = "get"
    POST = "post"
    PUT = "put"
    PATCH = "patch"
    DELETE = "delete"


class CacheMode(StrEnum):
    DEFAULT = "default"
    NO_STORE = "no-store"
    RELOAD = "reload"
    NO_CACHE = "no-cache"
    FORCE_CACHE = "force-cache"
    ONLY_IF_CACHED = "only-if-cached"


class CorsMode(StrEnum):
    CORS = "cors"
    NO_CORS = "no-cors"
    SAME_ORIGIN = "same-origin"
    NAVIGATE = "navigate"


@dataclass(frozen=True)
class HttpRequest:
    """
    An HTTP request. Only ``url`` and ``verb`` are required; anything else
    defaults to a request with no body typed as ``MediaType.BINARY``.
    """

    url: str
    verb: HttpVerb
    headers: HttpHeaders = field(default_factory=dict)
    query: dict[str, str] = field(default_factory=dict)
    media_type: MediaType = MediaType.BINARY
    body: HttpBody = field(default_factory=empty)
    cache: CacheMode | None = None
    cors: CorsMode | None = None

    def __post_init__(self) -> None:
        if not self.url:
            raise ValueError("HttpRequest requires an url")
        object.__setattr__(self, "url", str(self.url))
        # read-only: every interceptor receives the same request
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))
        object.__setattr__(self, "verb", HttpVerb(self.verb))
        object.__setattr__(self, "media_type", MediaType(self.media_type))
        if self.cache is not None:
            object.__setattr__(self, "cache", CacheMode(self.cache))
        if self.cors is not None:
            object.__setattr__(self, "cors", CorsMode(self.cors))

    def copy_with(self, **changes: Any) -> "HttpRequest":
        """Returns a new request; ``None`` overrides keep the current value."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})

    def with_headers(self, headers: Mapping[str, str]) -> "HttpRequest":
        return replace(self, headers={**self.headers, **headers})

    def merge(self, requests: Sequence["HttpRequest"]) -> "HttpRequest":
        """
        Combines the headers of ``requests`` into this request. Later
        requests win on conflicting header names.
        """
        if not requests:
            return self

        headers = dict(self.headers)
        for request in requests:
            headers.update(request.headers)
        return self.copy_with(headers=headers)

    @property
    def full_url(self) -> str:
        return append_query(self.url, self.query)

    async def to_transport_request(self) -> httpx.Request:
        headers = dict(self.headers)
        if not any(name.lower() == "content-type" for name in headers):
            headers["content-type"] = self.media_type.value

        extensions: dict[str, Any] = {}
        if self.cache is not None:
            extensions["cache"] = self.cache.value
        if self.cors is not None:
            extensions["cors"] = self.cors.value

        content = await convert(self.body)
        if isinstance(content, (bytearray, memoryview)):
            content = bytes(content)

        return httpx.Request(
            method=self.verb.value.upper(),
            url=self.full_url,
            headers=headers,
            content=content,
            extensions=extensions,
        )
