"""
Classified HTTP responses.

Every transport response becomes exactly one of five variants, picked by
the status code band (``classify_status``). Successful and error variants
carry a secondary ``content_kind`` tag that decides how the body is read.
"""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import ClassVar, Union

import httpx

from .body import HttpBody, empty, extract, of
from .errors import HttpError
from .media_type import ContentKind, MediaType, content_kind_of, try_parse_content_type

HttpHeaders = dict[str, str]


class ResponseBand(StrEnum):
    INFORMATIONAL = "informational"
    SUCCESSFUL = "successful"
    REDIRECTION = "redirection"
    CLIENT_ERROR = "client_error"
    SERVER_ERROR = "server_error"


def classify_status(status_code: int) -> ResponseBand:
    """Maps a status code to its band; unexpected codes are server errors."""
    if 100 <= status_code < 200:
        return ResponseBand.INFORMATIONAL
    if 200 <= status_code < 300:
        return ResponseBand.SUCCESSFUL
    if 300 <= status_code < 400:
        return ResponseBand.REDIRECTION
    if 400 <= status_code < 500:
        return ResponseBand.CLIENT_ERROR
    return ResponseBand.SERVER_ERROR


@dataclass(frozen=True, kw_only=True)
class BaseHttpResponse:
    """
    Fields and predicates shared by all response variants. ``stringify``
    tells whether ``str()`` renders the (already resolved) body or a
    placeholder.
    """

    band: ClassVar[ResponseBand]

    status_code: int
    headers: HttpHeaders = field(default_factory=dict)
    media_type: MediaType = MediaType.BINARY
    body: HttpBody = field(default_factory=empty)
    stringify: bool | None = None
    latency_ms: int = 0

    def __post_init__(self) -> None:
        if classify_status(self.status_code) is not self.band:
            raise ValueError(
                f"{self.__class__.__name__} does not accept status code {self.status_code}"
            )
        if self.stringify is None:
            object.__setattr__(self, "stringify", self._default_stringify())

    def _default_stringify(self) -> bool:
        return self.content_kind not in (ContentKind.IMAGE, ContentKind.BINARY)

    @property
    def content_kind(self) -> ContentKind:
        return content_kind_of(self.media_type)

    def ok(self) -> bool:
        return not self.not_ok()

    def not_ok(self) -> bool:
        return self.band in (ResponseBand.CLIENT_ERROR, ResponseBand.SERVER_ERROR)

    def redirection(self) -> bool:
        return self.band is ResponseBand.REDIRECTION

    def __str__(self) -> str:
        body = extract(self.body, "...") if self.stringify else "..."
        return (
            f"{self.__class__.__name__}(Status Code: {self.status_code} | "
            f"Headers: {self.headers} | Body: {body})"
        )


@dataclass(frozen=True, kw_only=True)
class InformationalHttpResponse(BaseHttpResponse):
    """Status code 100-199. Never has a body."""

    band = ResponseBand.INFORMATIONAL

    body: HttpBody = field(default_factory=empty, init=False)

    def _default_stringify(self) -> bool:
        return False


@dataclass(frozen=True, kw_only=True)
class SuccessfulHttpResponse(BaseHttpResponse):
    """Status code 200-299."""

    band = ResponseBand.SUCCESSFUL


@dataclass(frozen=True, kw_only=True)
class RedirectionHttpResponse(BaseHttpResponse):
    """Status code 300-399. Never has a body; ``location`` is mandatory."""

    band = ResponseBand.REDIRECTION

    location: httpx.URL
    body: HttpBody = field(default_factory=empty, init=False)

    def _default_stringify(self) -> bool:
        return False


@dataclass(frozen=True, kw_only=True)
class ClientErrorHttpResponse(BaseHttpResponse):
    """Status code 400-499."""

    band = ResponseBand.CLIENT_ERROR

    def _default_stringify(self) -> bool:
        return True

    def to_http_error(self, cause: str | None = None) -> HttpError:
        return HttpError(status_code=self.status_code, cause=cause)


@dataclass(frozen=True, kw_only=True)
class ServerErrorHttpResponse(BaseHttpResponse):
    """Status code 500-599, and the fallback for any unexpected status code."""

    band = ResponseBand.SERVER_ERROR

    def _default_stringify(self) -> bool:
        return True

    def to_http_error(self, cause: str | None = None) -> HttpError:
        return HttpError(status_code=self.status_code, cause=cause)


HttpResponse = Union[
    InformationalHttpResponse,
    SuccessfulHttpResponse,
    RedirectionHttpResponse,
    ClientErrorHttpResponse,
    ServerErrorHttpResponse,
]


def _read_body(response: httpx.Response, kind: ContentKind) -> HttpBody:
    async def read():
        await response.aread()
        if kind is ContentKind.JSON:
            return response.json() if response.content else None
        if kind in (ContentKind.IMAGE, ContentKind.BINARY):
            return response.content
        return response.text

    return of(read)


def _location(response: httpx.Response) -> httpx.URL:
    raw = response.headers.get("location")
    if not raw:
        raise ValueError(f"Redirection response {response.status_code} has no location header")

    location = httpx.URL(raw)
    if location.is_relative_url:
        try:
            location = response.request.url.join(location)
        except RuntimeError:
            # response was built without a request, keep it relative
            pass
    return location


def parse_response(response: httpx.Response, latency_ms: int = 0) -> HttpResponse:
    """Converts a transport response into its classified HttpResponse."""
    status_code = response.status_code
    headers = dict(response.headers)
    media_type = try_parse_content_type(response.headers.get("content-type"))

    match classify_status(status_code):
        case ResponseBand.INFORMATIONAL:
            return InformationalHttpResponse(
                status_code=status_code,
                headers=headers,
                media_type=media_type,
                latency_ms=latency_ms,
            )
        case ResponseBand.SUCCESSFUL:
            return SuccessfulHttpResponse(
                status_code=status_code,
                headers=headers,
                media_type=media_type,
                body=_read_body(response, content_kind_of(media_type)),
                latency_ms=latency_ms,
            )
        case ResponseBand.REDIRECTION:
            return RedirectionHttpResponse(
                status_code=status_code,
                headers=headers,
                media_type=media_type,
                location=_location(response),
                latency_ms=latency_ms,
            )
        case ResponseBand.CLIENT_ERROR:
            return ClientErrorHttpResponse(
                status_code=status_code,
                headers=headers,
                media_type=media_type,
                body=_read_body(response, content_kind_of(media_type)),
                latency_ms=latency_ms,
            )
        case _:
            return ServerErrorHttpResponse(
                status_code=status_code,
                headers=headers,
                media_type=media_type,
                body=_read_body(response, content_kind_of(media_type)),
                latency_ms=latency_ms,
            )
