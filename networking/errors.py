"""
Errors that a NetworkingClient call can end with.

They are returned as values (the left side of an Either), never raised past
``NetworkingClient.send``.
"""

from enum import StrEnum

import httpx


class ErrorKind(StrEnum):
    NO_CONNECTIVITY = "no_connectivity"
    TIMEOUT = "timeout"
    UNKNOWN = "unknown"
    HTTP = "http"


class HttpRequestError(Exception):
    """An error which originates before or after sending an HTTP request."""

    kind: ErrorKind = ErrorKind.UNKNOWN
    detail: str = ""

    def __init__(self, cause: str | None = None):
        self.cause = cause or self.detail
        super().__init__(self.cause)

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other) and self.__dict__ == other.__dict__

    def __hash__(self) -> int:
        return hash((type(self), self.cause))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(cause={self.cause!r})"


class NoInternetConnectionError(HttpRequestError):
    kind = ErrorKind.NO_CONNECTIVITY
    detail = "no internet connection available"


class RequestTimeoutError(HttpRequestError):
    kind = ErrorKind.TIMEOUT
    detail = "request timed out"

    def __init__(self, timeout_ms: int, cause: str | None = None):
        self.timeout_ms = timeout_ms
        super().__init__(cause)

    def __str__(self) -> str:
        return f"timeout (ms): {self.timeout_ms}\n{self.cause}"


class UnknownError(HttpRequestError):
    kind = ErrorKind.UNKNOWN
    detail = "something really weird just happened"


class HttpError(HttpRequestError):
    """A client (4xx) or server (5xx) error response, escalated to an error."""

    kind = ErrorKind.HTTP

    def __init__(self, status_code: int, cause: str | None = None):
        self.status_code = status_code
        super().__init__(cause or f"status code: {status_code}")


def unknown_error(exc: BaseException) -> UnknownError:
    message = str(exc)
    return UnknownError(cause=f"{type(exc).__name__}: {message}" if message else repr(exc))


def classify_exception(exc: BaseException, timeout_ms: int) -> HttpRequestError:
    """
    Maps a failure raised by the transport call to its error kind. Failures
    raised before the call (building the request body) are never
    connectivity errors; report those with ``unknown_error``.
    """
    if isinstance(exc, (TimeoutError, httpx.TimeoutException)):
        return RequestTimeoutError(timeout_ms=timeout_ms, cause=str(exc) or None)
    if isinstance(exc, (httpx.NetworkError, ConnectionError, OSError)):
        return NoInternetConnectionError(cause=str(exc) or None)

    return unknown_error(exc)
