import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Protocol, runtime_checkable

from .errors import HttpRequestError
from .models import HttpRequest
from .response import HttpResponse


@runtime_checkable
class Interceptor(Protocol):
    """
    Hooks that observe or modify a request before it is sent, the response
    before it reaches the caller, and the error when the call fails.

    Hooks are synchronous. ``NetworkingClient`` hands every interceptor the
    same original request and merges the headers of what they return.
    """

    def on_request(self, request: HttpRequest) -> HttpRequest: ...

    def on_response(self, response: HttpResponse) -> HttpResponse: ...

    def on_error(self, error: HttpRequestError) -> HttpRequestError: ...


class RequestInterceptor(ABC):
    @abstractmethod
    def on_request(self, request: HttpRequest) -> HttpRequest: ...

    def on_response(self, response: HttpResponse) -> HttpResponse:
        return response

    def on_error(self, error: HttpRequestError) -> HttpRequestError:
        return error


class ResponseInterceptor(ABC):
    @abstractmethod
    def on_response(self, response: HttpResponse) -> HttpResponse: ...

    def on_request(self, request: HttpRequest) -> HttpRequest:
        return request

    def on_error(self, error: HttpRequestError) -> HttpRequestError:
        return error


class ErrorInterceptor(ABC):
    @abstractmethod
    def on_error(self, error: HttpRequestError) -> HttpRequestError: ...

    def on_request(self, request: HttpRequest) -> HttpRequest:
        return request

    def on_response(self, response: HttpResponse) -> HttpResponse:
        return response


class AuthorizationInterceptor(RequestInterceptor):
    """
    Sets ``{header}: {scheme} {parameters}`` on every request (by default
    ``Authorization: Bearer <parameters>``), overwriting an existing header
    of the same name.
    """

    def __init__(self, parameters: str, scheme: str = "Bearer", header: str = "Authorization"):
        self.parameters = parameters
        self.scheme = scheme
        self.header = header

    def on_request(self, request: HttpRequest) -> HttpRequest:
        return request.with_headers({self.header: f"{self.scheme} {self.parameters}"})


class HeadersInterceptor(RequestInterceptor):
    def __init__(self, headers: Mapping[str, str]):
        self.headers = dict(headers)

    def on_request(self, request: HttpRequest) -> HttpRequest:
        return request.with_headers(self.headers)


class LoggingInterceptor:
    def __init__(self, logger: logging.Logger | None = None):
        self.log = logger or logging.getLogger(__name__)

    def on_request(self, request: HttpRequest) -> HttpRequest:
        self.log.info(f"-> {request.verb.upper()} {request.full_url}")
        return request

    def on_response(self, response: HttpResponse) -> HttpResponse:
        self.log.info(f"<- {response.status_code} ({response.latency_ms}ms)")
        return response

    def on_error(self, error: HttpRequestError) -> HttpRequestError:
        self.log.warning(f"!! {error.kind}: {error.cause}")
        return error
