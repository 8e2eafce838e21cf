"""Typed HTTP networking client with interceptors."""

from . import body
from .body import HttpBody
from .client import HttpResult, NetworkingClient
from .clients import GitHubRepository, ImgurNetworkingClient, RawGitHubNetworkingClient
from .either import Either, Left, Right, fold, is_left, is_right
from .errors import (
    ErrorKind,
    HttpError,
    HttpRequestError,
    NoInternetConnectionError,
    RequestTimeoutError,
    UnknownError,
    unknown_error,
)
from .interceptors import (
    AuthorizationInterceptor,
    ErrorInterceptor,
    HeadersInterceptor,
    Interceptor,
    LoggingInterceptor,
    RequestInterceptor,
    ResponseInterceptor,
)
from .lazy import Lazy
from .media_type import ContentKind, MediaType, try_parse_content_type
from .models import CacheMode, CorsMode, HttpRequest, HttpVerb
from .proxy import (
    ProxyConfiguration,
    ProxyNetworkingClient,
    RelayProxyConfiguration,
    RelayProxyNetworkingClient,
)
from .response import (
    ClientErrorHttpResponse,
    HttpResponse,
    InformationalHttpResponse,
    RedirectionHttpResponse,
    ResponseBand,
    ServerErrorHttpResponse,
    SuccessfulHttpResponse,
    classify_status,
    parse_response,
)
from .transport import HttpxTransport
from .types import Transport, TransportOptions
from .url import resolve_url, swap_url

__all__ = [
    "body",
    "HttpBody",
    "HttpResult",
    "NetworkingClient",
    "GitHubRepository",
    "ImgurNetworkingClient",
    "RawGitHubNetworkingClient",
    "Either",
    "Left",
    "Right",
    "fold",
    "is_left",
    "is_right",
    "ErrorKind",
    "HttpError",
    "HttpRequestError",
    "NoInternetConnectionError",
    "RequestTimeoutError",
    "UnknownError",
    "unknown_error",
    "AuthorizationInterceptor",
    "ErrorInterceptor",
    "HeadersInterceptor",
    "Interceptor",
    "LoggingInterceptor",
    "RequestInterceptor",
    "ResponseInterceptor",
    "Lazy",
    "ContentKind",
    "MediaType",
    "try_parse_content_type",
    "CacheMode",
    "CorsMode",
    "HttpRequest",
    "HttpVerb",
    "ProxyConfiguration",
    "ProxyNetworkingClient",
    "RelayProxyConfiguration",
    "RelayProxyNetworkingClient",
    "ClientErrorHttpResponse",
    "HttpResponse",
    "InformationalHttpResponse",
    "RedirectionHttpResponse",
    "ResponseBand",
    "ServerErrorHttpResponse",
    "SuccessfulHttpResponse",
    "classify_status",
    "parse_response",
    "HttpxTransport",
    "Transport",
    "TransportOptions",
    "resolve_url",
    "swap_url",
]
