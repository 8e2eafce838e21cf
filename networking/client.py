import asyncio
import logging
import time
from collections.abc import Mapping, Sequence
from typing import Any, Union

from . import body as http_body
from .body import HttpBody
from .configs import networking_config
from .either import Either, Left, Right
from .errors import HttpRequestError, classify_exception, unknown_error
from .interceptors import Interceptor
from .log import trace_id_generator, trace_id_var
from .media_type import MediaType
from .models import CacheMode, CorsMode, HttpRequest, HttpVerb
from .response import HttpResponse, parse_response
from .transport import HttpxTransport
from .types import Transport, TransportOptions
from .url import UrlQueryParameters, resolve_url

logger = logging.getLogger(__name__)

RequestBody = Union[HttpBody, bytes, str, dict, list, None]
HttpResult = Either[HttpRequestError, HttpResponse]


class NetworkingClient:
    """
    HTTP client over a fetch-like transport callable. Every call returns an
    ``Either``: ``Left`` with an ``HttpRequestError`` when the transport
    failed, ``Right`` with the classified ``HttpResponse`` otherwise (4xx
    and 5xx responses included).
    """

    def __init__(
        self,
        base_url: str,
        transport: Transport | None = None,
        timeout_ms: int | None = None,
        interceptors: Sequence[Interceptor] | None = None,
        default_headers: Mapping[str, str] | None = None,
        eager_body: bool | None = None,
    ):
        self.base_url = resolve_url(str(base_url), "")
        self._default_transport = HttpxTransport() if transport is None else None
        self.transport: Transport = transport or self._default_transport
        self.timeout_ms = timeout_ms if timeout_ms is not None else networking_config.REQUEST_TIMEOUT_MS
        self.interceptors: tuple[Interceptor, ...] = tuple(interceptors or ())
        self.eager_body = (
            eager_body if eager_body is not None else networking_config.EAGER_RESPONSE_BODY
        )

        self.default_headers: dict[str, str] = {}
        if networking_config.USER_AGENT:
            self.default_headers["User-Agent"] = networking_config.USER_AGENT
        self.default_headers.update(default_headers or {})

    async def close(self) -> None:
        if self._default_transport is not None:
            await self._default_transport.close()

    async def __aenter__(self) -> "NetworkingClient":
        return self

    async def __aexit__(self, *_args: Any) -> None:
        await self.close()

    def _prepare_body(self, body: RequestBody) -> HttpBody:
        if body is None:
            return http_body.empty()
        if isinstance(body, HttpBody):
            return body
        return http_body.of(lambda: body)

    def _merge_headers(self, headers: Mapping[str, str] | None) -> dict[str, str]:
        merged = dict(self.default_headers)
        if headers:
            merged.update(headers)
        return merged

    def _build_request(
        self,
        verb: HttpVerb,
        endpoint: str,
        headers: Mapping[str, str] | None,
        query: UrlQueryParameters | None,
        body: RequestBody = None,
        media_type: MediaType = MediaType.BINARY,
        cache: CacheMode | None = None,
        cors: CorsMode | None = None,
    ) -> HttpRequest:
        return HttpRequest(
            url=resolve_url(self.base_url, endpoint),
            verb=verb,
            headers=self._merge_headers(headers),
            query={k: v for k, v in (query or {}).items() if v is not None},
            media_type=media_type,
            body=self._prepare_body(body),
            cache=cache,
            cors=cors,
        )

    async def get(
        self,
        endpoint: str,
        *,
        headers: Mapping[str, str] | None = None,
        query: UrlQueryParameters | None = None,
        cache: CacheMode | None = None,
        cors: CorsMode | None = None,
    ) -> HttpResult:
        return await self.send(
            self._build_request(HttpVerb.GET, endpoint, headers, query, cache=cache, cors=cors)
        )

    async def post(
        self,
        endpoint: str,
        *,
        body: RequestBody = None,
        media_type: MediaType = MediaType.JSON,
        headers: Mapping[str, str] | None = None,
        query: UrlQueryParameters | None = None,
        cache: CacheMode | None = None,
        cors: CorsMode | None = None,
    ) -> HttpResult:
        return await self.send(
            self._build_request(
                HttpVerb.POST, endpoint, headers, query, body, media_type, cache=cache, cors=cors
            )
        )

    async def put(
        self,
        endpoint: str,
        *,
        body: RequestBody = None,
        media_type: MediaType = MediaType.JSON,
        headers: Mapping[str, str] | None = None,
        query: UrlQueryParameters | None = None,
        cache: CacheMode | None = None,
        cors: CorsMode | None = None,
    ) -> HttpResult:
        return await self.send(
            self._build_request(
                HttpVerb.PUT, endpoint, headers, query, body, media_type, cache=cache, cors=cors
            )
        )

    async def patch(
        self,
        endpoint: str,
        *,
        body: RequestBody = None,
        media_type: MediaType = MediaType.JSON,
        headers: Mapping[str, str] | None = None,
        query: UrlQueryParameters | None = None,
        cache: CacheMode | None = None,
        cors: CorsMode | None = None,
    ) -> HttpResult:
        return await self.send(
            self._build_request(
                HttpVerb.PATCH, endpoint, headers, query, body, media_type, cache=cache, cors=cors
            )
        )

    async def delete(
        self,
        endpoint: str,
        *,
        headers: Mapping[str, str] | None = None,
        query: UrlQueryParameters | None = None,
        cache: CacheMode | None = None,
        cors: CorsMode | None = None,
    ) -> HttpResult:
        return await self.send(
            self._build_request(HttpVerb.DELETE, endpoint, headers, query, cache=cache, cors=cors)
        )

    async def send(self, request: HttpRequest) -> HttpResult:
        """
        Sends ``request`` and classifies the outcome.

        Each interceptor's ``on_request`` receives the original request (they
        are not chained) and the headers of their results are merged onto it.
        After the call, ``on_response`` or ``on_error`` is invoked on every
        interceptor for notification; their return values are not used.
        Transport failures never raise; an interceptor that raises aborts
        the call.
        """
        token = None
        if trace_id_var.get() is None:
            token = trace_id_var.set(trace_id_generator())
        try:
            intercepted = request.merge(
                [interceptor.on_request(request) for interceptor in self.interceptors]
            )

            result = await self._dispatch(intercepted)

            match result:
                case Right(response):
                    for interceptor in self.interceptors:
                        interceptor.on_response(response)
                case Left(error):
                    for interceptor in self.interceptors:
                        interceptor.on_error(error)

            return result
        finally:
            if token is not None:
                trace_id_var.reset(token)

    async def _dispatch(self, request: HttpRequest) -> HttpResult:
        options = TransportOptions(timeout_ms=self.timeout_ms)

        try:
            transport_request = await request.to_transport_request()
        except Exception as exc:
            return self._failed(request, unknown_error(exc))

        logger.debug(f"-> {transport_request.method} {transport_request.url}")
        start_time = time.time()
        try:
            async with asyncio.timeout(options.timeout):
                transport_response = await self.transport(transport_request, options)

            latency_ms = int((time.time() - start_time) * 1000)
            response = parse_response(transport_response, latency_ms=latency_ms)
        except Exception as exc:
            return self._failed(request, classify_exception(exc, self.timeout_ms))

        if self.eager_body:
            # an unreadable body does not undo the response; the failure is
            # memoized and raised again on access
            try:
                await response.body.resolve()
            except Exception as exc:
                logger.warning(
                    f"{request.verb.upper()} {request.full_url} returned {response.status_code} "
                    f"with an unreadable body: {type(exc).__name__}: {exc}"
                )

        logger.debug(f"<- {response.status_code} ({response.latency_ms}ms)")
        return Right(response)

    def _failed(self, request: HttpRequest, error: HttpRequestError) -> HttpResult:
        logger.warning(
            f"{request.verb.upper()} {request.full_url} failed with {error.kind}: {error.cause}"
        )
        return Left(error)
