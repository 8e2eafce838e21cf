import asyncio
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from networking import body
from networking.client import NetworkingClient
from networking.configs import networking_config
from networking.either import Left, Right
from networking.errors import (
    NoInternetConnectionError,
    RequestTimeoutError,
    UnknownError,
)
from networking.interceptors import ErrorInterceptor, RequestInterceptor, ResponseInterceptor
from networking.log import trace_id_var
from networking.media_type import MediaType
from networking.models import HttpRequest
from networking.response import (
    ClientErrorHttpResponse,
    ServerErrorHttpResponse,
    SuccessfulHttpResponse,
)


class RecordingInterceptor(RequestInterceptor):
    def __init__(self, header: str):
        self.header = header
        self.seen: list[HttpRequest] = []
        self.responses = []
        self.errors = []

    def on_request(self, request):
        self.seen.append(request)
        return request.with_headers({self.header: "1"})

    def on_response(self, response):
        self.responses.append(response)
        return response

    def on_error(self, error):
        self.errors.append(error)
        return error


class TestNetworkingClientRequest:
    @pytest.mark.asyncio
    async def test_simple_get(self, make_transport, make_client):
        transport = make_transport(httpx.Response(200, json={"ok": True}))
        client = make_client(transport)

        result = await client.get("users", query={"page": "2"})

        assert isinstance(result, Right)
        assert isinstance(result.value, SuccessfulHttpResponse)
        assert await result.value.body.resolve() == {"ok": True}

        sent = transport.requests[0]
        assert sent.method == "GET"
        assert str(sent.url) == "https://api.example.com/users?page=2"
        assert sent.headers["content-type"] == MediaType.BINARY.value

    @pytest.mark.asyncio
    async def test_post_with_body(self, make_transport, make_client):
        transport = make_transport(httpx.Response(201))
        client = make_client(transport)

        result = await client.post("users", body={"name": "test"})

        assert result.value.status_code == 201
        sent = transport.requests[0]
        assert sent.method == "POST"
        assert sent.headers["content-type"] == "application/json"
        assert sent.content == b'{"name": "test"}'

    @pytest.mark.asyncio
    async def test_put_patch_delete(self, make_transport, make_client):
        transport = make_transport(httpx.Response(204))
        client = make_client(transport)

        await client.put("users/1", body=body.of(lambda: "raw"), media_type=MediaType.PLAIN_TEXT)
        await client.patch("users/1", body=b"\x01")
        await client.delete("users/1")

        assert [r.method for r in transport.requests] == ["PUT", "PATCH", "DELETE"]
        assert transport.requests[0].headers["content-type"] == "text/plain"
        assert transport.requests[0].content == b"raw"
        assert transport.requests[1].content == b"\x01"
        assert transport.requests[2].content == b""

    @pytest.mark.asyncio
    async def test_custom_headers(self, make_transport, make_client):
        transport = make_transport()
        client = make_client(transport, default_headers={"X-Api-Key": "secret"})

        await client.get("data", headers={"X-Request-Id": "123"})

        headers = transport.requests[0].headers
        assert headers["X-Api-Key"] == "secret"
        assert headers["X-Request-Id"] == "123"
        assert "User-Agent" not in headers

    @pytest.mark.asyncio
    async def test_configured_user_agent(self, make_transport, make_client):
        transport = make_transport()
        with patch.object(networking_config, "USER_AGENT", "crawler/1.0"):
            client = make_client(transport)

        await client.get("data")

        assert transport.requests[0].headers["User-Agent"] == "crawler/1.0"

    @pytest.mark.asyncio
    async def test_passes_timeout_to_transport(self, make_transport, make_client):
        transport = make_transport()
        client = make_client(transport, timeout_ms=1500)

        await client.get("data")

        assert transport.options[0].timeout_ms == 1500
        assert transport.options[0].timeout == 1.5

    def test_default_timeout(self, make_transport, make_client):
        client = make_client(make_transport())

        assert client.timeout_ms == networking_config.REQUEST_TIMEOUT_MS == 30000

    def test_malformed_base_url_fails_immediately(self, make_transport):
        with pytest.raises(ValueError):
            NetworkingClient(base_url="not a url", transport=make_transport())


class TestNetworkingClientResults:
    @pytest.mark.asyncio
    async def test_client_error_is_a_success_result(self, make_transport, make_client):
        transport = make_transport(httpx.Response(401, json={"message": "Bad credentials"}))
        client = make_client(transport)

        result = await client.get("user")

        assert isinstance(result, Right)
        response = result.value
        assert isinstance(response, ClientErrorHttpResponse)
        assert response.not_ok()
        assert response.to_http_error().status_code == 401

    @pytest.mark.asyncio
    async def test_unexpected_status_is_server_error(self, make_transport, make_client):
        client = make_client(make_transport(httpx.Response(999)))

        result = await client.get("user")

        assert isinstance(result.value, ServerErrorHttpResponse)

    @pytest.mark.asyncio
    async def test_timeout_named_failure(self, make_transport, make_client):
        transport = make_transport(error=TimeoutError("The operation was aborted due to timeout"))
        client = make_client(transport, timeout_ms=1234)

        result = await client.get("slow")

        assert isinstance(result, Left)
        assert isinstance(result.value, RequestTimeoutError)
        assert result.value.timeout_ms == 1234

    @pytest.mark.asyncio
    async def test_deadline_elapses(self, make_client):
        async def slow_transport(request, options):
            await asyncio.sleep(5)
            return httpx.Response(200)

        client = make_client(slow_transport, timeout_ms=10)

        result = await client.get("slow")

        assert isinstance(result.value, RequestTimeoutError)
        assert result.value.timeout_ms == 10

    @pytest.mark.asyncio
    async def test_no_connectivity(self, make_transport, make_client):
        client = make_client(make_transport(error=httpx.ConnectError("name resolution failed")))

        result = await client.get("data")

        assert isinstance(result.value, NoInternetConnectionError)

    @pytest.mark.asyncio
    async def test_unknown_failure(self, make_transport, make_client):
        client = make_client(make_transport(error=RuntimeError("kaboom")))

        result = await client.get("data")

        assert isinstance(result.value, UnknownError)
        assert result.value.cause == "RuntimeError: kaboom"

    @pytest.mark.asyncio
    async def test_failing_body_is_unknown_error(self, make_transport, make_client):
        def explode():
            raise ValueError("cannot build body")

        transport = make_transport()
        client = make_client(transport)

        result = await client.post("users", body=body.of(explode))

        assert isinstance(result.value, UnknownError)
        assert transport.requests == []

    @pytest.mark.asyncio
    async def test_local_io_failure_in_body_is_unknown_error(self, make_transport, make_client):
        def read_upload():
            raise FileNotFoundError(2, "No such file or directory", "/nonexistent/upload.bin")

        transport = make_transport()
        client = make_client(transport)

        result = await client.post("upload", body=body.of(read_upload))

        assert isinstance(result.value, UnknownError)
        assert result.value.cause.startswith("FileNotFoundError: ")
        assert transport.requests == []

    @pytest.mark.asyncio
    async def test_redirection_without_location_is_unknown_error(self, make_transport, make_client):
        client = make_client(make_transport(httpx.Response(302)))

        result = await client.get("moved")

        assert isinstance(result.value, UnknownError)

    @pytest.mark.asyncio
    async def test_eager_body(self, make_transport, make_client):
        client = make_client(make_transport(httpx.Response(200, json=[1, 2])), eager_body=True)

        result = await client.get("numbers")

        assert result.value.body.resolved
        assert body.extract(result.value.body) == [1, 2]

    @pytest.mark.asyncio
    async def test_eager_body_keeps_error_response(self, make_transport, make_client):
        client = make_client(
            make_transport(httpx.Response(404, json={"message": "Not Found"})), eager_body=True
        )

        result = await client.get("missing")

        assert isinstance(result, Right)
        assert isinstance(result.value, ClientErrorHttpResponse)
        assert body.extract(result.value.body) == {"message": "Not Found"}

    @pytest.mark.asyncio
    async def test_eager_body_that_cannot_be_parsed_keeps_response(
        self, make_transport, make_client
    ):
        transport = make_transport(
            httpx.Response(
                500,
                headers={"content-type": "application/json"},
                content=b"Internal Server Error",
            )
        )
        client = make_client(transport, eager_body=True)

        result = await client.get("x")

        assert isinstance(result, Right)
        assert isinstance(result.value, ServerErrorHttpResponse)
        assert not result.value.body.resolved
        assert "Body: ...)" in str(result.value)
        with pytest.raises(ValueError):
            await result.value.body.resolve()

    @pytest.mark.asyncio
    async def test_lazy_body_by_default(self, make_transport, make_client):
        client = make_client(make_transport(httpx.Response(200, json=[1, 2])))

        result = await client.get("numbers")

        assert not result.value.body.resolved


class TestNetworkingClientInterceptors:
    @pytest.mark.asyncio
    async def test_each_interceptor_sees_the_original_request(self, make_transport, make_client):
        first = RecordingInterceptor("X-First")
        second = RecordingInterceptor("X-Second")
        transport = make_transport()
        client = make_client(transport, interceptors=[first, second])

        await client.get("data")

        assert first.seen[0] is second.seen[0]
        assert "X-First" not in second.seen[0].headers
        sent = transport.requests[0].headers
        assert sent["X-First"] == "1"
        assert sent["X-Second"] == "1"

    @pytest.mark.asyncio
    async def test_later_interceptor_wins_on_conflict(self, make_transport, make_client):
        class SetHeader(RequestInterceptor):
            def __init__(self, value):
                self.value = value

            def on_request(self, request):
                return request.with_headers({"X-Value": self.value})

        transport = make_transport()
        client = make_client(transport, interceptors=[SetHeader("a"), SetHeader("b")])

        await client.get("data")

        assert transport.requests[0].headers["X-Value"] == "b"

    @pytest.mark.asyncio
    async def test_on_response_is_notified(self, make_transport, make_client):
        interceptor = RecordingInterceptor("X-Id")
        client = make_client(make_transport(httpx.Response(200)), interceptors=[interceptor])

        result = await client.get("data")

        assert interceptor.responses == [result.value]
        assert interceptor.errors == []

    @pytest.mark.asyncio
    async def test_on_error_is_notified(self, make_transport, make_client):
        interceptor = RecordingInterceptor("X-Id")
        client = make_client(make_transport(error=RuntimeError("x")), interceptors=[interceptor])

        result = await client.get("data")

        assert interceptor.errors == [result.value]
        assert interceptor.responses == []

    @pytest.mark.asyncio
    async def test_hook_return_values_are_not_used(self, make_transport, make_client):
        class Replacing(ResponseInterceptor):
            def on_response(self, response):
                return SuccessfulHttpResponse(status_code=299)

        class ReplacingError(ErrorInterceptor):
            def on_error(self, error):
                return UnknownError("replaced")

        client = make_client(make_transport(httpx.Response(200)), interceptors=[Replacing()])
        result = await client.get("data")
        assert result.value.status_code == 200

        failing = make_client(make_transport(error=RuntimeError("x")), interceptors=[ReplacingError()])
        result = await failing.get("data")
        assert result.value.cause == "RuntimeError: x"

    @pytest.mark.asyncio
    async def test_raising_interceptor_aborts_send(self, make_transport, make_client):
        class Broken(RequestInterceptor):
            def on_request(self, request):
                raise RuntimeError("broken interceptor")

        transport = make_transport()
        client = make_client(transport, interceptors=[Broken()])

        with pytest.raises(RuntimeError, match="broken interceptor"):
            await client.get("data")
        assert transport.requests == []


class TestNetworkingClientLifecycle:
    @pytest.mark.asyncio
    async def test_binds_trace_id_during_send(self, make_client):
        seen = []

        async def transport(request, options):
            seen.append(trace_id_var.get())
            return httpx.Response(200)

        client = make_client(transport)

        await client.get("a")
        await client.get("b")

        assert seen[0] and seen[1]
        assert seen[0] != seen[1]
        assert trace_id_var.get() is None

    @pytest.mark.asyncio
    async def test_keeps_caller_trace_id(self, make_client):
        seen = []

        async def transport(request, options):
            seen.append(trace_id_var.get())
            return httpx.Response(200)

        client = make_client(transport)
        token = trace_id_var.set("caller-trace")
        try:
            await client.get("a")
        finally:
            trace_id_var.reset(token)

        assert seen == ["caller-trace"]

    @pytest.mark.asyncio
    async def test_closes_own_transport(self):
        with patch("networking.transport.HttpxTransport.close", new_callable=AsyncMock) as mock_close:
            async with NetworkingClient(base_url="https://api.example.com"):
                pass

        mock_close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_does_not_close_supplied_transport(self, make_client):
        transport = AsyncMock()
        client = make_client(transport)

        await client.close()

        transport.close.assert_not_called()
