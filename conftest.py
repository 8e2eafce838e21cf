"""Pytest configuration"""

import httpx
import pytest

from networking import HttpRequest, NetworkingClient, TransportOptions


class StubTransport:
    """Transport callable that records requests and answers with a canned response or failure."""

    def __init__(self, response: httpx.Response | None = None, error: BaseException | None = None):
        self.response = response if response is not None else httpx.Response(200)
        self.error = error
        self.requests: list[httpx.Request] = []
        self.options: list[TransportOptions] = []

    async def __call__(self, request: httpx.Request, options: TransportOptions) -> httpx.Response:
        self.requests.append(request)
        self.options.append(options)
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def stub_transport():
    return StubTransport()


@pytest.fixture
def make_transport():
    return StubTransport


@pytest.fixture
def make_client():
    def factory(transport, **kwargs) -> NetworkingClient:
        kwargs.setdefault("default_headers", {})
        return NetworkingClient(base_url="https://api.example.com", transport=transport, **kwargs)

    return factory


@pytest.fixture
def get_request():
    return HttpRequest(url="https://github.com/web-pacotes/networking", verb="get")
