"""
Clients that deliver requests through a proxy API/server.

The proxy client addresses the same API as the client it wraps; before
sending, ``ProxyConfiguration.on_send`` rewrites each request so that it is
delivered to the proxy instead.
"""

from collections.abc import Callable

from .client import HttpResult, NetworkingClient
from .configs import RelayConfig, networking_config
from .models import HttpRequest
from .url import swap_url

OnProxySend = Callable[[HttpRequest], HttpRequest]


class ProxyConfiguration:
    def __init__(self, url: str, client: NetworkingClient, on_send: OnProxySend):
        # URL used to contact the proxy API/server
        self.url = str(url)
        # client whose requests are proxied
        self.client = client
        self.on_send = on_send

    @classmethod
    def forwarding(cls, url: str, client: NetworkingClient) -> "ProxyConfiguration":
        """Proxy that receives the original path and query under its own host."""
        url = str(url)

        def on_send(request: HttpRequest) -> HttpRequest:
            return request.copy_with(url=swap_url(request.url, url))

        return cls(url=url, client=client, on_send=on_send)


class ProxyNetworkingClient(NetworkingClient):
    def __init__(self, configuration: ProxyConfiguration):
        inner = configuration.client
        super().__init__(
            base_url=inner.base_url,
            transport=inner.transport,
            timeout_ms=inner.timeout_ms,
            default_headers=inner.default_headers,
            eager_body=inner.eager_body,
        )
        self.configuration = configuration

    async def close(self) -> None:
        await self.configuration.client.close()

    async def send(self, request: HttpRequest) -> HttpResult:
        proxy_request = self.configuration.on_send(request)
        return await self.configuration.client.send(proxy_request)


class RelayProxyConfiguration(ProxyConfiguration):
    """
    Proxy configuration for a relay worker: the request goes to the relay
    URL and the original destination travels in the ``x-relay-url`` header.
    """

    def __init__(
        self,
        url: str,
        client: NetworkingClient,
        include_body: bool = True,
        bypass_expose_headers: bool = False,
    ):
        self.include_body = include_body
        self.bypass_expose_headers = bypass_expose_headers
        super().__init__(url=url, client=client, on_send=self._relay)

    @classmethod
    def from_config(
        cls, client: NetworkingClient, config: RelayConfig | None = None
    ) -> "RelayProxyConfiguration":
        config = config or networking_config
        if config.RELAY_PROXY_URL is None:
            raise ValueError("RELAY_PROXY_URL is not configured")
        return cls(
            url=str(config.RELAY_PROXY_URL),
            client=client,
            include_body=config.RELAY_INCLUDE_BODY,
            bypass_expose_headers=config.RELAY_BYPASS_EXPOSE_HEADERS,
        )

    def _relay(self, request: HttpRequest) -> HttpRequest:
        return request.copy_with(
            url=self.url,
            query={},
            headers={
                **request.headers,
                "x-relay-url": request.full_url,
                "x-include-body": str(self.include_body).lower(),
                "x-bypass-expose-headers": str(self.bypass_expose_headers).lower(),
            },
        )


class RelayProxyNetworkingClient(ProxyNetworkingClient):
    def __init__(self, configuration: RelayProxyConfiguration):
        super().__init__(configuration)

    @classmethod
    def from_config(
        cls, client: NetworkingClient, config: RelayConfig | None = None
    ) -> "RelayProxyNetworkingClient":
        return cls(RelayProxyConfiguration.from_config(client, config))
