from pydantic import Field, HttpUrl, PositiveInt
from pydantic_settings import BaseSettings


class ClientConfig(BaseSettings):
    """
    Defaults for NetworkingClient instances
    """

    REQUEST_TIMEOUT_MS: PositiveInt = Field(
        description="Per-request timeout in milliseconds, default to 30 seconds",
        default=30 * 1000,
    )

    EAGER_RESPONSE_BODY: bool = Field(
        description="Read response bodies before returning from send instead of on first access",
        default=False,
    )

    USER_AGENT: str = Field(
        description="User-Agent header sent by default, empty for none",
        default="",
    )


class RelayConfig(BaseSettings):
    """
    Relay proxy configuration
    """

    RELAY_PROXY_URL: HttpUrl | None = Field(
        description="URL of the relay proxy endpoint, e.g. https://relay.example.workers.dev",
        default=None,
    )

    RELAY_INCLUDE_BODY: bool = Field(
        description="Ask the relay to forward the request body",
        default=True,
    )

    RELAY_BYPASS_EXPOSE_HEADERS: bool = Field(
        description="Ask the relay to expose all response headers to the caller",
        default=False,
    )
