"""Ready-made clients for specific HTTP APIs."""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal

from .client import NetworkingClient
from .interceptors import AuthorizationInterceptor, Interceptor
from .types import Transport
from .url import resolve_url


@dataclass(frozen=True)
class GitHubRepository:
    owner: str
    repo: str
    # branch, tag or commit sha
    ref: str


class RawGitHubNetworkingClient(NetworkingClient):
    """Reads files of a GitHub repository through raw.githubusercontent.com."""

    def __init__(
        self,
        repository: GitHubRepository,
        transport: Transport | None = None,
        timeout_ms: int | None = None,
    ):
        super().__init__(
            base_url=resolve_url(
                "https://raw.githubusercontent.com/",
                f"{repository.owner}/{repository.repo}/{repository.ref}/",
            ),
            transport=transport,
            timeout_ms=timeout_ms,
        )
        self.repository = repository


class ImgurApiAuthorizationInterceptor(AuthorizationInterceptor):
    def __init__(self, client_id: str):
        super().__init__(parameters=client_id, scheme="Client-ID")


class ImgurNetworkingClient(NetworkingClient):
    """Client for the Imgur HTTP API, authorized with an application client id."""

    def __init__(
        self,
        client_id: str,
        api_version: Literal["1", "2", "3"] = "3",
        transport: Transport | None = None,
        timeout_ms: int | None = None,
        interceptors: Sequence[Interceptor] | None = None,
    ):
        super().__init__(
            base_url=resolve_url("https://api.imgur.com/", api_version),
            transport=transport,
            timeout_ms=timeout_ms,
            interceptors=[*(interceptors or []), ImgurApiAuthorizationInterceptor(client_id)],
        )

    @classmethod
    def v3(cls, client_id: str) -> "ImgurNetworkingClient":
        return cls(client_id=client_id, api_version="3")
