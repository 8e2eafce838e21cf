from collections.abc import Awaitable, Callable
from dataclasses import dataclass

import httpx


@dataclass(frozen=True)
class TransportOptions:
    timeout_ms: int

    @property
    def timeout(self) -> float:
        return self.timeout_ms / 1000


Transport = Callable[[httpx.Request, TransportOptions], Awaitable[httpx.Response]]
