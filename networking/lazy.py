import asyncio
import enum
from collections.abc import Awaitable, Callable
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class LazyState(enum.Enum):
    UNEVALUATED = "unevaluated"
    EVALUATING = "evaluating"
    EVALUATED = "evaluated"


class Lazy(Generic[T]):
    """
    A value that is not computed at the time it's created.

    The producer runs at most once. If it raises, the exception is memoized
    and raised again on every later ``get()``; the producer is never retried.
    """

    def __init__(self, producer: Callable[[], T]):
        self._producer: Callable[[], T] | None = producer
        self._state = LazyState.UNEVALUATED
        self._value: Any = None
        self._error: BaseException | None = None

    @classmethod
    def sync(cls, producer: Callable[[], T]) -> "Lazy[T]":
        return cls(producer)

    @classmethod
    def of_async(cls, producer: Callable[[], Awaitable[T]]) -> "Lazy[asyncio.Future[T]]":
        """
        Lazy value whose producer is asynchronous.

        ``get()`` returns a future (must be called with a running event loop).
        Concurrent callers share the same in-flight computation.
        """
        return cls(lambda: asyncio.ensure_future(producer()))

    @property
    def state(self) -> LazyState:
        return self._state

    @property
    def evaluated(self) -> bool:
        return self._state is LazyState.EVALUATED

    def get(self) -> T:
        if self._state is LazyState.EVALUATING:
            raise RuntimeError("lazy value accessed while being computed")

        if self._state is LazyState.UNEVALUATED:
            producer = self._producer
            self._state = LazyState.EVALUATING
            try:
                self._value = producer()
            except Exception as exc:
                self._error = exc
            finally:
                self._producer = None
                self._state = LazyState.EVALUATED

        if self._error is not None:
            raise self._error
        return self._value
