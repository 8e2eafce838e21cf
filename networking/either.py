"""
Tagged result type. As per convention, ``Left`` carries the error and
``Right`` the success value.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar, Union

L = TypeVar("L")
R = TypeVar("R")
T = TypeVar("T")


@dataclass(frozen=True)
class Left(Generic[L]):
    value: L

    def is_left(self) -> bool:
        return True

    def is_right(self) -> bool:
        return False


@dataclass(frozen=True)
class Right(Generic[R]):
    value: R

    def is_left(self) -> bool:
        return False

    def is_right(self) -> bool:
        return True


Either = Union[Left[L], Right[R]]


def left(value: L) -> Left[L]:
    return Left(value)


def right(value: R) -> Right[R]:
    return Right(value)


def is_left(either: Either[L, R]) -> bool:
    return isinstance(either, Left)


def is_right(either: Either[L, R]) -> bool:
    return isinstance(either, Right)


def fold(either: Either[L, R], on_left: Callable[[L], T], on_right: Callable[[R], T]) -> T:
    match either:
        case Left(value):
            return on_left(value)
        case Right(value):
            return on_right(value)
    raise TypeError(f"not an Either: {either!r}")
