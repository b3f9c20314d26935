from __future__ import annotations

from typing import Callable, Generic, Iterator, TypeVar

from .errors import NegativeCountError

T = TypeVar("T")


class BoundedSequence(Generic[T]):
    """Finite, single-pass sequence of ``count`` draws.

    Every element consumes generator state when it is produced, so the
    sequence cannot be replayed; iterating it again yields nothing more.
    """

    def __init__(self, draw: Callable[[], T], count: int):
        if count < 0:
            raise NegativeCountError("Element count should be non-negative")
        self._draw = draw
        self._remaining = count

    def __iter__(self) -> Iterator[T]:
        return self

    def __next__(self) -> T:
        if self._remaining <= 0:
            raise StopIteration
        self._remaining -= 1
        return self._draw()

    def __length_hint__(self) -> int:
        return self._remaining

    @property
    def remaining(self) -> int:
        return self._remaining
