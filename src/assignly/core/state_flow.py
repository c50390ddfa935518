# src/assignly/core/state_flow.py

from __future__ import annotations

"""
Observable single-value state holder.

The owner writes `value`; renderers either register a callback or iterate
`updates()` from a coroutine. Writes are delivered synchronously and equal
values are conflated (not re-emitted).
"""

import asyncio
import logging
from collections.abc import AsyncIterator, Callable
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

_CLOSED = object()


class StateFlow(Generic[T]):
    def __init__(self, initial: T) -> None:
        self._value = initial
        self._callbacks: list[Callable[[T], None]] = []
        self._queues: list[asyncio.Queue] = []
        self._closed = False

    @property
    def value(self) -> T:
        return self._value

    @value.setter
    def value(self, new_value: T) -> None:
        if new_value == self._value:
            return
        self._value = new_value

        for cb in list(self._callbacks):
            try:
                cb(new_value)
            except Exception:
                # One broken subscriber must not stop the others from seeing the state.
                logger.exception("StateFlow subscriber failed")

        for q in list(self._queues):
            q.put_nowait(new_value)

    @property
    def subscriber_count(self) -> int:
        return len(self._callbacks) + len(self._queues)

    def subscribe(self, callback: Callable[[T], None]) -> Callable[[], None]:
        """
        Register a callback; it is invoked with the current value right away
        and then on every change. Returns an unsubscribe function.
        """
        self._callbacks.append(callback)
        callback(self._value)

        def _unsubscribe() -> None:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

        return _unsubscribe

    async def updates(self) -> AsyncIterator[T]:
        """Yield the current value, then every change until close()."""
        q: asyncio.Queue = asyncio.Queue()
        q.put_nowait(self._value)
        self._queues.append(q)
        try:
            while True:
                item = await q.get()
                if item is _CLOSED:
                    return
                yield item
                if self._closed and q.empty():
                    return
        finally:
            if q in self._queues:
                self._queues.remove(q)

    def close(self) -> None:
        """Finish all pending `updates()` iterators. Callbacks stay registered."""
        if self._closed:
            return
        self._closed = True
        for q in list(self._queues):
            q.put_nowait(_CLOSED)

    def as_read_only(self) -> "ReadOnlyStateFlow[T]":
        return ReadOnlyStateFlow(self)


class ReadOnlyStateFlow(Generic[T]):
    """View over a StateFlow without the setter; handed to renderers."""

    def __init__(self, source: StateFlow[T]) -> None:
        self._source = source

    @property
    def value(self) -> T:
        return self._source.value

    def subscribe(self, callback: Callable[[T], None]) -> Callable[[], None]:
        return self._source.subscribe(callback)

    def updates(self) -> AsyncIterator[T]:
        return self._source.updates()
