# src/assignly/core/scope.py

from __future__ import annotations

"""
Lifecycle scope for controller background work.

A controller launches its coroutines through a TaskScope owned by whoever
owns the screen. Cancelling the scope (directly, or by setting the bound
cancel_event) cancels every in-flight task; after that nothing new starts.
"""

import asyncio
import logging
from collections.abc import Coroutine
from typing import Any

logger = logging.getLogger(__name__)


class ScopeCancelledError(RuntimeError):
    """Raised when launching work in a scope that was already cancelled."""


class TaskScope:
    def __init__(self, *, cancel_event: asyncio.Event | None = None, name: str = "scope") -> None:
        self.name = name
        self._tasks: set[asyncio.Task] = set()
        self._cancelled = False
        self._cancel_event = cancel_event
        self._watcher: asyncio.Task | None = None

    @property
    def is_cancelled(self) -> bool:
        if not self._cancelled and self._cancel_event is not None and self._cancel_event.is_set():
            self.cancel()
        return self._cancelled

    def bind_cancel_event(self, cancel_event: asyncio.Event) -> None:
        """
        Attach a cancel signal after construction.

        A scope listens to one signal only; binding a different one raises ValueError.
        """
        if self._cancel_event is cancel_event:
            return
        if self._cancel_event is not None:
            raise ValueError(f"{self.name} already has a cancel event")
        self._cancel_event = cancel_event
        if cancel_event.is_set():
            self.cancel()
        elif self._tasks:
            self._ensure_watcher()

    def launch(self, coro: Coroutine[Any, Any, Any], *, name: str | None = None) -> asyncio.Task:
        """
        Schedule coro on the running loop as a task owned by this scope.

        Must be called from inside a running event loop; otherwise RuntimeError
        is raised and coro is closed.
        """
        if self.is_cancelled:
            coro.close()
            raise ScopeCancelledError(f"{self.name} is cancelled")

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            coro.close()
            raise

        task = loop.create_task(coro, name=name)
        self._tasks.add(task)
        task.add_done_callback(self._on_task_done)
        self._ensure_watcher()
        return task

    def _ensure_watcher(self) -> None:
        if self._cancel_event is None or self._watcher is not None:
            return
        self._watcher = asyncio.get_running_loop().create_task(
            self._watch_cancel_event(), name=f"{self.name}-cancel-watcher"
        )

    async def _watch_cancel_event(self) -> None:
        assert self._cancel_event is not None
        await self._cancel_event.wait()
        logger.debug("%s: cancel signal received", self.name)
        self.cancel()

    def _stop_watcher(self) -> None:
        if self._watcher is not None and not self._watcher.done():
            self._watcher.cancel()
        self._watcher = None

    def _on_task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        # The watcher only lives while there is work to cancel; the next launch restarts it.
        if not self._tasks:
            self._stop_watcher()
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("%s: task %s failed", self.name, task.get_name(), exc_info=exc)

    def cancel(self) -> None:
        """Cancel all in-flight tasks. Idempotent."""
        if self._cancelled:
            return
        self._cancelled = True
        pending = [t for t in self._tasks if not t.done()]
        for t in pending:
            t.cancel()
        self._stop_watcher()
        if pending:
            logger.debug("%s: cancelled %d task(s)", self.name, len(pending))

    async def join(self) -> None:
        """Wait for all launched tasks to finish (cancelled ones included)."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
