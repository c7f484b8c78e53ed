"""Execution gate: single-flight, cancel-and-restart scheduling of jq runs."""

from __future__ import annotations

import asyncio
import itertools
import logging
from typing import Callable, Optional, Protocol, Set

from ..models import ExecutionResult, HandleState, QueryRequest
from .cancellation import CancellationSignal, acquire_cancellable

logger = logging.getLogger(__name__)


class Invoker(Protocol):
    """Anything that can evaluate a QueryRequest under a cancellation signal."""

    async def invoke(
        self, request: QueryRequest, signal: CancellationSignal
    ) -> ExecutionResult:
        ...


class ExecutionHandle:
    """One submitted request and the state of its execution."""

    def __init__(self, seq: int, request: QueryRequest):
        self.seq = seq
        self.request = request
        self.signal = CancellationSignal()
        self.state = HandleState.CREATED
        self.result: Optional[ExecutionResult] = None
        self.task: Optional[asyncio.Task] = None

    def cancel(self) -> None:
        self.signal.cancel()

    @property
    def cancelled(self) -> bool:
        return self.signal.cancelled

    def __repr__(self) -> str:
        return f"ExecutionHandle(seq={self.seq}, state={self.state.value})"


Publish = Callable[[ExecutionHandle, ExecutionResult], None]


class ExecutionGate:
    """Run at most one jq process at a time, always for the newest request.

    ``submit`` cancels whatever was submitted before and schedules the new
    request behind a per-instance lock. Work that is cancelled while it
    waits for the lock never starts a process. Must be used from the event
    loop thread; the current-handle swap in ``submit`` is synchronous, so
    there is a single writer.
    """

    def __init__(self, invoker: Invoker, publish: Publish):
        self._invoker = invoker
        self._publish = publish
        self._lock = asyncio.Lock()
        self._current: Optional[ExecutionHandle] = None
        self._tasks: Set[asyncio.Task] = set()
        self._seq = itertools.count(1)
        self._disposed = False

    @property
    def current(self) -> Optional[ExecutionHandle]:
        return self._current

    @property
    def disposed(self) -> bool:
        return self._disposed

    @property
    def busy(self) -> bool:
        return bool(self._tasks)

    def is_current(self, handle: ExecutionHandle) -> bool:
        return handle is self._current

    def submit(self, request: QueryRequest) -> Optional[ExecutionHandle]:
        """Supersede the current execution with one for ``request``."""
        if self._disposed:
            logger.debug("Gate disposed, ignoring submission")
            return None

        previous = self._current
        if previous is not None:
            previous.cancel()

        handle = ExecutionHandle(next(self._seq), request)
        self._current = handle

        loop = asyncio.get_running_loop()
        task = loop.create_task(self._run(handle), name=f"jqlive-exec-{handle.seq}")
        handle.task = task
        handle.state = HandleState.DISPATCHED
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return handle

    async def _run(self, handle: ExecutionHandle) -> None:
        if not await acquire_cancellable(self._lock, handle.signal):
            handle.state = HandleState.SUPERSEDED_BEFORE_START
            logger.debug("Execution %d superseded before start", handle.seq)
            return

        try:
            if handle.cancelled:
                handle.state = HandleState.SUPERSEDED_BEFORE_START
                return

            handle.state = HandleState.RUNNING
            try:
                result = await self._invoker.invoke(handle.request, handle.signal)
            except asyncio.CancelledError:
                handle.state = HandleState.CANCELED
                raise
            except Exception as e:
                logger.exception("Invoker raised for execution %d", handle.seq)
                result = ExecutionResult.failed(str(e) or type(e).__name__)

            handle.result = result
            if result.was_cancelled:
                handle.state = HandleState.CANCELED
                logger.debug("Execution %d cancelled", handle.seq)
                return

            handle.state = HandleState.COMPLETED
            self._publish(handle, result)
        finally:
            self._lock.release()

    async def wait_idle(self) -> None:
        """Wait until no execution is pending or running."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def dispose(self) -> None:
        """Cancel the current execution and wait for all work to wind down."""
        if self._disposed:
            return
        self._disposed = True
        if self._current is not None:
            self._current.cancel()
        await self.wait_idle()


__all__ = ["ExecutionGate", "ExecutionHandle", "Invoker", "Publish"]
