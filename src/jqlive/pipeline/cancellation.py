"""Cooperative cancellation primitives for the execution pipeline."""

from __future__ import annotations

import asyncio


class CancellationSignal:
    """One-shot cancellation flag observed by waiting and running work.

    Cancellation is cooperative: setting the signal never interrupts a task
    by itself, the work that owns the signal has to look at it.
    """

    def __init__(self) -> None:
        self._event = asyncio.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    async def wait(self) -> None:
        await self._event.wait()

    def __repr__(self) -> str:
        return f"CancellationSignal(cancelled={self.cancelled})"


def _release_if_acquired(lock: asyncio.Lock, task: "asyncio.Future[bool]") -> None:
    if task.cancelled() or task.exception() is not None:
        return
    if task.result():
        lock.release()


async def acquire_cancellable(lock: asyncio.Lock, signal: CancellationSignal) -> bool:
    """Acquire ``lock`` unless ``signal`` fires first.

    Returns True when the caller now holds the lock. When the signal wins
    the pending acquisition is withdrawn; if the lock was granted in the
    same loop iteration it is handed straight back, so a cancelled waiter
    never ends up owning the lock.
    """
    if signal.cancelled:
        return False

    acquire = asyncio.ensure_future(lock.acquire())
    waiter = asyncio.ensure_future(signal.wait())
    try:
        await asyncio.wait({acquire, waiter}, return_when=asyncio.FIRST_COMPLETED)
    except asyncio.CancelledError:
        waiter.cancel()
        _abandon(lock, acquire)
        raise
    waiter.cancel()

    if acquire.done() and not signal.cancelled:
        return acquire.result()

    _abandon(lock, acquire)
    return False


def _abandon(lock: asyncio.Lock, acquire: "asyncio.Future[bool]") -> None:
    if acquire.done():
        _release_if_acquired(lock, acquire)
        return
    acquire.cancel()
    acquire.add_done_callback(lambda task: _release_if_acquired(lock, task))


__all__ = ["CancellationSignal", "acquire_cancellable"]
