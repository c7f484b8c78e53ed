"""Result publisher and the observable output state it writes to."""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

from ..errors import PipelineDisposedError
from ..models import ExecutionResult
from .gate import ExecutionHandle

logger = logging.getLogger(__name__)

OutputListener = Callable[["OutputState"], None]

INVOCATION_FAILURE_PREFIX = "Error while running jq"


class OutputState:
    """What the panel shows: the last good output and the latest status text."""

    def __init__(self, output_text: str = "", error_text: str = ""):
        self.output_text = output_text
        self.error_text = error_text
        self.failure: Optional[str] = None
        self.published = 0
        self._listeners: List[OutputListener] = []
        self._disposed = False

    @property
    def disposed(self) -> bool:
        return self._disposed

    def subscribe(self, listener: OutputListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def update(
        self,
        *,
        error_text: str,
        output_text: Optional[str] = None,
        failure: Optional[str] = None,
    ) -> None:
        """Apply one publish; ``output_text=None`` keeps the previous output."""
        if self._disposed:
            raise PipelineDisposedError("Output state has been disposed")
        if output_text is not None:
            self.output_text = output_text
        self.error_text = error_text
        self.failure = failure
        self.published += 1
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                logger.exception("Output listener %r failed", listener)

    def dispose(self) -> None:
        self._disposed = True
        self._listeners.clear()


class ResultPublisher:
    """Apply execution results to an OutputState if they are still wanted."""

    def __init__(
        self,
        state: OutputState,
        is_current: Callable[[ExecutionHandle], bool],
    ):
        self._state = state
        self._is_current = is_current

    def publish(self, handle: ExecutionHandle, result: ExecutionResult) -> bool:
        """Publish ``result`` for ``handle``; returns False if it was discarded."""
        if not self._is_current(handle) or handle.cancelled:
            logger.debug("Discarding result of superseded execution %d", handle.seq)
            return False
        if result.was_cancelled or self._state.disposed:
            return False

        if result.invocation_failed:
            message = f"{INVOCATION_FAILURE_PREFIX}: {result.error}"
            self._state.update(error_text=message, failure=message)
            return True

        self._state.update(
            error_text=result.stderr,
            output_text=result.stdout if result.succeeded else None,
        )
        return True


__all__ = ["INVOCATION_FAILURE_PREFIX", "OutputState", "ResultPublisher"]
