"""Execution results and handle lifecycle states."""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict


class HandleState(str, Enum):
    """Lifecycle of one submitted request."""

    CREATED = "created"
    DISPATCHED = "dispatched"
    RUNNING = "running"
    COMPLETED = "completed"
    CANCELED = "canceled"
    SUPERSEDED_BEFORE_START = "superseded_before_start"

    @property
    def terminal(self) -> bool:
        return self in _TERMINAL_STATES


_TERMINAL_STATES = frozenset(
    {
        HandleState.COMPLETED,
        HandleState.CANCELED,
        HandleState.SUPERSEDED_BEFORE_START,
    }
)


def _trim(text: str) -> str:
    # drop the single line terminator jq writes after the last value
    if text.endswith("\n"):
        text = text[:-1]
        if text.endswith("\r"):
            text = text[:-1]
    return text


class ExecutionResult(BaseModel):
    """Outcome of one jq invocation.

    ``status`` is ``completed`` when the process ran to its natural end,
    ``failed`` when it could not be started or raised while running, and
    ``cancelled`` when the invocation was abandoned.
    """

    model_config = ConfigDict(frozen=True)

    status: Literal["completed", "failed", "cancelled"]
    exit_code: int | None = None
    stdout: str = ""
    stderr: str = ""
    error: str | None = None

    @classmethod
    def completed(cls, exit_code: int, stdout: str, stderr: str) -> "ExecutionResult":
        return cls(
            status="completed",
            exit_code=exit_code,
            stdout=_trim(stdout),
            stderr=_trim(stderr),
        )

    @classmethod
    def failed(cls, error: str) -> "ExecutionResult":
        return cls(status="failed", error=error)

    @classmethod
    def cancelled(cls) -> "ExecutionResult":
        return cls(status="cancelled")

    @property
    def succeeded(self) -> bool:
        return self.status == "completed" and self.exit_code == 0

    @property
    def invocation_failed(self) -> bool:
        return self.status == "failed"

    @property
    def was_cancelled(self) -> bool:
        return self.status == "cancelled"


__all__ = ["ExecutionResult", "HandleState"]
