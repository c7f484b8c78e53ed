"""Process invoker: run jq for one request as a cancellable subprocess."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Dict, List, Optional

from ..models import ExecutionResult, QueryRequest, Settings
from ..process_utils import CommandArg, normalize_command, require_jq_binary
from .cancellation import CancellationSignal

logger = logging.getLogger(__name__)


def _decode(data: bytes | None) -> str:
    if not data:
        return ""
    return data.decode("utf-8", errors="replace")


class ProcessInvoker:
    """Invoke the external jq interpreter for a QueryRequest.

    The document is written to jq's standard input; formatting flags and
    the query are passed as arguments. There is no timeout unless
    ``timeout_seconds`` is given: cancellation is the normal way to stop a
    running process.
    """

    def __init__(
        self,
        command: Optional[Sequence[CommandArg]] = None,
        *,
        timeout_seconds: Optional[float] = None,
        kill_grace_seconds: float = 2.0,
        env: Optional[Dict[str, str]] = None,
        home_bin: Optional[Path] = None,
    ):
        self._command = list(command) if command else None
        self._timeout_seconds = timeout_seconds
        self._kill_grace_seconds = kill_grace_seconds
        self._env = env
        self._home_bin = home_bin

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        command: Optional[Sequence[CommandArg]] = None,
        home_bin: Optional[Path] = None,
    ) -> "ProcessInvoker":
        if command is None and settings.jq_path:
            command = [settings.jq_path]
        return cls(
            command,
            timeout_seconds=settings.timeout_seconds,
            kill_grace_seconds=settings.kill_grace_seconds,
            home_bin=home_bin,
        )

    @property
    def command(self) -> List[str]:
        """argv prefix for jq, resolved lazily from PATH when not configured."""
        if self._command is None:
            self._command = [require_jq_binary(home_bin=self._home_bin)]
            logger.info("Initialized jq: %s", self._command[0])
        return normalize_command(self._command)

    async def invoke(
        self, request: QueryRequest, signal: CancellationSignal
    ) -> ExecutionResult:
        """Run jq for ``request``; never raises except on task cancellation."""
        if signal.cancelled:
            logger.debug("Cancelled before start, jq not invoked")
            return ExecutionResult.cancelled()

        try:
            return await self._run(request, signal)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.exception("Error while running jq process")
            return ExecutionResult.failed(str(e) or type(e).__name__)

    async def _run(
        self, request: QueryRequest, signal: CancellationSignal
    ) -> ExecutionResult:
        argv = request.argv(self.command)
        logger.debug("Running %s", argv)
        proc = await asyncio.create_subprocess_exec(
            *argv,
            stdin=asyncio.subprocess.PIPE,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            env=self._env,
        )

        communicate = asyncio.ensure_future(
            proc.communicate(request.document.encode("utf-8"))
        )
        cancelled = asyncio.ensure_future(signal.wait())
        try:
            done, _ = await asyncio.wait(
                {communicate, cancelled},
                timeout=self._timeout_seconds,
                return_when=asyncio.FIRST_COMPLETED,
            )
        except asyncio.CancelledError:
            await self._terminate(proc, communicate)
            raise
        finally:
            cancelled.cancel()

        if communicate in done:
            stdout, stderr = communicate.result()
            return ExecutionResult.completed(
                proc.returncode if proc.returncode is not None else -1,
                _decode(stdout),
                _decode(stderr),
            )

        await self._terminate(proc, communicate)
        if signal.cancelled:
            logger.debug("jq process %s abandoned after cancellation", proc.pid)
            return ExecutionResult.cancelled()

        logger.warning("jq process %s timed out after %ss", proc.pid, self._timeout_seconds)
        return ExecutionResult.failed(
            f"jq did not finish within {self._timeout_seconds} seconds"
        )

    async def _terminate(
        self, proc: asyncio.subprocess.Process, communicate: "asyncio.Future"
    ) -> None:
        if proc.returncode is None:
            with contextlib.suppress(ProcessLookupError):
                proc.terminate()
            try:
                await asyncio.wait_for(proc.wait(), self._kill_grace_seconds)
            except asyncio.TimeoutError:
                with contextlib.suppress(ProcessLookupError):
                    proc.kill()
                await proc.wait()

        if not communicate.done():
            communicate.cancel()
        await asyncio.gather(communicate, return_exceptions=True)


__all__ = ["ProcessInvoker"]
