"""QueryPipeline: one panel's worth of gate, invoker, publisher and controller."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Sequence

from ..models import ExecutionResult, QueryRequest
from ..process_utils import CommandArg
from ..settings import SettingsStore
from .controller import TriggerController
from .gate import ExecutionGate, Invoker
from .invoker import ProcessInvoker
from .publisher import OutputState, ResultPublisher

logger = logging.getLogger(__name__)


class QueryPipeline:
    """Explicitly constructed, explicitly closed execution pipeline.

    Example:
        >>> async with QueryPipeline(ProcessInvoker(["jq"])) as pipeline:
        ...     pipeline.controller.document_changed('{"a": 1}')
        ...     await pipeline.wait_idle()
        ...     pipeline.output.output_text
        '1'
    """

    def __init__(
        self,
        invoker: Invoker,
        settings: Optional[SettingsStore] = None,
        *,
        document: str = "",
        query: str = ".",
    ):
        self.invoker = invoker
        self.settings = settings or SettingsStore()
        self.output = OutputState()
        self.publisher = ResultPublisher(self.output, self._is_current)
        self.gate = ExecutionGate(invoker, self.publisher.publish)
        self.controller = TriggerController(
            self.gate, self.settings, document=document, query=query
        )
        self._closed = False

    @classmethod
    def from_settings(
        cls,
        settings: SettingsStore,
        *,
        command: Optional[Sequence[CommandArg]] = None,
        home_bin: Optional[Path] = None,
        document: str = "",
        query: str = ".",
    ) -> "QueryPipeline":
        invoker = ProcessInvoker.from_settings(
            settings.settings, command=command, home_bin=home_bin
        )
        return cls(invoker, settings, document=document, query=query)

    def _is_current(self, handle) -> bool:
        return self.gate.is_current(handle)

    @property
    def closed(self) -> bool:
        return self._closed

    async def wait_idle(self) -> None:
        await self.gate.wait_idle()

    async def run_once(self) -> Optional[ExecutionResult]:
        """Submit the current inputs, wait, and return the execution result."""
        handle = self.controller.refresh()
        await self.wait_idle()
        return handle.result if handle is not None else None

    async def evaluate(self, request: QueryRequest) -> Optional[ExecutionResult]:
        """Submit ``request`` directly, bypassing the controller state."""
        handle = self.gate.submit(request)
        await self.wait_idle()
        return handle.result if handle is not None else None

    async def aclose(self) -> None:
        if self._closed:
            return
        self._closed = True
        self.controller.detach()
        await self.gate.dispose()
        self.output.dispose()
        logger.debug("Pipeline closed")

    async def __aenter__(self) -> "QueryPipeline":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()


__all__ = ["QueryPipeline"]
