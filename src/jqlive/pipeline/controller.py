"""Trigger controller: turn input edits into gated executions."""

from __future__ import annotations

import logging
from typing import Any, Optional

from ..models import QueryRequest
from ..settings import SettingsStore
from .gate import ExecutionGate, ExecutionHandle

logger = logging.getLogger(__name__)

JSON_DATA_TYPE = "json"


class TriggerController:
    """Track the panel inputs and submit a fresh request on every change.

    There is no timer-based debounce here. A burst of edits produces a
    burst of submissions, and the gate cancels all but the newest one.
    """

    def __init__(
        self,
        gate: ExecutionGate,
        settings: SettingsStore,
        *,
        document: str = "",
        query: str = ".",
    ):
        self._gate = gate
        self._settings = settings
        self._document = document
        self._query = query
        self._unsubscribe = settings.subscribe(lambda _settings: self.options_changed())

    @property
    def document(self) -> str:
        return self._document

    @property
    def query(self) -> str:
        return self._query

    def snapshot(self) -> QueryRequest:
        """Build a QueryRequest from the current inputs and settings."""
        return QueryRequest(
            document=self._document,
            query=self._query,
            options=self._settings.formatting_options(),
        )

    def document_changed(self, text: str) -> Optional[ExecutionHandle]:
        self._document = text
        return self._trigger("document")

    def query_changed(self, text: str) -> Optional[ExecutionHandle]:
        self._query = text
        return self._trigger("query")

    def options_changed(self) -> Optional[ExecutionHandle]:
        return self._trigger("options")

    def refresh(self) -> Optional[ExecutionHandle]:
        return self._trigger("refresh")

    def load(self, document: str, query: str) -> Optional[ExecutionHandle]:
        """Replace both inputs at once and submit a single request."""
        self._document = document
        self._query = query
        return self._trigger("load")

    def receive_data(self, data_type: str, payload: Any) -> Optional[ExecutionHandle]:
        """Accept data pushed by the host; only JSON text is taken."""
        if data_type == JSON_DATA_TYPE and isinstance(payload, str):
            return self.document_changed(payload)
        logger.debug("Ignoring received data of type %s", data_type)
        return None

    def detach(self) -> None:
        """Stop listening for settings changes."""
        self._unsubscribe()

    def _trigger(self, source: str) -> Optional[ExecutionHandle]:
        handle = self._gate.submit(self.snapshot())
        if handle is not None:
            logger.debug("%s changed, submitted execution %d", source, handle.seq)
        return handle


__all__ = ["JSON_DATA_TYPE", "TriggerController"]
