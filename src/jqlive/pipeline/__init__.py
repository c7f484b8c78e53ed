"""Debounced, cancellable, single-in-flight jq execution pipeline.

Edits flow through the pipeline in one direction:

    TriggerController -> ExecutionGate -> ProcessInvoker -> ResultPublisher

The gate guarantees at most one running jq process per pipeline and that
only the newest submission can reach the output state.
"""

from .cancellation import CancellationSignal, acquire_cancellable
from .controller import TriggerController
from .gate import ExecutionGate, ExecutionHandle, Invoker
from .invoker import ProcessInvoker
from .publisher import OutputState, ResultPublisher
from .session import QueryPipeline

__all__ = [
    "CancellationSignal",
    "ExecutionGate",
    "ExecutionHandle",
    "Invoker",
    "OutputState",
    "ProcessInvoker",
    "QueryPipeline",
    "ResultPublisher",
    "TriggerController",
    "acquire_cancellable",
]
