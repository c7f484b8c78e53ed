"""Pydantic models shared by the pipeline, settings and UI layers."""

from .query import FormattingOptions, Indentation, QueryRequest, normalize_line_endings
from .results import ExecutionResult, HandleState
from .settings import Settings

__all__ = [
    "ExecutionResult",
    "FormattingOptions",
    "HandleState",
    "Indentation",
    "QueryRequest",
    "Settings",
    "normalize_line_endings",
]
