"""jqlive: live jq queries over JSON, one cancellable jq process at a time."""

from .errors import JqliveError, JqNotFoundError, PipelineDisposedError, SettingsError
from .models import ExecutionResult, FormattingOptions, Indentation, QueryRequest
from .pipeline import ProcessInvoker, QueryPipeline

__all__ = [
    "__version__",
    "ExecutionResult",
    "FormattingOptions",
    "Indentation",
    "JqNotFoundError",
    "JqliveError",
    "PipelineDisposedError",
    "ProcessInvoker",
    "QueryPipeline",
    "QueryRequest",
    "SettingsError",
]

__version__ = "0.1.0"
