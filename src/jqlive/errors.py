"""Exception hierarchy for jqlive."""


class JqliveError(Exception):
    """Base class for jqlive errors."""


class SettingsError(JqliveError):
    """Settings file could not be read, parsed or validated."""


class JqNotFoundError(JqliveError):
    """No jq binary could be located."""


class PipelineDisposedError(JqliveError):
    """Operation attempted on a pipeline that has been closed."""


__all__ = [
    "JqNotFoundError",
    "JqliveError",
    "PipelineDisposedError",
    "SettingsError",
]
