"""Process utilities: command validation and jq binary discovery.

Lives outside the pipeline package so that the CLI can resolve and report
the jq binary without constructing a pipeline.
"""

from __future__ import annotations

import os
import shutil
from collections.abc import Sequence
from pathlib import Path
from typing import Optional

from .errors import JqNotFoundError

CommandArg = str | os.PathLike[str]


def normalize_command(cmd: Sequence[CommandArg]) -> list[str]:
    """Validate and normalize subprocess command arguments."""
    if not cmd:
        msg = "Command must include at least one argument"
        raise ValueError(msg)

    normalized: list[str] = []
    for arg in cmd:
        if isinstance(arg, os.PathLike):
            value = os.fspath(arg)
        elif isinstance(arg, str):
            value = arg
        else:
            msg = "Command arguments must be strings or os.PathLike"
            raise TypeError(msg)

        if not value.strip():
            msg = "Command arguments cannot be empty or whitespace"
            raise ValueError(msg)

        normalized.append(value)

    return normalized


def _executable(path: Path) -> bool:
    return path.is_file() and os.access(path, os.X_OK)


def find_jq_binary(
    configured: Optional[str] = None, home_bin: Optional[Path] = None
) -> str | None:
    """Find the jq binary.

    Resolution order:
    1. ``configured`` (the jqPath setting)
    2. $JQLIVE_JQ
    3. ``home_bin``/jq (bundled next to the settings)
    4. jq in PATH

    Returns:
        Path to jq or None if not found
    """
    for candidate in (configured, os.environ.get("JQLIVE_JQ")):
        if not candidate:
            continue
        path = Path(candidate).expanduser()
        if _executable(path):
            return str(path)
        found = shutil.which(candidate)
        if found:
            return found

    if home_bin is not None:
        bundled = home_bin / "jq"
        if _executable(bundled):
            return str(bundled)

    return shutil.which("jq")


def require_jq_binary(
    configured: Optional[str] = None, home_bin: Optional[Path] = None
) -> str:
    """Like find_jq_binary, but raise JqNotFoundError when nothing is found."""
    found = find_jq_binary(configured, home_bin)
    if found is None:
        raise JqNotFoundError(
            "jq not found. Install it from https://jqlang.org/download/ "
            "or set jqPath / $JQLIVE_JQ."
        )
    return found


__all__ = [
    "CommandArg",
    "find_jq_binary",
    "normalize_command",
    "require_jq_binary",
]
