"""Query request and formatting option models."""

from __future__ import annotations

from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, field_validator


class Indentation(str, Enum):
    """Output indentation modes understood by jq."""

    TWO_SPACES = "TwoSpaces"
    FOUR_SPACES = "FourSpaces"
    ONE_TAB = "OneTab"
    MINIFIED = "Minified"


class FormattingOptions(BaseModel):
    """Formatting flags applied to every jq invocation."""

    model_config = ConfigDict(frozen=True)

    indentation: Indentation = Indentation.TWO_SPACES
    sort_keys: bool = False

    @property
    def compact_output(self) -> bool:
        return self.indentation is Indentation.MINIFIED

    @property
    def indent(self) -> int | None:
        if self.indentation is Indentation.TWO_SPACES:
            return 2
        if self.indentation is Indentation.FOUR_SPACES:
            return 4
        return None

    @property
    def tab(self) -> bool:
        return self.indentation is Indentation.ONE_TAB

    def to_jq_flags(self) -> List[str]:
        """Translate the options to jq command-line flags.

        Examples:
            >>> FormattingOptions().to_jq_flags()
            ['--indent', '2']
            >>> FormattingOptions(indentation="Minified", sort_keys=True).to_jq_flags()
            ['--compact-output', '--sort-keys']
        """
        flags: List[str] = []
        if self.compact_output:
            flags.append("--compact-output")
        if self.indent is not None:
            flags.extend(["--indent", str(self.indent)])
        if self.tab:
            flags.append("--tab")
        if self.sort_keys:
            flags.append("--sort-keys")
        return flags


def normalize_line_endings(text: str) -> str:
    """Convert CRLF and lone CR line endings to LF."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


class QueryRequest(BaseModel):
    """Immutable snapshot of the panel inputs at the time of an edit."""

    model_config = ConfigDict(frozen=True)

    document: str = ""
    query: str = "."
    options: FormattingOptions = FormattingOptions()

    @field_validator("document")
    @classmethod
    def normalize_document(cls, v: str) -> str:
        return normalize_line_endings(v)

    def argv(self, command: List[str]) -> List[str]:
        """Full argv for running this request with ``command`` as jq."""
        return [*command, *self.options.to_jq_flags(), self.query]


__all__ = [
    "FormattingOptions",
    "Indentation",
    "QueryRequest",
    "normalize_line_endings",
]
