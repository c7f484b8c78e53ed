"""Persisted panel settings."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .query import FormattingOptions, Indentation


class Settings(BaseModel):
    """Root settings.json model.

    Keys keep the names the panel has always stored them under, so an
    existing settings file round-trips unchanged.
    """

    model_config = ConfigDict(populate_by_name=True)

    indentation_mode: Indentation = Field(
        default=Indentation.TWO_SPACES, alias="JsonQuery.indentationMode"
    )
    sort_keys: bool = Field(default=False, alias="JsonQuery.sortKeys")
    jq_path: str | None = Field(default=None, alias="jqPath")
    timeout_seconds: float | None = Field(default=None, alias="timeoutSeconds")
    kill_grace_seconds: float = Field(default=2.0, alias="killGraceSeconds")
    settings_path: Path | None = Field(default=None, exclude=True)

    @field_validator("timeout_seconds", "kill_grace_seconds")
    @classmethod
    def non_negative(cls, v: float | None) -> float | None:
        if v is not None and v < 0:
            raise ValueError("must not be negative")
        return v

    def formatting_options(self) -> FormattingOptions:
        return FormattingOptions(
            indentation=self.indentation_mode, sort_keys=self.sort_keys
        )


__all__ = ["Settings"]
