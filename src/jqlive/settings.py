"""Settings store: load, validate and persist settings.json."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, List

from pydantic import ValidationError

from .errors import SettingsError
from .home import load_json, save_json
from .models import FormattingOptions, Settings

logger = logging.getLogger(__name__)

# CLI-facing key -> Settings field name
SETTING_KEYS: Dict[str, str] = {
    "indentationMode": "indentation_mode",
    "sortKeys": "sort_keys",
    "jqPath": "jq_path",
    "timeoutSeconds": "timeout_seconds",
    "killGraceSeconds": "kill_grace_seconds",
}

SettingsListener = Callable[[Settings], None]


def _parse_value(raw: Any) -> Any:
    """Interpret CLI strings as JSON scalars where possible ("true", "2.5", "null")."""
    if not isinstance(raw, str):
        return raw
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


class SettingsStore:
    """Holds the active Settings and writes changes back to disk.

    A store without a path keeps settings in memory only, which is what the
    one-shot CLI and most tests want.
    """

    def __init__(self, path: Path | None = None, settings: Settings | None = None):
        self._path = path
        self._settings = settings or Settings(settings_path=path)
        self._listeners: List[SettingsListener] = []

    @classmethod
    def load(cls, path: Path) -> "SettingsStore":
        """Load settings from ``path``; a missing file yields defaults."""
        if not path.exists():
            logger.debug("No settings file at %s, using defaults", path)
            return cls(path=path)

        try:
            data = load_json(path)
        except (OSError, json.JSONDecodeError) as e:
            raise SettingsError(f"Cannot read settings file {path}: {e}") from e

        try:
            settings = Settings.model_validate(data)
        except ValidationError as e:
            raise SettingsError(f"Invalid settings file {path}: {e}") from e

        settings.settings_path = path
        return cls(path=path, settings=settings)

    @property
    def path(self) -> Path | None:
        return self._path

    @property
    def settings(self) -> Settings:
        return self._settings

    def formatting_options(self) -> FormattingOptions:
        return self._settings.formatting_options()

    def get(self, key: str) -> Any:
        return getattr(self._settings, _field_name(key))

    def set(self, key: str, value: Any) -> Settings:
        """Validate and apply one setting, persist it and notify listeners."""
        field = _field_name(key)
        data = self._settings.model_dump()
        data[field] = _parse_value(value)
        try:
            updated = Settings.model_validate(data)
        except ValidationError as e:
            raise SettingsError(f"Invalid value for {key}: {value!r}") from e
        return self.replace(updated)

    def replace(self, settings: Settings) -> Settings:
        settings.settings_path = self._path
        self._settings = settings
        self.persist()
        for listener in list(self._listeners):
            listener(settings)
        return settings

    def persist(self) -> None:
        if self._path is None:
            return
        save_json(
            self._path,
            self._settings.model_dump(by_alias=True, exclude_none=True, mode="json"),
        )

    def subscribe(self, listener: SettingsListener) -> Callable[[], None]:
        """Register ``listener`` for changes; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe


def _field_name(key: str) -> str:
    if key in SETTING_KEYS:
        return SETTING_KEYS[key]
    if key in SETTING_KEYS.values():
        return key
    known = ", ".join(sorted(SETTING_KEYS))
    raise SettingsError(f"Unknown setting: {key} (known: {known})")


__all__ = ["SETTING_KEYS", "SettingsStore"]
