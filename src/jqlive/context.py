"""jqlive context for passing state between CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import click

from .home import HomePaths, resolve_home
from .process_utils import find_jq_binary
from .settings import SettingsStore


class JqliveContext:
    def __init__(self):
        self.paths: Optional[HomePaths] = None
        self._settings: Optional[SettingsStore] = None

    @property
    def home(self) -> Path:
        return self._paths().home_dir

    def _paths(self) -> HomePaths:
        if self.paths is None:
            self.paths = resolve_home(None)
        return self.paths

    @property
    def settings(self) -> SettingsStore:
        """Settings store for the resolved home, loaded on first use."""
        if self._settings is None:
            self._settings = SettingsStore.load(self._paths().settings_path)
        return self._settings

    def jq_command(self) -> Optional[List[str]]:
        """argv prefix used to run jq, or None when jq cannot be found."""
        found = find_jq_binary(self.settings.settings.jq_path, self._paths().bin_dir)
        return [found] if found else None


pass_context = click.make_pass_decorator(JqliveContext, ensure=True)

__all__ = ["JqliveContext", "pass_context"]
