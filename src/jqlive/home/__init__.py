"""Home layer: path resolution and file I/O (no Pydantic dependencies)."""

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

SETTINGS_FILENAME = "settings.json"


@dataclass(frozen=True)
class HomePaths:
    """Resolved locations for settings and bundled binaries."""

    home_dir: Path
    settings_path: Path
    bin_dir: Path


def _user_global_home() -> Path:
    """Return the user global directory for jqlive (~/.local/jqlive)."""
    return Path.home() / ".local" / "jqlive"


def _find_project_dir(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Walk up from start_dir looking for a .jqlive directory."""
    current = (start_dir or Path.cwd()).resolve()

    while True:
        candidate = current / ".jqlive"
        if candidate.is_dir():
            return candidate

        parent = current.parent
        if parent == current:
            return None
        current = parent


def resolve_home(home_option: Optional[str] = None) -> HomePaths:
    """Resolve the jqlive home directory.

    Resolution order:
    1. --home CLI flag (explicit override)
    2. $JQLIVE_HOME environment variable
    3. Walk up from CWD looking for .jqlive directory (project-local)
    4. ~/.local/jqlive (user global)

    Reads fresh from the environment on every call.
    """
    if home_option:
        home_dir = Path(home_option).expanduser()
    elif os.environ.get("JQLIVE_HOME"):
        home_dir = Path(os.environ["JQLIVE_HOME"]).expanduser()
    else:
        home_dir = _find_project_dir() or _user_global_home()

    return HomePaths(
        home_dir=home_dir,
        settings_path=home_dir / SETTINGS_FILENAME,
        bin_dir=home_dir / "bin",
    )


def load_json(path: Path) -> Dict[str, Any]:
    """Load and parse JSON file."""
    return json.loads(path.read_text(encoding="utf-8"))


def save_json(path: Path, data: Dict[str, Any]) -> None:
    """Save data to JSON file with pretty formatting."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8"
    )


__all__ = ["HomePaths", "SETTINGS_FILENAME", "load_json", "resolve_home", "save_json"]
