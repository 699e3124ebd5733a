"""Settings file I/O for invisible-squiggles.

Reads and writes the editor's user settings.json. The file is a flat JSON
object; this tool only ever touches the color-override map and reads its
own preference keys, every other top-level setting is written back as-is.

Import as: import invisible_squiggles.io.settings
"""

import json
import os
import sys
import tempfile
from pathlib import Path


class SettingsError(Exception):
    """The settings file exists but does not hold a JSON object."""


def get_config_path() -> Path:
    """Return path to the editor's user settings file.

    INVISIBLE_SQUIGGLES_SETTINGS wins; otherwise the per-platform location
    of the editor's user settings.
    """
    explicit = os.environ.get("INVISIBLE_SQUIGGLES_SETTINGS")
    if explicit:
        return Path(explicit).expanduser()
    if sys.platform == "darwin":
        base = Path.home() / "Library" / "Application Support"
    elif sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
    else:
        base = Path(os.environ.get("XDG_CONFIG_HOME", os.path.expanduser("~/.config")))
    return base / "Code" / "User" / "settings.json"


def load_settings(path: Path | None = None) -> dict:
    """Load settings from JSON file.

    A missing or empty file is an empty dict. A file that exists but is not
    a JSON object raises SettingsError so it is never clobbered by a write.
    """
    path = path or get_config_path()
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    if not text.strip():
        return {}
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise SettingsError(f"{path}: invalid JSON ({e})") from e
    if not isinstance(data, dict):
        raise SettingsError(f"{path}: expected a JSON object, got {type(data).__name__}")
    return data


def save_settings(data: dict, path: Path | None = None) -> None:
    """Atomic write of settings dict to JSON file.

    Creates parent directories if needed. Writes to temp file then renames
    to avoid partial writes on crash.
    """
    path = path or get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=4)
            f.write("\n")
        os.replace(tmp_path, path)
    except Exception:
        try:
            os.unlink(tmp_path)
        except OSError:
            pass
        raise
