"""Configuration store port.

The toggle engine never touches the settings file directly; it reads a
snapshot and writes a whole new override map through a ConfigStore. The
file-backed store is the production implementation, MemoryConfigStore is
the deterministic fake used by tests.
"""

import copy
import logging
from pathlib import Path
from typing import Protocol

import invisible_squiggles.io.settings

logger = logging.getLogger(__name__)

COLOR_CUSTOMIZATIONS_KEY = "workbench.colorCustomizations"


class ConfigStore(Protocol):
    """Read/write access to the editor settings the engine needs."""

    def read_settings(self) -> dict:
        """Return a fresh snapshot of all settings."""
        ...

    def read(self) -> dict[str, str]:
        """Return a fresh copy of the color-override map."""
        ...

    def write(self, overrides: dict[str, str]) -> None:
        """Replace the color-override map in a single update."""
        ...


def _extract_overrides(settings: dict, origin: str) -> dict[str, str]:
    raw = settings.get(COLOR_CUSTOMIZATIONS_KEY)
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise invisible_squiggles.io.settings.SettingsError(
            f"{origin}: {COLOR_CUSTOMIZATIONS_KEY} must be an object, got {type(raw).__name__}"
        )
    return dict(raw)


class JsonSettingsStore:
    """ConfigStore over the editor's user settings.json."""

    def __init__(self, path: Path | None = None):
        self._path = path

    @property
    def path(self) -> Path:
        return self._path or invisible_squiggles.io.settings.get_config_path()

    def read_settings(self) -> dict:
        return invisible_squiggles.io.settings.load_settings(self.path)

    def read(self) -> dict[str, str]:
        return _extract_overrides(self.read_settings(), str(self.path))

    def write(self, overrides: dict[str, str]) -> None:
        # Re-read so edits made to other settings since our read survive.
        data = self.read_settings()
        data[COLOR_CUSTOMIZATIONS_KEY] = dict(overrides)
        invisible_squiggles.io.settings.save_settings(data, self.path)
        logger.debug("wrote %d color overrides to %s", len(overrides), self.path)


class MemoryConfigStore:
    """In-memory ConfigStore. Records every write."""

    def __init__(self, settings: dict | None = None):
        self.settings: dict = copy.deepcopy(settings) if settings else {}
        self.writes: list[dict[str, str]] = []

    def read_settings(self) -> dict:
        return copy.deepcopy(self.settings)

    def read(self) -> dict[str, str]:
        return _extract_overrides(self.settings, "memory")

    def write(self, overrides: dict[str, str]) -> None:
        self.writes.append(dict(overrides))
        self.settings[COLOR_CUSTOMIZATIONS_KEY] = dict(overrides)
