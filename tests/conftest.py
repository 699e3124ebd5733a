"""Pytest configuration and shared fixtures for invisible-squiggles tests."""

import json

import pytest

import invisible_squiggles.io.logging_setup
from invisible_squiggles.io.config_store import COLOR_CUSTOMIZATIONS_KEY, MemoryConfigStore


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Keep logs and settings lookups inside the test's tmp dir."""
    monkeypatch.setenv("INVISIBLE_SQUIGGLES_LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.delenv("INVISIBLE_SQUIGGLES_LOG_FILE", raising=False)
    monkeypatch.delenv("INVISIBLE_SQUIGGLES_LOG_LEVEL", raising=False)
    monkeypatch.setenv("INVISIBLE_SQUIGGLES_SETTINGS", str(tmp_path / "settings.json"))
    yield
    invisible_squiggles.io.logging_setup.reset()


@pytest.fixture
def settings_file(tmp_path):
    """Path of the settings file the env points at (not created)."""
    return tmp_path / "settings.json"


@pytest.fixture
def write_settings(settings_file):
    def _write(data: dict):
        settings_file.write_text(json.dumps(data), encoding="utf-8")
        return settings_file

    return _write


@pytest.fixture
def make_store():
    def _make(overrides: dict | None = None, **prefs):
        settings = {f"invisibleSquiggles.{k}": v for k, v in prefs.items()}
        if overrides is not None:
            settings[COLOR_CUSTOMIZATIONS_KEY] = overrides
        return MemoryConfigStore(settings)

    return _make

