"""Tests for settings.json I/O and the file-backed config store."""

import json
import os

import pytest

import invisible_squiggles.io.settings
from invisible_squiggles.app.toggle_engine import Outcome, SquiggleToggler
from invisible_squiggles.core.status import StatusIndicator
from invisible_squiggles.io.config_store import COLOR_CUSTOMIZATIONS_KEY, JsonSettingsStore
from invisible_squiggles.io.settings import SettingsError, get_config_path, load_settings, save_settings


class TestConfigPath:
    def test_env_override(self, settings_file):
        assert get_config_path() == settings_file

    def test_linux_default_uses_xdg(self, tmp_path, monkeypatch):
        monkeypatch.delenv("INVISIBLE_SQUIGGLES_SETTINGS")
        monkeypatch.setattr(invisible_squiggles.io.settings.sys, "platform", "linux")
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
        assert get_config_path() == tmp_path / "xdg" / "Code" / "User" / "settings.json"


class TestLoadSave:
    def test_missing_file_is_empty(self, settings_file):
        assert load_settings(settings_file) == {}

    def test_blank_file_is_empty(self, settings_file):
        settings_file.write_text("  \n")
        assert load_settings(settings_file) == {}

    def test_invalid_json_raises(self, settings_file):
        settings_file.write_text("{not json")
        with pytest.raises(SettingsError):
            load_settings(settings_file)

    def test_non_object_raises(self, settings_file):
        settings_file.write_text("[1, 2]")
        with pytest.raises(SettingsError):
            load_settings(settings_file)

    def test_save_creates_parent_and_round_trips(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "settings.json"
        save_settings({"editor.fontSize": 13}, path)
        assert json.loads(path.read_text()) == {"editor.fontSize": 13}
        assert load_settings(path) == {"editor.fontSize": 13}

    def test_save_leaves_no_temp_files(self, settings_file):
        save_settings({"a": 1}, settings_file)
        assert [p.name for p in settings_file.parent.iterdir() if p.suffix == ".tmp"] == []

    def test_failed_save_cleans_temp_and_keeps_old_file(self, settings_file, monkeypatch):
        save_settings({"a": 1}, settings_file)

        def boom(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr(invisible_squiggles.io.settings.os, "replace", boom)
        with pytest.raises(OSError):
            save_settings({"a": 2}, settings_file)
        assert json.loads(settings_file.read_text()) == {"a": 1}
        assert [p for p in os.listdir(settings_file.parent) if p.endswith(".tmp")] == []


class TestJsonSettingsStore:
    def test_read_missing_map(self, write_settings):
        write_settings({"editor.fontSize": 12})
        assert JsonSettingsStore().read() == {}

    def test_read_non_object_map_raises(self, write_settings):
        write_settings({COLOR_CUSTOMIZATIONS_KEY: "red"})
        with pytest.raises(SettingsError):
            JsonSettingsStore().read()

    def test_write_keeps_other_settings(self, write_settings, settings_file):
        write_settings({"editor.fontSize": 12, COLOR_CUSTOMIZATIONS_KEY: {"editor.background": "#000"}})
        store = JsonSettingsStore()
        store.write({"editorError.border": "#00000000"})
        data = json.loads(settings_file.read_text())
        assert data["editor.fontSize"] == 12
        assert data[COLOR_CUSTOMIZATIONS_KEY] == {"editorError.border": "#00000000"}

    def test_explicit_path(self, tmp_path):
        path = tmp_path / "other.json"
        store = JsonSettingsStore(path)
        assert store.path == path
        store.write({})
        assert json.loads(path.read_text()) == {COLOR_CUSTOMIZATIONS_KEY: {}}


class TestToggleAgainstFile:
    def test_round_trip_on_disk(self, write_settings, settings_file):
        original = {
            "editor.fontSize": 12,
            "invisibleSquiggles.hideInfo": False,
            COLOR_CUSTOMIZATIONS_KEY: {"editorError.border": "#ff0000", "editorInfo.border": "#0000ff"},
        }
        write_settings(original)
        toggler = SquiggleToggler(JsonSettingsStore(), StatusIndicator())

        assert toggler.toggle().outcome is Outcome.TOGGLED
        hidden = json.loads(settings_file.read_text())[COLOR_CUSTOMIZATIONS_KEY]
        assert hidden["editorError.border"] == "#00000000"
        assert hidden["editorInfo.border"] == "#0000ff"

        assert toggler.toggle().outcome is Outcome.TOGGLED
        assert json.loads(settings_file.read_text()) == original

    def test_corrupt_file_not_overwritten(self, settings_file):
        settings_file.write_text("// user comment\n{}")
        toggler = SquiggleToggler(JsonSettingsStore(), StatusIndicator())
        assert toggler.toggle().outcome is Outcome.FAILED
        assert settings_file.read_text() == "// user comment\n{}"
