"""
Tests for sfdisk_sort.config.settings module.

This test suite covers:
- Default settings initialization
- Loading and merging a JSON settings file
- Error handling for corrupted settings files
- Type conversion helpers (get_bool)
"""

import json

from sfdisk_sort.config import settings


class TestLoadSettings:
    """Tests for load_settings() function."""

    def test_load_defaults_when_no_file(self, tmp_path, monkeypatch):
        """Test that default settings are loaded when file doesn't exist."""
        monkeypatch.setattr(
            "sfdisk_sort.config.settings.SETTINGS_PATH", tmp_path / "missing" / "settings.json"
        )
        monkeypatch.setattr(settings.settings_store, "values", {})

        settings.load_settings()

        assert settings.settings_store.values == settings.DEFAULT_SETTINGS

    def test_load_merges_with_defaults(self, tmp_path, monkeypatch):
        """Test that loaded settings override defaults and keep the rest."""
        settings_file = tmp_path / "settings.json"
        settings_file.write_text(json.dumps({"footer_enabled": False}))
        monkeypatch.setattr("sfdisk_sort.config.settings.SETTINGS_PATH", settings_file)
        monkeypatch.setattr(settings.settings_store, "values", {})

        settings.load_settings()

        assert settings.settings_store.values["footer_enabled"] is False
        assert settings.settings_store.values["debug"] is False

    def test_load_corrupted_file(self, tmp_path, monkeypatch):
        """Test that a corrupted file falls back to defaults."""
        settings_file = tmp_path / "settings.json"
        settings_file.write_text("{not json")
        monkeypatch.setattr("sfdisk_sort.config.settings.SETTINGS_PATH", settings_file)
        monkeypatch.setattr(settings.settings_store, "values", {})

        settings.load_settings()

        assert settings.settings_store.values == settings.DEFAULT_SETTINGS

    def test_load_ignores_non_dict(self, tmp_path, monkeypatch):
        """Test that a JSON list is ignored."""
        settings_file = tmp_path / "settings.json"
        settings_file.write_text("[1, 2]")
        monkeypatch.setattr("sfdisk_sort.config.settings.SETTINGS_PATH", settings_file)
        monkeypatch.setattr(settings.settings_store, "values", {})

        settings.load_settings()

        assert settings.settings_store.values == settings.DEFAULT_SETTINGS


class TestGetters:
    def test_get_setting_default(self, default_settings):
        assert settings.get_setting("nonexistent", "fallback") == "fallback"
        assert settings.get_setting("log_dir") is None

    def test_get_bool(self, default_settings):
        """Test truthy values are converted to bool."""
        default_settings["debug"] = 1
        assert settings.get_bool("debug") is True
        assert settings.get_bool("footer_enabled") is True
        assert settings.get_bool("nonexistent") is False
