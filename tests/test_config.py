"""Tests for settings."""

import json

import pytest
from pydantic import ValidationError

from casefile.config import Settings, config_path, expand_path, load_settings, save_settings


class TestSettings:
    def test_defaults(self):
        settings = Settings()
        assert settings.top_files == 10
        assert settings.max_workers == 4
        assert settings.follow_symlinks is True

    def test_rejects_zero_capacity(self):
        with pytest.raises(ValidationError):
            Settings(top_files=0)

    def test_rejects_zero_workers(self):
        with pytest.raises(ValidationError):
            Settings(max_workers=0)


class TestConfigPath:
    def test_env_override(self, isolated_config):
        assert config_path() == isolated_config

    def test_default_location(self, monkeypatch):
        monkeypatch.delenv("CASEFILE_CONFIG")
        assert config_path() == expand_path("~/.casefile/config.json")


class TestLoadSettings:
    def test_missing_file(self, tmp_path):
        assert load_settings(tmp_path / "nope.json") == Settings()

    def test_reads_values(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"top_files": 25, "follow_symlinks": False}))

        settings = load_settings(path)
        assert settings.top_files == 25
        assert settings.follow_symlinks is False
        assert settings.max_workers == 4

    def test_corrupt_file(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{not json")
        assert load_settings(path) == Settings()

    def test_invalid_values(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"top_files": -1}))
        assert load_settings(path) == Settings()


class TestSaveSettings:
    def test_round_trip(self, tmp_path):
        path = tmp_path / "nested" / "config.json"
        assert save_settings(Settings(max_workers=8), path) is True
        assert load_settings(path).max_workers == 8

    def test_unwritable(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("x")
        assert save_settings(Settings(), blocker / "config.json") is False
