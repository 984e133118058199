"""Shared fixtures for casefile tests."""

import os

import pytest


@pytest.fixture(autouse=True)
def isolated_config(tmp_path_factory, monkeypatch):
    """Point the config file at an empty temp location."""
    config_file = tmp_path_factory.mktemp("config") / "config.json"
    monkeypatch.setenv("CASEFILE_CONFIG", str(config_file))
    return config_file


@pytest.fixture
def undecodable_file(tmp_path):
    """A file whose name is not valid UTF-8 (skipped where the OS refuses it)."""
    raw = os.path.join(os.fsencode(tmp_path), b"bad\xff.txt")
    try:
        with open(raw, "wb") as f:
            f.write(b"data")
    except OSError:
        pytest.skip("filesystem rejects non-UTF-8 names")
    return raw
