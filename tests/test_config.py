"""Tests for configuration lookup."""

import json

from patchkit import config


def test_defaults():
    assert config.get_registry_url() == "https://hex.pm"
    assert config.get_current_env() == "dev"
    assert config.get_fetch_command() is None


def test_update_config_persists(tmp_path):
    config.update_config({"fetch_command": "pip install -e .", "registry_url": "http://localhost:4000/"})

    stored = json.loads((tmp_path / "config" / "config.json").read_text())
    assert stored["fetch_command"] == "pip install -e ."
    assert config.get_fetch_command() == "pip install -e ."
    assert config.get_registry_url() == "http://localhost:4000"


def test_environment_overrides(monkeypatch):
    config.update_config({"environment": "prod"})
    assert config.get_current_env() == "prod"

    monkeypatch.setenv("PATCHKIT_ENV", "test")
    monkeypatch.setenv("PATCHKIT_REGISTRY_URL", "https://mirror.example.com/")
    assert config.get_current_env() == "test"
    assert config.get_registry_url() == "https://mirror.example.com"
