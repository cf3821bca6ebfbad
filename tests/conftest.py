"""
Shared fixtures: keep every test away from the real ~/.keepc directory.
"""

import pytest

import keepc.config.config as config_module
from keepc.config import ConfigManager
from keepc.store import CommandStore


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Point config and store defaults at a temporary directory."""
    home = tmp_path / ".keepc"
    monkeypatch.setattr(ConfigManager, "CONFIG_DIR", home)
    monkeypatch.setattr(ConfigManager, "CONFIG_FILE", home / "config.json")
    monkeypatch.setattr(CommandStore, "STORE_DIR", home)
    monkeypatch.setattr(CommandStore, "STORE_FILE", home / "commands.json")
    monkeypatch.setattr(config_module, "_manager", None)
    monkeypatch.delenv("VISUAL", raising=False)
    monkeypatch.delenv("EDITOR", raising=False)
    monkeypatch.setenv("SHELL", "/bin/sh")
    return home
