#!/usr/bin/env python3
"""
Tests for configuration management module.
"""

import json
import pytest
from pathlib import Path
from unittest.mock import patch

from keepc.config import DEFAULTS, Config, ConfigManager, get_config, get_config_manager


# ============================================================================
# Config Model Tests
# ============================================================================

class TestConfig:
    """Tests for Config model."""

    def test_create_empty_config(self):
        """Test creating config with all defaults."""
        cfg = Config()
        assert cfg.store_path is None
        assert cfg.overwrite is None
        assert cfg.match_mode is None
        assert cfg.shell is None
        assert cfg.editor is None
        assert cfg.echo_command is None
        assert cfg.log_file is None

    def test_create_config_with_values(self):
        """Test creating config with specific values."""
        cfg = Config(store_path="/tmp/cmds.json", overwrite=True, match_mode="phrase")
        assert cfg.store_path == "/tmp/cmds.json"
        assert cfg.overwrite is True
        assert cfg.match_mode == "phrase"

    def test_get_with_value(self):
        """Test get method when value exists."""
        cfg = Config(overwrite=True)
        assert cfg.get("overwrite") is True

    def test_get_with_none(self):
        """Test get method when value is None falls back to DEFAULTS."""
        cfg = Config()
        assert cfg.get("match_mode") == DEFAULTS["match_mode"]
        assert cfg.get("echo_command") is True
        # Explicit default is ignored when DEFAULTS has the key
        assert cfg.get("overwrite", True) is False

    def test_get_unknown_key(self):
        """Test get with unknown key returns default."""
        cfg = Config()
        assert cfg.get("unknown_key") is None
        assert cfg.get("unknown_key", "default") == "default"

    def test_unknown_fields_ignored(self):
        """Test that keys like _comment do not fail validation."""
        cfg = Config.model_validate({"_comment": "keepc settings", "shell": "/bin/bash"})
        assert cfg.shell == "/bin/bash"

    def test_invalid_match_mode_rejected(self):
        """Test that match_mode only accepts known modes."""
        with pytest.raises(ValueError):
            Config(match_mode="fuzzy")


# ============================================================================
# ConfigManager Tests
# ============================================================================

class TestConfigManager:
    """Tests for ConfigManager."""

    @pytest.fixture
    def temp_config_dir(self, tmp_path):
        """Create temporary config directory."""
        config_dir = tmp_path / "cfg"
        config_dir.mkdir()
        return config_dir

    def test_load_nonexistent_config(self, temp_config_dir):
        """Test loading config when file doesn't exist does not create it."""
        config_file = temp_config_dir / "config.json"
        with patch.object(ConfigManager, 'CONFIG_DIR', temp_config_dir):
            with patch.object(ConfigManager, 'CONFIG_FILE', config_file):
                mgr = ConfigManager()
                cfg = mgr.load()
                assert cfg.store_path is None
                assert not config_file.exists()

    def test_load_values(self, temp_config_dir):
        """Test loading values written by the user."""
        config_file = temp_config_dir / "config.json"
        config_file.write_text(json.dumps({"overwrite": True, "editor": "nano"}))

        with patch.object(ConfigManager, 'CONFIG_DIR', temp_config_dir):
            with patch.object(ConfigManager, 'CONFIG_FILE', config_file):
                mgr = ConfigManager()
                assert mgr.get("overwrite") is True
                assert mgr.get("editor") == "nano"
                assert mgr.get("match_mode") == "tokens"

    def test_config_is_cached(self, temp_config_dir):
        """Test that the config property loads once until reset()."""
        config_file = temp_config_dir / "config.json"
        config_file.write_text(json.dumps({"shell": "/bin/bash"}))

        with patch.object(ConfigManager, 'CONFIG_DIR', temp_config_dir):
            with patch.object(ConfigManager, 'CONFIG_FILE', config_file):
                mgr = ConfigManager()
                assert mgr.config.shell == "/bin/bash"

                config_file.write_text(json.dumps({"shell": "/bin/zsh"}))
                assert mgr.config.shell == "/bin/bash"

                mgr.reset()
                assert mgr.config.shell == "/bin/zsh"

    def test_load_invalid_json(self, temp_config_dir):
        """Test loading invalid JSON returns defaults."""
        config_file = temp_config_dir / "config.json"
        config_file.write_text("not valid json")

        with patch.object(ConfigManager, 'CONFIG_DIR', temp_config_dir):
            with patch.object(ConfigManager, 'CONFIG_FILE', config_file):
                mgr = ConfigManager()
                cfg = mgr.load()
                # Should return defaults, not crash
                assert cfg.overwrite is None

    def test_load_invalid_schema(self, temp_config_dir):
        """Test loading invalid schema returns defaults."""
        config_file = temp_config_dir / "config.json"
        config_file.write_text('{"overwrite": "not a bool"}')

        with patch.object(ConfigManager, 'CONFIG_DIR', temp_config_dir):
            with patch.object(ConfigManager, 'CONFIG_FILE', config_file):
                mgr = ConfigManager()
                cfg = mgr.load()
                assert cfg.overwrite is None

    def test_load_unreadable_file(self, temp_config_dir):
        """Test that a config path that cannot be read returns defaults."""
        config_file = temp_config_dir / "config.json"
        config_file.mkdir()

        with patch.object(ConfigManager, 'CONFIG_DIR', temp_config_dir):
            with patch.object(ConfigManager, 'CONFIG_FILE', config_file):
                mgr = ConfigManager()
                cfg = mgr.load()
                assert cfg.overwrite is None
                assert cfg.get("match_mode") == "tokens"

    def test_load_permission_error(self, temp_config_dir):
        """Test that a read error is reported as a warning, not raised."""
        config_file = temp_config_dir / "config.json"
        config_file.write_text("{}")

        with patch.object(ConfigManager, 'CONFIG_DIR', temp_config_dir):
            with patch.object(ConfigManager, 'CONFIG_FILE', config_file):
                with patch.object(Path, 'read_text', side_effect=PermissionError("denied")):
                    cfg = ConfigManager().load()
                assert cfg.store_path is None


# ============================================================================
# Singleton Tests
# ============================================================================

class TestSingleton:
    """Tests for singleton functions."""

    def test_get_config_manager_returns_same_instance(self):
        """Test that get_config_manager returns singleton."""
        mgr1 = get_config_manager()
        mgr2 = get_config_manager()
        assert mgr1 is mgr2

    def test_get_config_returns_config(self):
        """Test that get_config returns Config instance."""
        cfg = get_config()
        assert isinstance(cfg, Config)


# ============================================================================
# Test Runner
# ============================================================================

if __name__ == "__main__":
    pytest.main([__file__, "-v", "--tb=short"])
