#!/usr/bin/env python
"""Tests for config module."""

from pathlib import Path

import pytest

from skillstream.config import Settings


class TestSettings:
    """Test the Settings class."""

    def test_defaults(self):
        """Defaults point at SkillShare and the two mirrors."""
        settings = Settings()
        assert settings.main_url == "https://www.skillshare.com"
        assert settings.api_url == "https://www.skillshare.com/api/graphql"
        assert settings.bypass_url == "https://skillshare.techtanic.xyz/id"
        assert settings.bypass_fallback_url == "https://skillshare-api.heckernohecking.repl.co"
        assert settings.timeout == 30.0
        assert settings.referer == "https://www.skillshare.com/"

    def test_default_cursor_state_path(self):
        """The cursor state lives in the user cache directory."""
        path = Settings().cursor_state_path
        assert path.name == "skillshare_cursors.json"
        assert "skillstream" in str(path)

    def test_from_yaml(self, tmp_path):
        """YAML values override defaults and are coerced."""
        config = tmp_path / "settings.yaml"
        config.write_text(
            "bypass_url: https://mirror.example/id/\n"
            "timeout: 5\n"
            f"cursor_state_path: {tmp_path / 'c.json'}\n"
        )
        settings = Settings.from_yaml(config)
        assert settings.bypass_url == "https://mirror.example/id"
        assert settings.timeout == 5.0
        assert settings.cursor_state_path == tmp_path / "c.json"
        assert settings.api_url == Settings().api_url

    def test_empty_yaml(self, tmp_path):
        """An empty file keeps every default."""
        config = tmp_path / "settings.yaml"
        config.write_text("")
        assert Settings.from_yaml(config).timeout == 30.0

    def test_unknown_key(self, tmp_path):
        """Misspelt settings are rejected."""
        config = tmp_path / "settings.yaml"
        config.write_text("timout: 5\n")
        with pytest.raises(ValueError, match="timout"):
            Settings.from_yaml(config)

    def test_not_a_mapping(self, tmp_path):
        """The file must contain a mapping."""
        config = tmp_path / "settings.yaml"
        config.write_text("- a\n- b\n")
        with pytest.raises(ValueError):
            Settings.from_yaml(config)

    def test_bad_timeout(self):
        """A non-numeric timeout is rejected."""
        with pytest.raises(ValueError, match="timeout"):
            Settings().with_env({"SKILLSTREAM_TIMEOUT": "soon"})

    def test_env_overrides(self):
        """Environment variables override the current settings."""
        settings = Settings(timeout=5).with_env(
            {
                "SKILLSTREAM_API_URL": "https://api.example/graphql",
                "SKILLSTREAM_CURSOR_STATE": "/tmp/cursors.json",
                "UNRELATED": "x",
            }
        )
        assert settings.api_url == "https://api.example/graphql"
        assert settings.cursor_state_path == Path("/tmp/cursors.json")
        assert settings.timeout == 5

    def test_empty_env_values_ignored(self):
        """Blank variables do not override anything."""
        settings = Settings().with_env({"SKILLSTREAM_MAIN_URL": ""})
        assert settings.main_url == "https://www.skillshare.com"

    def test_load_env_beats_yaml(self, tmp_path, monkeypatch):
        """The environment takes precedence over the YAML file."""
        config = tmp_path / "settings.yaml"
        config.write_text("timeout: 5\nmain_url: https://yaml.example\n")
        monkeypatch.setenv("SKILLSTREAM_TIMEOUT", "9")
        settings = Settings.load(config)
        assert settings.timeout == 9.0
        assert settings.main_url == "https://yaml.example"
