"""Tests for config loading, env override and dotted-key reads."""

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from weatherdash.config.loader import (
    API_KEY_ENV,
    MASK,
    ConfigError,
    get_config_value,
    load_config,
    masked_config_json,
)
from weatherdash.config.schema import OPENWEATHER_BASE_URL, DashboardConfig


class TestLoadConfig:
    def test_load_from_yaml(self, config_yaml_path: Path):
        config = load_config(config_yaml_path)
        assert config.api.api_key == "test-key"
        assert config.api.base_url == "https://test-owm.example.com"

    def test_defaults(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.delenv(API_KEY_ENV, raising=False)
        path = tmp_path / "empty.yaml"
        path.write_text("")
        config = load_config(path)
        assert config.api.base_url == OPENWEATHER_BASE_URL
        assert config.api.api_key == ""
        assert config.ui.notification_seconds == 6.0

    def test_missing_file_uses_defaults(self, tmp_path: Path):
        config = load_config(tmp_path / "nope.yaml")
        assert config.ui.notification_seconds == 6.0

    def test_env_fills_empty_key(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv(API_KEY_ENV, "from-env")
        path = tmp_path / "c.yaml"
        path.write_text("api:\n  api_key: ''\n")
        assert load_config(path).api.api_key == "from-env"

    def test_yaml_key_wins_over_env(
        self, config_yaml_path: Path, monkeypatch: pytest.MonkeyPatch
    ):
        monkeypatch.setenv(API_KEY_ENV, "from-env")
        assert load_config(config_yaml_path).api.api_key == "test-key"

    def test_fixtures_config(self, fixtures_dir: Path):
        config = load_config(fixtures_dir / "config_default.yaml")
        assert config.api.timeout_seconds == 5

    def test_unknown_key_rejected(self, tmp_path: Path):
        path = tmp_path / "bad.yaml"
        path.write_text("ui:\n  colour: blue\n")
        with pytest.raises(ValidationError):
            load_config(path)

    def test_invalid_value_rejected(self, tmp_path: Path):
        path = tmp_path / "bad.yaml"
        path.write_text("ui:\n  notification_seconds: 0\n")
        with pytest.raises(ValidationError):
            load_config(path)

    def test_non_mapping_rejected(self, tmp_path: Path):
        path = tmp_path / "bad.yaml"
        path.write_text("- just\n- a list\n")
        with pytest.raises(ConfigError):
            load_config(path)


class TestMaskedConfig:
    def test_key_masked(self, default_config: DashboardConfig):
        data = json.loads(masked_config_json(default_config))
        assert data["api"]["api_key"] == MASK
        assert "test-key" not in masked_config_json(default_config)

    def test_empty_key_left_empty(self):
        data = json.loads(masked_config_json(DashboardConfig()))
        assert data["api"]["api_key"] == ""


class TestGetConfigValue:
    def test_dotted_key(self, default_config: DashboardConfig):
        assert get_config_value(default_config, "ui.notification_seconds") == 6.0

    def test_invalid_key(self, default_config: DashboardConfig):
        with pytest.raises(KeyError):
            get_config_value(default_config, "nonexistent.key")
