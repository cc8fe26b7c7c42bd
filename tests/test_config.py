"""Tests for config loading and validation."""

import json
from pathlib import Path

import pytest

from cymanifest.config import (
    CONFIG_ENV_VAR,
    DEFAULT_BASE_URL,
    DEFAULT_CONFIG_PATH,
    ConfigError,
    ProgramConfig,
    config_path,
    create_config_if_missing,
    load_config,
    parse_config,
)


class TestProgramConfig:
    def test_defaults(self):
        cfg = ProgramConfig()
        assert cfg.base_url == DEFAULT_BASE_URL
        assert cfg.create_htaccess is False
        assert cfg.output_dir is None


class TestParseConfig:
    def test_strips_trailing_slashes(self):
        cfg = parse_config({"baseUrl": "https://cdn.example.com/media///"})
        assert cfg.base_url == "https://cdn.example.com/media"

    def test_full(self):
        cfg = parse_config(
            {"baseUrl": "https://a.example", "createHtAccess": True, "outputDir": "/tmp/out"}
        )
        assert cfg.create_htaccess is True
        assert cfg.output_dir == Path("/tmp/out")

    def test_http_rejected(self):
        with pytest.raises(ConfigError, match="https://"):
            parse_config({"baseUrl": "http://cdn.example.com"})

    def test_missing_base_url(self):
        with pytest.raises(ConfigError, match="baseUrl"):
            parse_config({"createHtAccess": True})

    def test_not_an_object(self):
        with pytest.raises(ConfigError, match="JSON object"):
            parse_config(["https://cdn.example.com"])


class TestLoadConfig:
    def test_load_sample(self, sample_config_path: Path):
        cfg = load_config(sample_config_path)
        assert cfg.base_url == "https://cdn.example.com/media"
        assert cfg.create_htaccess is True

    def test_invalid_json(self, tmp_path: Path):
        bad = tmp_path / "config.json"
        bad.write_text("{not json")
        with pytest.raises(ConfigError, match="deserializing"):
            load_config(bad)

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="Unable to read"):
            load_config(tmp_path / "nope.json")


class TestCreateConfigIfMissing:
    def test_creates_defaults(self, tmp_path: Path):
        path = tmp_path / "sub" / "config.json"
        assert create_config_if_missing(path) is True
        data = json.loads(path.read_text())
        assert data == {"baseUrl": DEFAULT_BASE_URL, "createHtAccess": False}
        assert load_config(path).base_url == DEFAULT_BASE_URL

    def test_existing_untouched(self, tmp_path: Path):
        path = tmp_path / "config.json"
        path.write_text('{"baseUrl": "https://mine.example"}')
        assert create_config_if_missing(path) is False
        assert "mine.example" in path.read_text()


class TestConfigPath:
    def test_explicit_wins(self, monkeypatch, tmp_path: Path):
        monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "env.json"))
        assert config_path(tmp_path / "x.json") == tmp_path / "x.json"

    def test_env(self, monkeypatch, tmp_path: Path):
        monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "env.json"))
        assert config_path() == tmp_path / "env.json"

    def test_default(self, monkeypatch):
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        assert config_path() == DEFAULT_CONFIG_PATH
