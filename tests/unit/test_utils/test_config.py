"""Tests for the Config dataclass."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from steam_cli.config import Config


@pytest.fixture
def no_dotenv():
    """Keep a developer's .env file out of the tests."""
    with patch("steam_cli.config.load_dotenv"):
        yield


@pytest.mark.usefixtures("no_dotenv")
class TestConfig:
    """Tests for path resolution and settings loading."""

    def test_paths_follow_steam_cli_home(self, monkeypatch, tmp_path) -> None:
        monkeypatch.setenv("STEAM_CLI_HOME", str(tmp_path / "home"))

        cfg = Config()

        assert cfg.DATA_DIR == tmp_path / "home"
        assert cfg.DB_FILE == tmp_path / "home" / "steam.db"
        assert cfg.CACHE_DIR == tmp_path / "home" / "cache"
        assert cfg.log_file == tmp_path / "home" / "logs" / "steam-cli.log"

    def test_default_home(self, monkeypatch) -> None:
        monkeypatch.delenv("STEAM_CLI_HOME", raising=False)
        assert Config().DATA_DIR == Path.home() / ".steam-cli"

    def test_defaults(self, monkeypatch, tmp_path) -> None:
        monkeypatch.delenv("STEAM_API_KEY", raising=False)

        cfg = Config(DATA_DIR=tmp_path)

        assert cfg.STEAM_API_KEY is None
        assert cfg.STORE_LANGUAGE == "english"
        assert cfg.REQUEST_TIMEOUT == 30
        assert cfg.DEFAULT_TTL_SEC == 86_400

    def test_api_key_from_environment(self, monkeypatch, tmp_path) -> None:
        monkeypatch.setenv("STEAM_API_KEY", "env-key")
        assert Config(DATA_DIR=tmp_path).STEAM_API_KEY == "env-key"

    def test_settings_file_overrides(self, monkeypatch, tmp_path) -> None:
        monkeypatch.delenv("STEAM_API_KEY", raising=False)
        (tmp_path / "settings.json").write_text(
            json.dumps(
                {
                    "steam_api_key": "file-key",
                    "store_language": "german",
                    "request_timeout": 5,
                    "default_ttl_sec": 60,
                }
            ),
            encoding="utf-8",
        )

        cfg = Config(DATA_DIR=tmp_path)

        assert cfg.STEAM_API_KEY == "file-key"
        assert cfg.STORE_LANGUAGE == "german"
        assert cfg.REQUEST_TIMEOUT == 5
        assert cfg.DEFAULT_TTL_SEC == 60

    def test_environment_key_wins_over_settings(self, monkeypatch, tmp_path) -> None:
        monkeypatch.setenv("STEAM_API_KEY", "env-key")
        (tmp_path / "settings.json").write_text(json.dumps({"steam_api_key": "file-key"}), encoding="utf-8")

        assert Config(DATA_DIR=tmp_path).STEAM_API_KEY == "env-key"

    def test_invalid_settings_file_ignored(self, monkeypatch, tmp_path) -> None:
        monkeypatch.delenv("STEAM_API_KEY", raising=False)
        (tmp_path / "settings.json").write_text("[1, 2]", encoding="utf-8")

        cfg = Config(DATA_DIR=tmp_path)

        assert cfg.STORE_LANGUAGE == "english"
