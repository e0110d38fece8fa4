"""
Configuration - data directory, API key and request settings.
Reads STEAM_API_KEY from the environment (or a .env file) and optional
overrides from settings.json inside the data directory.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from steam_cli.utils.json_utils import load_json

logger = logging.getLogger("steamcli.config")


__all__ = ["Config", "config"]


def _default_data_dir() -> Path:
    """Resolve the data directory from STEAM_CLI_HOME or the home directory."""
    override = os.getenv("STEAM_CLI_HOME", "").strip()
    if override:
        return Path(override).expanduser()
    return Path.home() / ".steam-cli"


@dataclass
class Config:
    """
    Central configuration handling for the application.
    Manages paths, API keys and request settings.
    """

    DATA_DIR: Path | None = None
    DB_FILE: Path | None = None
    CACHE_DIR: Path | None = None
    SETTINGS_FILE: Path | None = None

    # API KEYS
    STEAM_API_KEY: str | None = None

    STORE_LANGUAGE: str = "english"
    REQUEST_TIMEOUT: int = 30
    DEFAULT_TTL_SEC: int = 86_400

    def __post_init__(self):
        """Resolve paths and load settings after instantiation."""
        if self.DATA_DIR is None:
            self.DATA_DIR = _default_data_dir()
        if self.DB_FILE is None:
            self.DB_FILE = self.DATA_DIR / "steam.db"
        if self.CACHE_DIR is None:
            self.CACHE_DIR = self.DATA_DIR / "cache"
        if self.SETTINGS_FILE is None:
            self.SETTINGS_FILE = self.DATA_DIR / "settings.json"

        load_dotenv()
        env_key = os.getenv("STEAM_API_KEY")
        if env_key:
            self.STEAM_API_KEY = env_key

        self._load_settings()

    def _load_settings(self) -> None:
        """Load settings from JSON file; environment values take precedence."""
        data = load_json(self.SETTINGS_FILE)
        if not isinstance(data, dict):
            logger.warning("Ignoring %s: expected a JSON object", self.SETTINGS_FILE)
            return

        if not self.STEAM_API_KEY:
            self.STEAM_API_KEY = data.get("steam_api_key") or None
        self.STORE_LANGUAGE = data.get("store_language", self.STORE_LANGUAGE)
        self.REQUEST_TIMEOUT = data.get("request_timeout", self.REQUEST_TIMEOUT)
        self.DEFAULT_TTL_SEC = data.get("default_ttl_sec", self.DEFAULT_TTL_SEC)

    @property
    def log_file(self) -> Path:
        """Location of the optional debug log file."""
        return self.DATA_DIR / "logs" / "steam-cli.log"


config = Config()
