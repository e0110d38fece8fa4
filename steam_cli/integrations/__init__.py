from __future__ import annotations

__all__: list[str] = ["SteamStoreClient", "SteamWebAPI"]

from steam_cli.integrations.steam_store import SteamStoreClient
from steam_cli.integrations.steam_web_api import SteamWebAPI
