"""Steam Web API client for user lookups.

Resolves vanity profile names to SteamID64 and lists owned games via
ISteamUser/ResolveVanityURL and IPlayerService/GetOwnedGames. Both
endpoints require a Web API key.
"""

from __future__ import annotations

import logging
from typing import Any

import requests

from steam_cli.core.errors import NotFoundError, UpstreamSchemaError
from steam_cli.integrations.models import OwnedGame
from steam_cli.integrations.steam_http import SteamHTTPClient

logger = logging.getLogger("steamcli.steam_web_api")

__all__ = ["SteamWebAPI"]

_RESOLVE_VANITY_URL = "https://api.steampowered.com/ISteamUser/ResolveVanityURL/v1/"
_OWNED_GAMES_URL = "https://api.steampowered.com/IPlayerService/GetOwnedGames/v1/"


def _as_int(value: Any) -> int:
    """Returns value if it is a JSON integer, else 0."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return 0


class SteamWebAPI(SteamHTTPClient):
    """Steam Web API client for vanity resolution and owned games.

    Attributes:
        api_key: Steam Web API key for authentication.
    """

    def __init__(self, api_key: str, timeout: float = 30, session: requests.Session | None = None) -> None:
        """Initializes the SteamWebAPI client.

        Args:
            api_key: Steam Web API key. Must not be empty.
            timeout: Request timeout in seconds.
            session: Optional pre-configured requests session.

        Raises:
            ValueError: If api_key is empty or whitespace-only.
        """
        if not api_key or not api_key.strip():
            raise ValueError("Steam API key must not be empty")
        super().__init__(timeout=timeout, session=session)
        self.api_key: str = api_key.strip()

    def resolve_vanity(self, vanity: str) -> str:
        """Resolves a vanity profile name to a SteamID64.

        Args:
            vanity: The custom URL name of the profile.

        Returns:
            The SteamID64 as a string.

        Raises:
            NotFoundError: If Steam reports no match.
            UpstreamSchemaError: If the response lacks the expected fields.
        """
        data = self._get_json(_RESOLVE_VANITY_URL, {"key": self.api_key, "vanityurl": vanity})
        response = data.get("response") if isinstance(data, dict) else None
        if not isinstance(response, dict):
            raise UpstreamSchemaError("resolve vanity response missing")

        if response.get("success") != 1:
            raise NotFoundError(f"vanity '{vanity}' not found")

        steamid = response.get("steamid")
        if not isinstance(steamid, str):
            raise UpstreamSchemaError("steamid missing in vanity response")
        return steamid

    def get_owned_games(self, steamid: str) -> list[OwnedGame]:
        """Lists the games owned by an account, including free games.

        Args:
            steamid: SteamID64 of the account.

        Returns:
            Owned games in API order. Entries without an app id are skipped.

        Raises:
            UpstreamSchemaError: If the games array is missing (private
                profiles answer with an empty response object).
        """
        data = self._get_json(
            _OWNED_GAMES_URL,
            {
                "key": self.api_key,
                "steamid": steamid,
                "include_appinfo": "1",
                "include_played_free_games": "1",
                "format": "json",
            },
        )
        response = data.get("response") if isinstance(data, dict) else None
        games = response.get("games") if isinstance(response, dict) else None
        if not isinstance(games, list):
            raise UpstreamSchemaError("owned games array missing")

        owned: list[OwnedGame] = []
        for game in games:
            if not isinstance(game, dict):
                continue
            appid = _as_int(game.get("appid"))
            if appid == 0:
                continue
            name = game.get("name")
            owned.append(
                OwnedGame(
                    appid=appid,
                    name=name if isinstance(name, str) else None,
                    playtime_forever_min=_as_int(game.get("playtime_forever")),
                    playtime_2weeks_min=_as_int(game.get("playtime_2weeks")),
                )
            )

        logger.info("Fetched %d owned games for %s", len(owned), steamid)
        return owned
