# steam_cli/services/owned_games_service.py

"""Owned-games listing for a Steam account."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from steam_cli.core.errors import InvalidArgumentError, UnauthorizedError
from steam_cli.integrations.models import OwnedGame
from steam_cli.utils.output import Pagination, build_pagination, clamp_limit

if TYPE_CHECKING:
    from steam_cli.integrations.steam_web_api import SteamWebAPI

logger = logging.getLogger("steamcli.owned_games_service")

__all__ = ["OwnedGamesPage", "OwnedGamesService"]


@dataclass(frozen=True)
class OwnedGamesPage:
    steamid: str
    items: list[OwnedGame]
    pagination: Pagination

    def to_dict(self) -> dict[str, Any]:
        return {"steamid": self.steamid, "items": [game.to_dict() for game in self.items]}


class OwnedGamesService:
    """Lists owned games sorted by total playtime.

    Args:
        api_key: Steam Web API key, or None if not configured.
        client_factory: Builds a SteamWebAPI from the key.
    """

    def __init__(self, api_key: str | None, client_factory: Callable[[str], SteamWebAPI]) -> None:
        self._api_key = api_key
        self._client_factory = client_factory

    def list_owned(self, steamid: str | None, vanity: str | None, limit: int, offset: int) -> OwnedGamesPage:
        """Lists a page of owned games, most played first.

        Exactly one of steamid and vanity must be given.

        Raises:
            UnauthorizedError: If no API key is configured.
            InvalidArgumentError: If both or neither account selector is given.
        """
        if not self._api_key:
            raise UnauthorizedError("STEAM_API_KEY is required for user owned")
        if steamid and vanity:
            raise InvalidArgumentError("provide only one of --steamid or --vanity")
        if not steamid and not vanity:
            raise InvalidArgumentError("provide --steamid or --vanity")

        client = self._client_factory(self._api_key)
        if not steamid:
            steamid = client.resolve_vanity(vanity)
            logger.info("Resolved vanity %r to %s", vanity, steamid)

        games = sorted(client.get_owned_games(steamid), key=lambda g: g.playtime_forever_min, reverse=True)

        limit = clamp_limit(limit)
        offset = min(max(offset, 0), len(games))
        page = games[offset : offset + limit]
        return OwnedGamesPage(
            steamid=steamid,
            items=page,
            pagination=build_pagination(limit, offset, len(page), len(games)),
        )
