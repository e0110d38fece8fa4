"""
Steam Store integration for search and app details.

Fetches the store search results page (HTML, parsed by search_parser)
and the raw appdetails JSON (normalized by appdetails).
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

import requests

from steam_cli.integrations.models import SearchItem, TagFacet
from steam_cli.integrations.search_parser import parse_search_html
from steam_cli.integrations.steam_http import SteamHTTPClient

logger = logging.getLogger("steamcli.steam_store")


__all__ = ["SteamStoreClient"]


class SteamStoreClient(SteamHTTPClient):
    """
    Fetches search results and app details from the Steam Store.
    """

    SEARCH_URL = "https://store.steampowered.com/search/results"
    APPDETAILS_URL = "https://store.steampowered.com/api/appdetails"

    def __init__(
        self,
        language: str = "english",
        timeout: float = 30,
        session: requests.Session | None = None,
    ) -> None:
        """
        Initializes the SteamStoreClient.

        Args:
            language (str): Steam language name for results ('english', 'german', ...).
            timeout (float): Request timeout in seconds.
            session: Optional pre-configured requests session.
        """
        super().__init__(timeout=timeout, session=session)
        self.language = language

    def search_store(
        self,
        tags: Sequence[int],
        term: str | None,
        limit: int,
        offset: int,
        with_facets: bool = False,
    ) -> tuple[list[SearchItem], list[TagFacet] | None]:
        """
        Searches the store for apps carrying all given tags.

        Args:
            tags: Tag ids to filter by.
            term: Optional free-text search term.
            limit: Number of results requested from the store.
            offset: Result offset.
            with_facets: Also extract the related-tag facet table.

        Returns:
            Tuple of (result rows, facets or None).
        """
        params: dict[str, str] = {
            "force_infinite": "1",
            "tags": ",".join(str(tag) for tag in tags),
            "supportedlang": self.language,
            "ndl": "1",
            "start": str(offset),
            "count": str(limit),
        }
        if term:
            params["term"] = term

        response = self._get(self.SEARCH_URL, params)
        items, facets = parse_search_html(response.text, tags, with_facets)
        logger.info("Store search returned %d rows (tags=%s, offset=%d)", len(items), params["tags"], offset)
        return items, facets

    def fetch_appdetails_json(self, appid: int) -> str:
        """
        Fetches the raw appdetails response for one app.

        Args:
            appid: Steam app ID.

        Returns:
            The response body, unparsed.
        """
        response = self._get(self.APPDETAILS_URL, {"appids": str(appid), "l": self.language})
        return response.text
