"""Shared HTTP plumbing for Steam clients.

Provides a base class owning a requests.Session and translating
transport and HTTP status failures into AppError subclasses.
Nothing here retries.
"""

from __future__ import annotations

import logging
from typing import Any

import requests

from steam_cli.core.errors import NetworkError, RateLimitError, UnauthorizedError
from steam_cli.version import __version__

logger = logging.getLogger("steamcli.http")

__all__ = ["SteamHTTPClient"]


class SteamHTTPClient:
    """Base class for Steam HTTP clients.

    Attributes:
        timeout: Request timeout in seconds.
    """

    _HEADERS: dict[str, str] = {
        "Accept-Language": "en-US,en;q=0.9",
        "User-Agent": f"steam-cli/{__version__} (+https://store.steampowered.com)",
    }

    def __init__(self, timeout: float = 30, session: requests.Session | None = None) -> None:
        """Initializes the client.

        Args:
            timeout: Request timeout in seconds.
            session: Optional pre-configured session (used by tests).
        """
        self.timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update(self._HEADERS)

    def _get(self, url: str, params: dict[str, Any] | None = None) -> requests.Response:
        """Performs a GET request with error translation.

        Args:
            url: Endpoint URL.
            params: Query parameters.

        Returns:
            The successful response.

        Raises:
            UnauthorizedError: On HTTP 401/403.
            RateLimitError: On HTTP 429.
            NetworkError: On transport failures and other HTTP errors.
        """
        logger.debug("GET %s", url)
        try:
            response = self._session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as exc:
            raise NetworkError(str(exc)) from exc

        if response.status_code in (401, 403):
            raise UnauthorizedError(f"HTTP {response.status_code} from {url}")
        if response.status_code == 429:
            raise RateLimitError(f"HTTP 429 from {url}")
        try:
            response.raise_for_status()
        except requests.HTTPError as exc:
            raise NetworkError(str(exc)) from exc
        return response

    def _get_json(self, url: str, params: dict[str, Any] | None = None) -> Any:
        """GET returning the decoded JSON body.

        Raises:
            NetworkError: If the body is not JSON (see also _get()).
        """
        response = self._get(url, params)
        try:
            return response.json()
        except ValueError as exc:
            raise NetworkError(f"invalid JSON body from {url}: {exc}") from exc
