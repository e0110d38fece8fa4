# steam_cli/services/app_detail_service.py

"""Service for app detail lookups backed by the local cache.

Checks the app_cache table first; on a miss or a stale row it fetches
the appdetails JSON from the store, normalizes it, and only then writes
the raw payload to the cache. Payloads that fail normalization are never
cached.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from steam_cli.integrations.appdetails import normalize_appdetails
from steam_cli.integrations.models import AppDetails

if TYPE_CHECKING:
    from steam_cli.core.db import Database
    from steam_cli.integrations.steam_store import SteamStoreClient

logger = logging.getLogger("steamcli.app_detail_service")

__all__ = ["AppDetailService"]


class AppDetailService:
    """Fetches app details with a TTL cache in front of the store.

    Args:
        database: Open database holding the app_cache table.
        store: Store client used on cache misses.
    """

    def __init__(self, database: Database, store: SteamStoreClient) -> None:
        self._db = database
        self._store = store

    def get_app(self, appid: int, ttl_sec: int, now: int | None = None) -> tuple[AppDetails, bool]:
        """Gets normalized details for an app.

        Args:
            appid: Steam app ID.
            ttl_sec: Maximum cache age in seconds; negative values act as 0.
            now: Current Unix time (defaults to the system clock).

        Returns:
            Tuple of (details, whether they came from the cache).
        """
        if now is None:
            now = int(time.time())
        min_fetched_at = now - max(ttl_sec, 0)

        cached_raw = self._db.get_cached_app(appid, min_fetched_at)
        if cached_raw is not None:
            logger.debug("Cache hit for app %d", appid)
            return normalize_appdetails(appid, cached_raw), True

        logger.debug("Cache miss for app %d, fetching from store", appid)
        raw = self._store.fetch_appdetails_json(appid)
        details = normalize_appdetails(appid, raw)
        self._db.put_cached_app(appid, raw, now)
        return details, False
