"""App details cache queries.

Stores raw appdetails payloads keyed by app id together with the
fetch timestamp. Staleness is decided by the caller through the
min_fetched_at threshold; rows are never deleted, only superseded.
"""

from __future__ import annotations

import logging
import sqlite3

from steam_cli.core.errors import DatabaseError

logger = logging.getLogger("steamcli.database")

__all__ = ["AppCacheMixin"]


class AppCacheMixin:
    """Mixin providing app_cache reads and upserts.

    Requires ConnectionBase attributes: conn.
    """

    def get_cached_app(self, appid: int, min_fetched_at: int) -> str | None:
        """Gets a cached payload if it is fresh enough.

        Args:
            appid: Steam app ID.
            min_fetched_at: Oldest acceptable fetch time (Unix seconds).

        Returns:
            The raw payload, or None if absent or older than the threshold.
        """
        try:
            cursor = self.conn.execute(
                "SELECT payload_json FROM app_cache WHERE appid = ? AND fetched_at >= ?",
                (appid, min_fetched_at),
            )
            row = cursor.fetchone()
        except sqlite3.Error as exc:
            raise DatabaseError(str(exc)) from exc
        return row[0] if row else None

    def put_cached_app(self, appid: int, payload_json: str, fetched_at: int) -> None:
        """Stores a payload, replacing any existing row for the app.

        Args:
            appid: Steam app ID.
            payload_json: Raw appdetails response text.
            fetched_at: Fetch time (Unix seconds).
        """
        try:
            self.conn.execute(
                """
                INSERT INTO app_cache (appid, payload_json, fetched_at) VALUES (?, ?, ?)
                ON CONFLICT(appid) DO UPDATE SET
                    payload_json = excluded.payload_json,
                    fetched_at = excluded.fetched_at
                """,
                (appid, payload_json, fetched_at),
            )
            self.conn.commit()
        except sqlite3.Error as exc:
            raise DatabaseError(str(exc)) from exc
        logger.debug("Cached appdetails for %d (fetched_at=%d)", appid, fetched_at)
