"""Database schema creation.

Creates the dictionary tables, their FTS5 mirrors and the app cache
from schema.sql, and records the schema version.
"""

from __future__ import annotations

import logging
import sqlite3
import time
from pathlib import Path

logger = logging.getLogger("steamcli.database")

__all__ = ["SchemaMixin"]


class SchemaMixin:
    """Mixin providing schema creation logic.

    Requires ConnectionBase attributes: conn, SCHEMA_VERSION.
    """

    def _ensure_schema(self) -> None:
        """Create the schema if this database has none yet."""
        current_version = self._get_schema_version()

        if current_version < self.SCHEMA_VERSION:
            self._create_schema()
            self._set_schema_version(self.SCHEMA_VERSION)

    def _get_schema_version(self) -> int:
        """Get current database schema version."""
        try:
            cursor = self.conn.execute("SELECT MAX(version) FROM schema_version")
            result = cursor.fetchone()
            return result[0] if result[0] is not None else 0
        except sqlite3.OperationalError:
            return 0

    def _set_schema_version(self, version: int) -> None:
        """Set database schema version."""
        self.conn.execute(
            """
            INSERT OR REPLACE INTO schema_version (version, applied_at, description)
            VALUES (?, ?, ?)
            """,
            (version, int(time.time()), "dictionaries + fts5 mirrors + app cache"),
        )
        self.conn.commit()

    def _create_schema(self) -> None:
        """Create initial database schema from SQL file."""
        schema_path = Path(__file__).parent / "schema.sql"
        try:
            with open(schema_path, encoding="utf-8") as f:
                schema_sql = f.read()
        except FileNotFoundError:
            logger.error("Schema file not found: %s", schema_path)
            raise

        try:
            self.conn.executescript(schema_sql)
            self.conn.commit()
            logger.debug("Database schema created at %s", self.db_path)
        except sqlite3.Error as e:
            logger.error("Failed to create database schema: %s", e)
            raise
