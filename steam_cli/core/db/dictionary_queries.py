"""Reference dictionary queries.

Handles the three vocabularies (tags, genres, categories): wholesale
re-seeding from a snapshot database, paged listing, and fuzzy find with
an FTS5 path and a substring fallback.
"""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from steam_cli.core.db.models import FALLBACK_RANK, DictFindItem, DictItem, DictKind
from steam_cli.core.errors import DatabaseError

logger = logging.getLogger("steamcli.database")

__all__ = ["DictionaryQueryMixin", "normalize_for_substring", "to_fts_query"]

# Stored names are compared with these characters removed.
_SUBSTRING_EXPR = "REPLACE(REPLACE(LOWER(name), '-', ''), ' ', '')"


def to_fts_query(text: str) -> str:
    """Builds an FTS5 MATCH expression from free text.

    Every non-alphanumeric character becomes a separator; each remaining
    token is quoted, marked as a prefix and AND-ed with the others.

    Args:
        text: Raw user query.

    Returns:
        The MATCH expression, or an empty string when no token survives.
    """
    normalized = "".join(ch if ch.isalnum() else " " for ch in text)
    return " AND ".join(f'"{term}"*' for term in normalized.split())


def normalize_for_substring(text: str) -> str:
    """Lower-cases text and keeps only alphanumeric characters."""
    return "".join(ch for ch in text.lower() if ch.isalnum())


def read_snapshot_entries(snapshot_path: Path) -> dict[DictKind, list[tuple[Any, str]]]:
    """Reads all dictionary rows from a snapshot database.

    The snapshot is opened through a separate read-only connection.

    Args:
        snapshot_path: Path to the snapshot SQLite file.

    Returns:
        Dict mapping each DictKind to its (id, name) rows.

    Raises:
        DatabaseError: If the snapshot is missing or unreadable.
    """
    if not snapshot_path.is_file():
        raise DatabaseError(f"seed snapshot not found: {snapshot_path}")

    uri = f"{snapshot_path.resolve().as_uri()}?mode=ro"
    try:
        seed = sqlite3.connect(uri, uri=True)
    except sqlite3.Error as exc:
        raise DatabaseError(f"cannot open seed snapshot {snapshot_path}: {exc}") from exc

    try:
        return {kind: seed.execute(f"SELECT id, name FROM {kind.table}").fetchall() for kind in DictKind}
    except sqlite3.Error as exc:
        raise DatabaseError(f"cannot read seed snapshot {snapshot_path}: {exc}") from exc
    finally:
        seed.close()


class DictionaryQueryMixin:
    """Mixin providing dictionary seeding, listing and find queries.

    Requires ConnectionBase attributes: conn.
    """

    def _write_dict_entries(self, kind: DictKind, entries: Iterable[tuple[Any, str]]) -> int:
        """Inserts entries into a primary table and its FTS mirror.

        This is the only write path into the dictionaries. It does not
        commit; callers run it inside a transaction.

        Args:
            kind: Target dictionary.
            entries: (id, name) pairs.

        Returns:
            Number of entries written.
        """
        rows = [(entry_id, name) for entry_id, name in entries]
        self.conn.executemany(f"INSERT INTO {kind.table} (id, name) VALUES (?, ?)", rows)
        self.conn.executemany(
            f"INSERT INTO {kind.fts_table} (id, name) VALUES (?, ?)",
            [(str(entry_id), name) for entry_id, name in rows],
        )
        return len(rows)

    def replace_dictionaries(self, entries: Mapping[DictKind, Iterable[tuple[Any, str]]]) -> dict[DictKind, int]:
        """Replaces all three dictionaries and their FTS mirrors atomically.

        Args:
            entries: (id, name) rows for every DictKind.

        Returns:
            Dict mapping each DictKind to the number of rows written.

        Raises:
            ValueError: If a dictionary kind is missing from entries.
            DatabaseError: If the transaction fails; nothing is changed.
        """
        missing = [kind.value for kind in DictKind if kind not in entries]
        if missing:
            raise ValueError(f"missing dictionary entries for: {', '.join(missing)}")

        counts: dict[DictKind, int] = {}
        try:
            with self.conn:
                for kind in DictKind:
                    self.conn.execute(f"DELETE FROM {kind.table}")
                    self.conn.execute(f"DELETE FROM {kind.fts_table}")
                for kind in DictKind:
                    counts[kind] = self._write_dict_entries(kind, entries[kind])
        except sqlite3.Error as exc:
            raise DatabaseError(f"dictionary re-seed failed: {exc}") from exc

        logger.info(
            "Seeded dictionaries: %s",
            ", ".join(f"{kind.value}={count}" for kind, count in counts.items()),
        )
        return counts

    def has_empty_dictionary(self) -> bool:
        """Returns True if any primary dictionary table has no rows."""
        try:
            for kind in DictKind:
                row = self.conn.execute(f"SELECT EXISTS(SELECT 1 FROM {kind.table})").fetchone()
                if not row[0]:
                    return True
        except sqlite3.Error as exc:
            raise DatabaseError(str(exc)) from exc
        return False

    def reseed_from_snapshot(self, snapshot_path: Path) -> dict[DictKind, int]:
        """Replaces all dictionaries with the contents of a snapshot.

        Raises:
            DatabaseError: If the snapshot cannot be read or the copy fails.
        """
        logger.info("Seeding dictionaries from %s", snapshot_path)
        return self.replace_dictionaries(read_snapshot_entries(snapshot_path))

    def ensure_seeded(self, snapshot_path: Path) -> bool:
        """Re-seeds all dictionaries from the snapshot if any is empty.

        Args:
            snapshot_path: Path to the snapshot SQLite file.

        Returns:
            True if a re-seed happened, False if the data was already there.

        Raises:
            DatabaseError: If the snapshot cannot be read or the copy fails.
        """
        if not self.has_empty_dictionary():
            return False
        self.reseed_from_snapshot(snapshot_path)
        return True

    def get_dict_count(self, kind: DictKind) -> int:
        """Gets the number of rows in a dictionary."""
        try:
            return self.conn.execute(f"SELECT COUNT(*) FROM {kind.table}").fetchone()[0]
        except sqlite3.Error as exc:
            raise DatabaseError(str(exc)) from exc

    def list_dict(self, kind: DictKind, limit: int, offset: int) -> tuple[list[DictItem], int]:
        """Lists dictionary entries ordered by name.

        Args:
            kind: Dictionary to list.
            limit: Page size (clamped by the caller).
            offset: Number of entries to skip.

        Returns:
            Tuple of (entries, total row count of the dictionary).
        """
        try:
            cursor = self.conn.execute(
                f"SELECT CAST(id AS TEXT) AS id, name FROM {kind.table} ORDER BY name ASC, id ASC LIMIT ? OFFSET ?",
                (limit, offset),
            )
            items = [DictItem(id=row["id"], name=row["name"]) for row in cursor.fetchall()]
        except sqlite3.Error as exc:
            raise DatabaseError(str(exc)) from exc

        return items, self.get_dict_count(kind)

    def find_dict(self, kind: DictKind, query: str, limit: int, offset: int) -> tuple[list[DictFindItem], int]:
        """Finds dictionary entries matching free text.

        Uses the FTS5 mirror ranked by bm25 first. When that page comes
        back empty (no match, an empty expression, or an offset past the
        last full-text match), falls back to a substring match on the
        stored name with spaces and hyphens removed; those results carry
        FALLBACK_RANK.

        Args:
            kind: Dictionary to search.
            query: Non-empty user query.
            limit: Page size (clamped by the caller).
            offset: Number of matches to skip.

        Returns:
            Tuple of (ranked entries, total matches for the strategy used).
        """
        try:
            fts_query = to_fts_query(query)
            if fts_query:
                fts = kind.fts_table
                cursor = self.conn.execute(
                    f"SELECT id, name, bm25({fts}) AS rank FROM {fts} WHERE {fts} MATCH ? "
                    "ORDER BY rank LIMIT ? OFFSET ?",
                    (fts_query, limit, offset),
                )
                items = [
                    DictFindItem(id=str(row["id"]), name=row["name"], rank=float(row["rank"]))
                    for row in cursor.fetchall()
                ]
                if items:
                    total = self.conn.execute(
                        f"SELECT COUNT(*) FROM {fts} WHERE {fts} MATCH ?",
                        (fts_query,),
                    ).fetchone()[0]
                    return items, total

            return self._find_dict_substring(kind, query, limit, offset)
        except sqlite3.Error as exc:
            raise DatabaseError(str(exc)) from exc

    def _find_dict_substring(
        self, kind: DictKind, query: str, limit: int, offset: int
    ) -> tuple[list[DictFindItem], int]:
        """Substring fallback for find_dict."""
        pattern = f"%{normalize_for_substring(query)}%"
        logger.debug("No full-text match in %s for %r, using substring %r", kind.value, query, pattern)

        cursor = self.conn.execute(
            f"SELECT CAST(id AS TEXT) AS id, name FROM {kind.table} "
            f"WHERE {_SUBSTRING_EXPR} LIKE ? ORDER BY name ASC, id ASC LIMIT ? OFFSET ?",
            (pattern, limit, offset),
        )
        items = [DictFindItem(id=row["id"], name=row["name"], rank=FALLBACK_RANK) for row in cursor.fetchall()]
        total = self.conn.execute(
            f"SELECT COUNT(*) FROM {kind.table} WHERE {_SUBSTRING_EXPR} LIKE ?",
            (pattern,),
        ).fetchone()[0]
        return items, total
