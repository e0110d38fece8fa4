# steam_cli/services/dictionary_service.py

"""Dictionary lookups over the local tags/genres/categories store.

Makes sure the dictionaries are seeded, validates and clamps paging
input, and returns pages with pagination info.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from steam_cli.core.db import Database, DictFindItem, DictItem, DictKind
from steam_cli.core.errors import InvalidArgumentError
from steam_cli.utils.output import Pagination, build_pagination, clamp_limit

logger = logging.getLogger("steamcli.dictionary_service")

__all__ = ["DictionaryService"]


class DictionaryService:
    """Paged listing and fuzzy find over the reference dictionaries.

    Args:
        database: Open database.
        snapshot_provider: Returns the seed snapshot path; only called
            when a dictionary is empty.
    """

    def __init__(self, database: Database, snapshot_provider: Callable[[], Path]) -> None:
        self._db = database
        self._snapshot_provider = snapshot_provider

    def ensure_seeded(self) -> bool:
        """Seeds the dictionaries from the snapshot if any of them is empty."""
        if not self._db.has_empty_dictionary():
            return False
        self._db.reseed_from_snapshot(self._snapshot_provider())
        return True

    def list_entries(self, kind: DictKind, limit: int, offset: int) -> tuple[list[DictItem], Pagination]:
        """Lists a page of a dictionary ordered by name."""
        self.ensure_seeded()
        limit = clamp_limit(limit)
        offset = max(offset, 0)
        items, total = self._db.list_dict(kind, limit, offset)
        return items, build_pagination(limit, offset, len(items), total)

    def find_entries(self, kind: DictKind, query: str, limit: int, offset: int) -> tuple[list[DictFindItem], Pagination]:
        """Finds dictionary entries matching a query.

        Raises:
            InvalidArgumentError: If the query is empty or whitespace.
        """
        if not query.strip():
            raise InvalidArgumentError("query must not be empty")

        self.ensure_seeded()
        limit = clamp_limit(limit)
        offset = max(offset, 0)
        items, total = self._db.find_dict(kind, query, limit, offset)
        logger.debug("find %s %r -> %d/%d", kind.value, query, len(items), total)
        return items, build_pagination(limit, offset, len(items), total)
