"""Database data models.

Contains the dictionary kinds and row types returned by the dictionary
store: DictKind, DictItem and DictFindItem.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any

__all__ = [
    "FALLBACK_RANK",
    "DictFindItem",
    "DictItem",
    "DictKind",
]

# Rank assigned to substring-fallback matches; sorts after every bm25 score.
FALLBACK_RANK = 1_000.0


class DictKind(Enum):
    """The three reference vocabularies kept in the local database."""

    TAGS = "tags"
    GENRES = "genres"
    CATEGORIES = "categories"

    @property
    def table(self) -> str:
        """Name of the primary table."""
        return self.value

    @property
    def fts_table(self) -> str:
        """Name of the FTS5 mirror of the primary table."""
        return f"{self.value}_fts"


@dataclass(frozen=True)
class DictItem:
    """Single dictionary entry. The id is always text."""

    id: str
    name: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class DictFindItem:
    """Dictionary entry returned by a find, with its match rank (lower is better)."""

    id: str
    name: str
    rank: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
