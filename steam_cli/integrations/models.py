"""Data models for Steam store and Web API results."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

from steam_cli.core.db.models import DictItem

__all__ = ["AppDetails", "OwnedGame", "SearchItem", "TagFacet"]


@dataclass(frozen=True)
class SearchItem:
    """One row of a store search results page.

    Attributes:
        appid: Steam application ID.
        name: Title text, "Unknown" when the row has none.
        price: Display price with whitespace collapsed, None when not shown.
    """

    appid: int
    name: str
    price: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class TagFacet:
    """A related-tag facet shown beside search results."""

    tagid: int
    count: int
    selected: bool = False

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class AppDetails:
    """Normalized appdetails for a single app.

    platforms and price_overview are passed through from the store
    response without interpretation.
    """

    appid: int
    name: str
    short_description: str | None = None
    categories: list[DictItem] = field(default_factory=list)
    genres: list[DictItem] = field(default_factory=list)
    supported_languages: str | None = None
    platforms: Any = None
    release_date: str | None = None
    price_overview: Any = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class OwnedGame:
    """A game from IPlayerService/GetOwnedGames (playtimes in minutes)."""

    appid: int
    name: str | None = None
    playtime_forever_min: int = 0
    playtime_2weeks_min: int = 0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
