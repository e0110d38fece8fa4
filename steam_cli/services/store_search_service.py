# steam_cli/services/store_search_service.py

"""Store search by tag ids with optional related-tag facets."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

from steam_cli.core.errors import InvalidArgumentError
from steam_cli.integrations.models import SearchItem, TagFacet
from steam_cli.utils.output import Pagination, build_pagination, clamp_limit

if TYPE_CHECKING:
    from steam_cli.integrations.steam_store import SteamStoreClient

logger = logging.getLogger("steamcli.store_search_service")

__all__ = ["SearchResult", "StoreSearchService", "parse_tags_csv"]


def parse_tags_csv(raw: str) -> list[int]:
    """Parses a comma-separated list of tag ids.

    Blank entries are ignored.

    Args:
        raw: Input such as "19,492, 1685".

    Returns:
        The tag ids in input order.

    Raises:
        InvalidArgumentError: If an entry is not an integer or no id is given.
    """
    tags: list[int] = []
    for part in raw.split(","):
        token = part.strip()
        if not token:
            continue
        try:
            tags.append(int(token))
        except ValueError:
            raise InvalidArgumentError(f"invalid tag id '{token}'") from None
    if not tags:
        raise InvalidArgumentError("--tags must include at least one numeric tag id")
    return tags


@dataclass(frozen=True)
class SearchResult:
    items: list[SearchItem]
    facets: list[TagFacet] | None = None
    pagination: Pagination | None = field(default=None, compare=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "items": [item.to_dict() for item in self.items],
            "facets": {"tags": [facet.to_dict() for facet in self.facets]} if self.facets is not None else None,
        }


class StoreSearchService:
    """Runs store searches and pages the results.

    Args:
        store: Store client.
    """

    def __init__(self, store: SteamStoreClient) -> None:
        self._store = store

    def search(
        self,
        tags_csv: str,
        term: str | None,
        limit: int,
        offset: int,
        with_facets: bool = False,
    ) -> SearchResult:
        """Searches the store for apps carrying all given tags.

        The store may return more rows than asked for; extra rows are
        cut off and reported through has_more.

        Args:
            tags_csv: Comma-separated tag ids.
            term: Optional free-text term.
            limit: Page size (clamped to [1, 100]).
            offset: Result offset.
            with_facets: Also return related-tag facets.

        Returns:
            The page of results with pagination.
        """
        tags = parse_tags_csv(tags_csv)
        limit = clamp_limit(limit)
        offset = max(offset, 0)

        items, facets = self._store.search_store(tags, term, limit, offset, with_facets)
        page = items[:limit]
        pagination = build_pagination(limit, offset, len(page), None)
        if len(items) > len(page):
            pagination = replace(pagination, has_more=True)
        return SearchResult(items=page, facets=facets, pagination=pagination)
