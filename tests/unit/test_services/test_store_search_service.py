"""Tests for StoreSearchService."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from steam_cli.core.errors import InvalidArgumentError
from steam_cli.integrations.models import SearchItem, TagFacet
from steam_cli.services.store_search_service import StoreSearchService, parse_tags_csv
from steam_cli.utils.output import Pagination


def _items(count: int) -> list[SearchItem]:
    return [SearchItem(appid=i, name=f"Game {i}") for i in range(1, count + 1)]


class TestParseTagsCsv:
    """Tests for parse_tags_csv()."""

    def test_parses_ids(self) -> None:
        assert parse_tags_csv("19, 492 ,1685") == [19, 492, 1685]

    def test_skips_blank_entries(self) -> None:
        assert parse_tags_csv(",19,,") == [19]

    def test_rejects_non_numeric(self) -> None:
        with pytest.raises(InvalidArgumentError, match="invalid tag id 'abc'"):
            parse_tags_csv("19,abc")

    @pytest.mark.parametrize("raw", ["", " , ,"])
    def test_rejects_empty(self, raw: str) -> None:
        with pytest.raises(InvalidArgumentError, match="at least one"):
            parse_tags_csv(raw)


class TestSearch:
    """Tests for search()."""

    def test_passes_arguments_to_store(self) -> None:
        store = MagicMock()
        store.search_store.return_value = (_items(2), None)

        StoreSearchService(store).search("19,492", "portal", 10, 20, with_facets=False)

        store.search_store.assert_called_once_with([19, 492], "portal", 10, 20, False)

    def test_truncates_extra_rows(self) -> None:
        """Rows beyond the limit are cut and reported through has_more."""
        store = MagicMock()
        store.search_store.return_value = (_items(7), None)

        result = StoreSearchService(store).search("19", None, 5, 10)

        assert len(result.items) == 5
        assert result.pagination == Pagination(limit=5, offset=10, returned=5, has_more=True, total=None)

    def test_short_page_has_no_more(self) -> None:
        store = MagicMock()
        store.search_store.return_value = (_items(3), None)

        result = StoreSearchService(store).search("19", None, 5, 0)

        assert result.pagination.has_more is False

    def test_full_page_may_have_more(self) -> None:
        store = MagicMock()
        store.search_store.return_value = (_items(5), None)

        result = StoreSearchService(store).search("19", None, 5, 0)

        assert result.pagination.has_more is True

    def test_limit_is_clamped(self) -> None:
        store = MagicMock()
        store.search_store.return_value = (_items(1), None)

        result = StoreSearchService(store).search("19", None, 500, -3)

        store.search_store.assert_called_once_with([19], None, 100, 0, False)
        assert result.pagination.limit == 100

    def test_bad_tags_never_reach_store(self) -> None:
        store = MagicMock()
        with pytest.raises(InvalidArgumentError):
            StoreSearchService(store).search("x", None, 5, 0)
        store.search_store.assert_not_called()

    def test_to_dict_with_facets(self) -> None:
        store = MagicMock()
        store.search_store.return_value = (_items(1), [TagFacet(tagid=19, count=3, selected=True)])

        data = StoreSearchService(store).search("19", None, 5, 0, with_facets=True).to_dict()

        assert data == {
            "items": [{"appid": 1, "name": "Game 1", "price": None}],
            "facets": {"tags": [{"tagid": 19, "count": 3, "selected": True}]},
        }

    def test_to_dict_without_facets(self) -> None:
        store = MagicMock()
        store.search_store.return_value = (_items(1), None)

        data = StoreSearchService(store).search("19", None, 5, 0).to_dict()

        assert data["facets"] is None
