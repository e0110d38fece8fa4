"""Steam store search results parser.

Extracts result rows from the search results HTML and, on request, the
related-tag facet table the page passes to PopulateTagFacetData() in an
inline script.

Rows are read with BeautifulSoup. The facet literal is located with a
regex behind find_tag_facet_pairs(), the only function that knows how the
literal is embedded in the page.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Iterable
from typing import Any

from bs4 import BeautifulSoup

from steam_cli.core.errors import UpstreamSchemaError
from steam_cli.integrations.models import SearchItem, TagFacet

logger = logging.getLogger("steamcli.search_parser")

__all__ = [
    "build_tag_facets",
    "find_tag_facet_pairs",
    "parse_search_html",
    "parse_search_rows",
]

_ROW_SELECTOR = "a.search_result_row"
_TITLE_SELECTOR = "span.title"
_PRICE_SELECTOR = "div.discount_final_price, div.search_price"
_APPID_ATTR = "data-ds-appid"
_UNKNOWN_TITLE = "Unknown"

# PopulateTagFacetData( [[tagid, count], ...], [...] )
_FACET_CALL_PATTERN: re.Pattern[str] = re.compile(
    r"PopulateTagFacetData\(\s*(\[[^\)]*\])\s*,\s*(\[[^\)]*\])"
)

# Plain ASCII integers only; "1_0", " 7 " and non-ASCII digits do not match.
_INT_TEXT_PATTERN: re.Pattern[str] = re.compile(r"[+-]?[0-9]+")


def _parse_int_text(raw: str) -> int | None:
    """Parses a plain ASCII integer (optional sign, digits only)."""
    if _INT_TEXT_PATTERN.fullmatch(raw) is None:
        return None
    return int(raw)


def _parse_appid(raw: Any) -> int | None:
    """Parses the data-ds-appid attribute, None if it is not an integer."""
    if not isinstance(raw, str):
        return None
    return _parse_int_text(raw)


def parse_search_rows(html_text: str) -> list[SearchItem]:
    """Extracts result rows from search results HTML.

    Rows without a numeric app id are skipped. A missing title becomes
    "Unknown"; a missing price becomes None.

    Args:
        html_text: Raw HTML of the search results page.

    Returns:
        Result rows in document order (possibly empty).
    """
    soup = BeautifulSoup(html_text, "html.parser")

    items: list[SearchItem] = []
    for row in soup.select(_ROW_SELECTOR):
        appid = _parse_appid(row.get(_APPID_ATTR))
        if appid is None:
            continue

        title_elem = row.select_one(_TITLE_SELECTOR)
        name = title_elem.get_text().strip() if title_elem else ""

        price = None
        price_elem = row.select_one(_PRICE_SELECTOR)
        if price_elem is not None:
            price = " ".join(price_elem.get_text().split()) or None

        items.append(SearchItem(appid=appid, name=name or _UNKNOWN_TITLE, price=price))

    return items


def find_tag_facet_pairs(html_text: str) -> list[Any]:
    """Locates the tag facet literal and returns its raw pairs.

    Args:
        html_text: Raw HTML of the search results page.

    Returns:
        The decoded first array of the PopulateTagFacetData() call.

    Raises:
        UpstreamSchemaError: If the call is absent or its first array is
            not a well-formed JSON array.
    """
    match = _FACET_CALL_PATTERN.search(html_text)
    if match is None:
        raise UpstreamSchemaError("facets block not found in search HTML")

    try:
        pairs = json.loads(match.group(1))
    except json.JSONDecodeError as exc:
        raise UpstreamSchemaError(f"facet parse failed: {exc}") from exc

    if not isinstance(pairs, list):
        raise UpstreamSchemaError("facet data is not an array")
    return pairs


def _coerce_int(value: Any) -> int | None:
    """Coerces a JSON integer or numeric string to int."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        return _parse_int_text(value)
    return None


def build_tag_facets(pairs: Iterable[Any], selected_tags: Iterable[int]) -> list[TagFacet]:
    """Turns raw [tagid, count] pairs into TagFacets.

    Pairs that are not two-element arrays or whose members are not
    integers (or numeric strings) are dropped.

    Args:
        pairs: Raw pairs from find_tag_facet_pairs().
        selected_tags: Tag ids the search was filtered by.

    Returns:
        Facets in input order.
    """
    selected = set(selected_tags)
    facets: list[TagFacet] = []
    dropped = 0

    for pair in pairs:
        if not isinstance(pair, list) or len(pair) != 2:
            dropped += 1
            continue
        tagid = _coerce_int(pair[0])
        count = _coerce_int(pair[1])
        if tagid is None or count is None:
            dropped += 1
            continue
        facets.append(TagFacet(tagid=tagid, count=count, selected=tagid in selected))

    if dropped:
        logger.debug("Dropped %d malformed facet pairs", dropped)
    return facets


def parse_search_html(
    html_text: str,
    selected_tags: Iterable[int],
    with_facets: bool,
) -> tuple[list[SearchItem], list[TagFacet] | None]:
    """Parses a search results page into rows and optional facets.

    Args:
        html_text: Raw HTML of the search results page.
        selected_tags: Tag ids the search was filtered by.
        with_facets: Whether to extract the tag facet table.

    Returns:
        Tuple of (rows, facets or None when not requested).

    Raises:
        UpstreamSchemaError: If no result row is found, or facets were
            requested and could not be extracted.
    """
    items = parse_search_rows(html_text)
    if not items:
        raise UpstreamSchemaError("no search_result_row entries found in store response")

    facets = None
    if with_facets:
        facets = build_tag_facets(find_tag_facet_pairs(html_text), selected_tags)

    return items, facets
