"""Normalization of store appdetails responses.

The store answers ``/api/appdetails?appids=<id>`` with an object keyed by
the stringified app id::

    {"730": {"success": true, "data": {"name": "...", "genres": [...]}}}

normalize_appdetails() validates that shape and reduces it to AppDetails.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from steam_cli.core.db.models import DictItem
from steam_cli.core.errors import NotFoundError, UpstreamSchemaError
from steam_cli.integrations.models import AppDetails

logger = logging.getLogger("steamcli.appdetails")

__all__ = ["normalize_appdetails", "parse_id_description_list"]


def _optional_str(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def parse_id_description_list(value: Any) -> list[DictItem]:
    """Parses a categories/genres array into DictItems.

    Elements without an integer ``id`` and a string ``description`` are
    dropped individually.

    Args:
        value: The raw ``categories`` or ``genres`` value.

    Returns:
        Parsed entries; empty if value is not an array.
    """
    if not isinstance(value, list):
        return []

    items = []
    for item in value:
        if not isinstance(item, dict):
            continue
        item_id = item.get("id")
        description = item.get("description")
        if not isinstance(item_id, int) or isinstance(item_id, bool) or not isinstance(description, str):
            continue
        items.append(DictItem(id=str(item_id), name=description))
    return items


def normalize_appdetails(appid: int, raw_json: str) -> AppDetails:
    """Validates and reshapes a raw appdetails response.

    Args:
        appid: The app id the response was requested for.
        raw_json: Raw response text.

    Returns:
        The normalized details.

    Raises:
        UpstreamSchemaError: If the text is not JSON, the app id key or
            the data object is missing.
        NotFoundError: If the store reports success=false for the app.
    """
    try:
        root = json.loads(raw_json)
    except json.JSONDecodeError as exc:
        raise UpstreamSchemaError(f"appdetails is not valid JSON: {exc}") from exc

    if not isinstance(root, dict) or str(appid) not in root:
        raise UpstreamSchemaError("appid key missing in appdetails")

    entry = root[str(appid)]
    if not isinstance(entry, dict) or entry.get("success") is not True:
        raise NotFoundError(f"appid {appid} not found")

    data = entry.get("data")
    if not isinstance(data, dict):
        raise UpstreamSchemaError("appdetails data missing")

    name = data.get("name")
    release_date = data.get("release_date")

    return AppDetails(
        appid=appid,
        name=name if isinstance(name, str) else "Unknown",
        short_description=_optional_str(data.get("short_description")),
        categories=parse_id_description_list(data.get("categories")),
        genres=parse_id_description_list(data.get("genres")),
        supported_languages=_optional_str(data.get("supported_languages")),
        platforms=data.get("platforms"),
        release_date=_optional_str(release_date.get("date")) if isinstance(release_date, dict) else None,
        price_overview=data.get("price_overview"),
    )
