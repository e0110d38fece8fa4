"""Command output rendering.

Prints results either as human-readable text (via a per-command
renderer) or as a JSON envelope:

    {"ok": true, "data": {...}, "pagination": {...},
     "meta": {"version": "...", "source": "local_db", "cached": false},
     "error": null}

Results go to stdout, errors to stderr.
"""

from __future__ import annotations

import json
import sys
from collections.abc import Callable
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, TypeVar

from steam_cli.core.errors import AppError
from steam_cli.version import __version__

__all__ = [
    "DataSource",
    "OutputFormat",
    "Pagination",
    "build_pagination",
    "clamp_limit",
    "print_error",
    "print_success",
]

T = TypeVar("T")

MIN_LIMIT = 1
MAX_LIMIT = 100


class OutputFormat(Enum):
    HUMAN = "human"
    JSON = "json"


class DataSource(Enum):
    """Where the data of a response came from."""

    LOCAL_DB = "local_db"
    STEAM_STORE = "steam_store"
    STEAM_WEBAPI = "steam_webapi"
    INTERNAL = "internal"


@dataclass(frozen=True)
class Pagination:
    limit: int
    offset: int
    returned: int
    has_more: bool
    total: int | None = None


def clamp_limit(limit: int) -> int:
    """Clamps a page size to [1, 100]."""
    return max(MIN_LIMIT, min(limit, MAX_LIMIT))


def build_pagination(limit: int, offset: int, returned: int, total: int | None) -> Pagination:
    """Builds pagination info for a page of results.

    With a known total, there is more when offset + returned < total.
    Without one, a full page is taken to mean there may be more.

    Args:
        limit: Page size.
        offset: Offset of the page.
        returned: Number of items in the page.
        total: Total number of items, if known.

    Returns:
        The pagination record.
    """
    if total is not None:
        has_more = offset + returned < total
    else:
        has_more = returned == limit
    return Pagination(limit=limit, offset=offset, returned=returned, has_more=has_more, total=total)


def _to_jsonable(value: Any) -> Any:
    """Converts result objects (dataclasses with to_dict) to plain JSON data."""
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, dict):
        return {key: _to_jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_jsonable(item) for item in value]
    return value


def _envelope(
    ok: bool,
    data: Any,
    pagination: Pagination | None,
    source: DataSource,
    cached: bool,
    error: AppError | None = None,
) -> str:
    body = {
        "ok": ok,
        "data": _to_jsonable(data),
        "pagination": asdict(pagination) if pagination is not None else None,
        "meta": {"version": __version__, "source": source.value, "cached": cached},
        "error": {"code": error.code, "message": str(error)} if error is not None else None,
    }
    return json.dumps(body, indent=2, ensure_ascii=False)


def print_success(
    output_format: OutputFormat,
    data: T,
    pagination: Pagination | None,
    source: DataSource,
    cached: bool,
    human: Callable[[T], None],
) -> None:
    """Prints a successful result.

    Args:
        output_format: Human text or JSON envelope.
        data: Result payload.
        pagination: Pagination info, if the result is paged.
        source: Origin of the data.
        cached: Whether the data came from the local cache.
        human: Renderer used for the human format.
    """
    if output_format is OutputFormat.HUMAN:
        human(data)
    else:
        print(_envelope(True, data, pagination, source, cached))


def print_error(output_format: OutputFormat, error: AppError) -> None:
    """Prints an error to stderr."""
    if output_format is OutputFormat.HUMAN:
        print(f"Error [{error.code}]: {error}", file=sys.stderr)
    else:
        print(_envelope(False, None, None, DataSource.INTERNAL, False, error), file=sys.stderr)
