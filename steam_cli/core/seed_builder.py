"""steam-cli - Seed snapshot builder.

Builds the dictionary snapshot database from the static JSON assets
(popular tags, genres, categories). The snapshot is the read-only source
the live database is re-seeded from whenever a dictionary is empty.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from steam_cli.core.db import Database, DictKind
from steam_cli.core.errors import InternalError
from steam_cli.utils.json_utils import load_json
from steam_cli.utils.paths import get_resources_dir

logger = logging.getLogger("steamcli.seed_builder")

__all__ = [
    "BUNDLED_SNAPSHOT_NAME",
    "build_seed_database",
    "ensure_seed_snapshot",
    "load_dictionary_assets",
]

BUNDLED_SNAPSHOT_NAME = "steam.db"

TAGS_ASSET = "tags.popular.en.json"
GENRES_ASSET = "genres.json"
CATEGORIES_ASSET = "categories.json"


def _parse_tag_list(payload: Any) -> list[tuple[int, str]]:
    """Parses the popular-tags asset: a list of {"tagid": int, "name": str}."""
    if not isinstance(payload, list):
        raise ValueError("tags payload is not an array")

    entries = []
    for item in payload:
        tagid = item.get("tagid") if isinstance(item, dict) else None
        name = item.get("name") if isinstance(item, dict) else None
        if not isinstance(tagid, int) or isinstance(tagid, bool):
            raise ValueError(f"tagid missing or invalid in {item!r}")
        if not isinstance(name, str):
            raise ValueError(f"tag name missing for tagid {tagid}")
        entries.append((tagid, name))
    return entries


def _parse_id_map(label: str, payload: Any) -> list[tuple[str, str]]:
    """Parses a {"id": "name"} asset (genres, categories)."""
    if not isinstance(payload, dict):
        raise ValueError(f"{label} payload is not an object")

    entries = []
    for entry_id, name in payload.items():
        if not isinstance(name, str):
            raise ValueError(f"{label} name value invalid for id {entry_id}")
        entries.append((entry_id, name))
    return entries


def load_dictionary_assets(resources_dir: Path) -> dict[DictKind, list[tuple[Any, str]]]:
    """Loads and validates the three dictionary assets.

    Args:
        resources_dir: Directory holding the JSON assets.

    Returns:
        Dict mapping each DictKind to its (id, name) rows.

    Raises:
        ValueError: If an asset is missing or malformed.
    """
    payloads = {}
    for kind, filename in (
        (DictKind.TAGS, TAGS_ASSET),
        (DictKind.GENRES, GENRES_ASSET),
        (DictKind.CATEGORIES, CATEGORIES_ASSET),
    ):
        path = resources_dir / filename
        payload = load_json(path, default=False)
        if payload is False:
            raise ValueError(f"asset missing or unreadable: {path}")
        payloads[kind] = payload

    return {
        DictKind.TAGS: _parse_tag_list(payloads[DictKind.TAGS]),
        DictKind.GENRES: _parse_id_map("genres", payloads[DictKind.GENRES]),
        # JSON object keys are strings; the categories table keys are integers.
        DictKind.CATEGORIES: [
            (int(entry_id), name) for entry_id, name in _parse_id_map("categories", payloads[DictKind.CATEGORIES])
        ],
    }


def build_seed_database(out_path: Path, resources_dir: Path | None = None) -> dict[DictKind, int]:
    """Builds a fresh snapshot database from the JSON assets.

    An existing file at out_path is replaced.

    Args:
        out_path: Destination SQLite file.
        resources_dir: Asset directory (defaults to the bundled resources).

    Returns:
        Dict mapping each DictKind to the number of rows written.
    """
    entries = load_dictionary_assets(resources_dir or get_resources_dir())

    if out_path.exists():
        out_path.unlink()

    with Database(out_path) as db:
        counts = db.replace_dictionaries(entries)

    logger.info(
        "Seed db generated at %s (tags=%d, genres=%d, categories=%d)",
        out_path,
        counts[DictKind.TAGS],
        counts[DictKind.GENRES],
        counts[DictKind.CATEGORIES],
    )
    return counts


def _snapshot_is_current(snapshot: Path, resources_dir: Path) -> bool:
    """True if the snapshot exists and is newer than every JSON asset."""
    if not snapshot.is_file():
        return False
    built_at = snapshot.stat().st_mtime_ns
    for filename in (TAGS_ASSET, GENRES_ASSET, CATEGORIES_ASSET):
        asset = resources_dir / filename
        if asset.is_file() and asset.stat().st_mtime_ns > built_at:
            return False
    return True


def ensure_seed_snapshot(cache_dir: Path, resources_dir: Path | None = None) -> Path:
    """Locates the snapshot to seed from, building it if necessary.

    A bundled resources/steam.db wins. Otherwise a snapshot is built
    from the JSON assets into cache_dir and reused until one of the assets
    is modified after it. The build goes to a temporary file that is
    renamed into place, so a crash never leaves a partial snapshot behind.

    Args:
        cache_dir: Directory for the generated snapshot.
        resources_dir: Asset directory (defaults to the bundled resources).

    Returns:
        Path to a complete snapshot database.

    Raises:
        InternalError: If the snapshot cannot be built.
    """
    try:
        resources = resources_dir or get_resources_dir()
    except FileNotFoundError as exc:
        raise InternalError(str(exc)) from exc

    bundled = resources / BUNDLED_SNAPSHOT_NAME
    if bundled.is_file():
        return bundled

    target = cache_dir / "seed-snapshot.db"
    if _snapshot_is_current(target, resources):
        return target
    logger.info("Building seed snapshot at %s", target)

    try:
        cache_dir.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix="steam-seed-", suffix=".db", dir=cache_dir)
        os.close(fd)
        tmp_path = Path(tmp_name)
        try:
            build_seed_database(tmp_path, resources)
            os.replace(tmp_path, target)
        finally:
            if tmp_path.exists():
                tmp_path.unlink()
    except (OSError, ValueError) as exc:
        raise InternalError(f"cannot build seed snapshot: {exc}") from exc

    return target
