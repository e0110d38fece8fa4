# tests/conftest.py
import json
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from steam_cli.core.db import Database, DictKind


SAMPLE_TAGS = [
    {"tagid": 19, "name": "Action"},
    {"tagid": 1685, "name": "Co-op"},
    {"tagid": 3843, "name": "Online Co-Op"},
    {"tagid": 29482, "name": "Souls-like"},
    {"tagid": 42804, "name": "Action Roguelike"},
    {"tagid": 1663, "name": "FPS"},
]

SAMPLE_GENRES = {"1": "Action", "25": "Adventure", "23": "Indie"}

SAMPLE_CATEGORIES = {"2": "Single-player", "9": "Co-op", "38": "Online Co-op"}


def sample_entries() -> dict:
    """Sample dictionary rows keyed by DictKind, as stored in the tables."""
    return {
        DictKind.TAGS: [(tag["tagid"], tag["name"]) for tag in SAMPLE_TAGS],
        DictKind.GENRES: list(SAMPLE_GENRES.items()),
        DictKind.CATEGORIES: [(int(key), name) for key, name in SAMPLE_CATEGORIES.items()],
    }


@pytest.fixture
def resources_dir(tmp_path) -> Path:
    """Directory holding small dictionary JSON assets."""
    directory = tmp_path / "resources"
    directory.mkdir()
    (directory / "tags.popular.en.json").write_text(json.dumps(SAMPLE_TAGS), encoding="utf-8")
    (directory / "genres.json").write_text(json.dumps(SAMPLE_GENRES), encoding="utf-8")
    (directory / "categories.json").write_text(json.dumps(SAMPLE_CATEGORIES), encoding="utf-8")
    return directory


@pytest.fixture
def snapshot_path(tmp_path) -> Path:
    """Seed snapshot database holding the sample dictionaries."""
    path = tmp_path / "snapshot" / "steam.db"
    with Database(path) as snapshot:
        snapshot.replace_dictionaries(sample_entries())
    return path


@pytest.fixture
def database(tmp_path):
    """Empty Database using a temp file (schema loaded from SQL)."""
    db = Database(tmp_path / "data" / "steam.db")
    yield db
    db.close()


@pytest.fixture
def seeded_database(database, snapshot_path):
    """Database seeded from the sample snapshot."""
    database.ensure_seeded(snapshot_path)
    return database


@pytest.fixture
def mock_session():
    """MagicMock standing in for requests.Session."""
    session = MagicMock()
    session.headers = {}
    return session


def make_response(status_code: int = 200, text: str = "", json_data=None) -> MagicMock:
    """Builds a fake requests.Response."""
    import requests

    response = MagicMock()
    response.status_code = status_code
    response.text = text
    if json_data is not None:
        response.json.return_value = json_data
    else:
        response.json.side_effect = ValueError("No JSON object could be decoded")
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status_code} Error")
    else:
        response.raise_for_status.return_value = None
    return response


@pytest.fixture
def response_factory():
    """Factory for fake requests.Response objects."""
    return make_response


@pytest.fixture
def dictionary_entries() -> dict:
    """Fresh copy of the sample dictionary rows."""
    return sample_entries()
