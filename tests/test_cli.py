"""End-to-end tests for the steam-cli command line (network mocked)."""

from __future__ import annotations

import json
from unittest.mock import MagicMock, patch

import pytest

from steam_cli.config import Config
from steam_cli.core.errors import NetworkError
from steam_cli.integrations.models import OwnedGame, SearchItem, TagFacet
from steam_cli.main import build_parser, main


@pytest.fixture
def cli_config(monkeypatch, tmp_path):
    """Config rooted in a temp directory, patched into the CLI module."""
    monkeypatch.delenv("STEAM_API_KEY", raising=False)
    with patch("steam_cli.config.load_dotenv"):
        cfg = Config(DATA_DIR=tmp_path / "home")
    # Handlers bound to the captured stderr would outlive the test.
    with patch("steam_cli.main.config", cfg), patch("steam_cli.main.setup_logging"):
        yield cfg


@pytest.fixture
def store_client():
    client = MagicMock()
    with patch("steam_cli.main.SteamStoreClient", return_value=client):
        yield client


class TestParser:
    """Tests for argument parsing."""

    def test_global_flags_after_subcommand(self) -> None:
        args = build_parser().parse_args(["tags", "list", "--json", "--limit", "5"])
        assert args.json is True
        assert args.limit == 5

    def test_global_flags_before_subcommand(self) -> None:
        args = build_parser().parse_args(["--format", "json", "genres", "find", "act"])
        assert args.format == "json"
        assert args.query == "act"
        assert args.offset == 0

    def test_app_defaults(self) -> None:
        args = build_parser().parse_args(["app", "730"])
        assert args.appid == 730
        assert args.ttl_sec == 86_400

    def test_search_requires_tags(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args(["search"])


@pytest.mark.usefixtures("cli_config")
class TestDictionaryCommands:
    """Dictionary commands against the bundled assets."""

    def test_tags_list_json(self, capsys) -> None:
        assert main(["tags", "list", "--json", "--limit", "2"]) == 0

        body = json.loads(capsys.readouterr().out)
        assert body["ok"] is True
        assert len(body["data"]["items"]) == 2
        assert body["pagination"]["total"] == 41
        assert body["pagination"]["has_more"] is True
        assert body["meta"]["source"] == "local_db"

    def test_tags_find_fallback_human(self, capsys) -> None:
        assert main(["tags", "find", "coop"]) == 0

        out = capsys.readouterr().out.splitlines()
        assert out[0] == "tags find 'coop' (2)"
        assert out[1] == "1685\tCo-op\t1000.0000"

    def test_empty_find_query_fails(self, capsys) -> None:
        assert main(["categories", "find", "  ", "--json"]) == 1

        body = json.loads(capsys.readouterr().err)
        assert body["error"]["code"] == "INVALID_ARGUMENT"


@pytest.mark.usefixtures("cli_config")
class TestRemoteCommands:
    """Commands that talk to Steam, with the clients mocked."""

    def test_search_human(self, capsys, store_client) -> None:
        store_client.search_store.return_value = (
            [SearchItem(appid=620, name="Portal 2", price="$9.99"), SearchItem(appid=400, name="Portal")],
            [TagFacet(tagid=1685, count=4, selected=True)],
        )

        assert main(["search", "--tags", "1685", "--with-facets"]) == 0

        out = capsys.readouterr().out
        assert "620\tPortal 2\t$9.99" in out
        assert "400\tPortal\n" in out
        assert "1685\t4\tselected=true" in out

    def test_search_bad_tags(self, capsys, store_client) -> None:
        assert main(["search", "--tags", "abc"]) == 1
        assert "Error [INVALID_ARGUMENT]" in capsys.readouterr().err

    def test_app_cached_on_second_call(self, capsys, store_client) -> None:
        store_client.fetch_appdetails_json.return_value = json.dumps(
            {"730": {"success": True, "data": {"name": "Counter-Strike 2", "genres": [{"id": 1, "description": "Action"}]}}}
        )

        assert main(["app", "730", "--json"]) == 0
        first = json.loads(capsys.readouterr().out)
        assert main(["app", "730", "--json"]) == 0
        second = json.loads(capsys.readouterr().out)

        assert first["meta"]["cached"] is False
        assert second["meta"]["cached"] is True
        assert second["data"]["app"]["genres"] == [{"id": "1", "name": "Action"}]
        store_client.fetch_appdetails_json.assert_called_once_with(730)

    def test_app_network_error(self, capsys, store_client) -> None:
        store_client.fetch_appdetails_json.side_effect = NetworkError("offline")

        assert main(["app", "730"]) == 1
        assert capsys.readouterr().err == "Error [NETWORK]: network error: offline\n"

    def test_user_owned_without_key(self, capsys) -> None:
        assert main(["user", "owned", "--steamid", "765"]) == 1
        assert "Error [UNAUTHORIZED]" in capsys.readouterr().err

    def test_user_owned(self, capsys, cli_config) -> None:
        cli_config.STEAM_API_KEY = "key"
        api = MagicMock()
        api.get_owned_games.return_value = [
            OwnedGame(appid=10, name=None, playtime_forever_min=5),
            OwnedGame(appid=440, name="Team Fortress 2", playtime_forever_min=90),
        ]

        with patch("steam_cli.main.SteamWebAPI", return_value=api):
            assert main(["user", "owned", "--steamid", "765"]) == 0

        assert capsys.readouterr().out.splitlines() == [
            "owned games for 765 (2)",
            "440\tTeam Fortress 2\t90m",
            "10\tUnknown\t5m",
        ]
