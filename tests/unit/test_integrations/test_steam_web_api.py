"""Tests for the Steam Web API client."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from steam_cli.core.errors import NetworkError, NotFoundError, UnauthorizedError, UpstreamSchemaError
from steam_cli.integrations.models import OwnedGame
from steam_cli.integrations.steam_web_api import SteamWebAPI


class TestSteamWebAPIInit:
    """Tests for SteamWebAPI initialization."""

    def test_empty_api_key_raises_value_error(self) -> None:
        """Empty API key raises ValueError."""
        with pytest.raises(ValueError, match="must not be empty"):
            SteamWebAPI("")

    def test_whitespace_api_key_raises_value_error(self) -> None:
        """Whitespace-only API key raises ValueError."""
        with pytest.raises(ValueError, match="must not be empty"):
            SteamWebAPI("   ")

    def test_valid_api_key_accepted(self, mock_session: MagicMock) -> None:
        """Valid API key is accepted and stripped."""
        api = SteamWebAPI("  my_key  ", session=mock_session)
        assert api.api_key == "my_key"


class TestResolveVanity:
    """Tests for resolve_vanity()."""

    def test_success(self, mock_session: MagicMock, response_factory) -> None:
        mock_session.get.return_value = response_factory(
            json_data={"response": {"success": 1, "steamid": "76561197960287930"}}
        )
        api = SteamWebAPI("key", session=mock_session)

        assert api.resolve_vanity("gabelogannewell") == "76561197960287930"
        params = mock_session.get.call_args.kwargs["params"]
        assert params == {"key": "key", "vanityurl": "gabelogannewell"}

    def test_no_match_is_not_found(self, mock_session: MagicMock, response_factory) -> None:
        mock_session.get.return_value = response_factory(
            json_data={"response": {"success": 42, "message": "No match"}}
        )
        with pytest.raises(NotFoundError, match="nobody"):
            SteamWebAPI("key", session=mock_session).resolve_vanity("nobody")

    def test_missing_steamid_is_schema_error(self, mock_session: MagicMock, response_factory) -> None:
        mock_session.get.return_value = response_factory(json_data={"response": {"success": 1}})
        with pytest.raises(UpstreamSchemaError):
            SteamWebAPI("key", session=mock_session).resolve_vanity("x")

    def test_forbidden_is_unauthorized(self, mock_session: MagicMock, response_factory) -> None:
        mock_session.get.return_value = response_factory(status_code=403)
        with pytest.raises(UnauthorizedError):
            SteamWebAPI("bad", session=mock_session).resolve_vanity("x")

    def test_non_json_body_is_network_error(self, mock_session: MagicMock, response_factory) -> None:
        mock_session.get.return_value = response_factory(text="<html>")
        with pytest.raises(NetworkError, match="invalid JSON"):
            SteamWebAPI("key", session=mock_session).resolve_vanity("x")


class TestGetOwnedGames:
    """Tests for get_owned_games()."""

    def test_parses_games(self, mock_session: MagicMock, response_factory) -> None:
        mock_session.get.return_value = response_factory(
            json_data={
                "response": {
                    "game_count": 4,
                    "games": [
                        {"appid": 440, "name": "Team Fortress 2", "playtime_forever": 1200, "playtime_2weeks": 30},
                        {"appid": 570, "playtime_forever": 50},
                        {"appid": 0, "name": "Broken"},
                        {"name": "No id"},
                    ],
                }
            }
        )
        games = SteamWebAPI("key", session=mock_session).get_owned_games("765")

        assert games == [
            OwnedGame(appid=440, name="Team Fortress 2", playtime_forever_min=1200, playtime_2weeks_min=30),
            OwnedGame(appid=570, name=None, playtime_forever_min=50, playtime_2weeks_min=0),
        ]
        params = mock_session.get.call_args.kwargs["params"]
        assert params["steamid"] == "765"
        assert params["include_appinfo"] == "1"
        assert params["include_played_free_games"] == "1"

    def test_private_profile_is_schema_error(self, mock_session: MagicMock, response_factory) -> None:
        """Private profiles answer with an empty response object."""
        mock_session.get.return_value = response_factory(json_data={"response": {}})
        with pytest.raises(UpstreamSchemaError, match="owned games"):
            SteamWebAPI("key", session=mock_session).get_owned_games("765")
