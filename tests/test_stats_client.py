"""Tests for the FACEIT API client."""

from __future__ import annotations

import unittest
from unittest.mock import MagicMock

import requests

from cs2intel.errors import ConfigurationError, UpstreamError
from cs2intel.stats.client import StatsClient


def _response(status_code=200, payload=None):
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.text = "body"
    response.json.return_value = payload
    return response


class StatsClientTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.client = StatsClient(api_key="key", base_url="https://faceit.test/v4/")
        self.client.session = MagicMock()

    def test_find_player_by_steam_id(self) -> None:
        self.client.session.get.return_value = _response(
            payload={
                "player_id": "p1",
                "nickname": "ropz",
                "games": {"cs2": {"skill_level": 10, "faceit_elo": 3100}},
            }
        )

        player = self.client.find_player_by_steam_id("76561197960266729")

        self.assertEqual(player.nickname, "ropz")
        self.assertEqual(player.cs2.faceit_elo, 3100)
        args, kwargs = self.client.session.get.call_args
        self.assertEqual(args[0], "https://faceit.test/v4/players")
        self.assertEqual(
            kwargs["params"], {"game": "cs2", "game_player_id": "76561197960266729"}
        )
        self.assertEqual(kwargs["headers"]["Authorization"], "Bearer key")

    def test_404_means_not_found(self) -> None:
        self.client.session.get.return_value = _response(status_code=404)
        self.assertIsNone(self.client.find_player_by_steam_id("1"))
        self.assertIsNone(self.client.get_player_stats("p1"))

    def test_server_error_raises(self) -> None:
        self.client.session.get.return_value = _response(status_code=500)
        with self.assertRaises(UpstreamError):
            self.client.get_player_stats("p1")

    def test_transport_error_raises(self) -> None:
        self.client.session.get.side_effect = requests.ConnectionError("down")
        with self.assertRaises(UpstreamError):
            self.client.find_player_by_steam_id("1")

    def test_malformed_player_raises(self) -> None:
        self.client.session.get.return_value = _response(payload={"games": {}})
        with self.assertRaises(UpstreamError):
            self.client.find_player_by_steam_id("1")

    def test_stats_endpoint(self) -> None:
        self.client.session.get.return_value = _response(
            payload={"player_id": "p1", "lifetime": {"Matches": "10"}, "segments": []}
        )
        stats = self.client.get_player_stats("p1")
        self.assertEqual(stats.lifetime["Matches"], "10")
        self.assertEqual(
            self.client.session.get.call_args.args[0],
            "https://faceit.test/v4/players/p1/stats/cs2",
        )

    def test_missing_api_key(self) -> None:
        self.client.api_key = None
        with self.assertRaises(ConfigurationError):
            self.client.find_player_by_steam_id("1")
        self.client.session.get.assert_not_called()
