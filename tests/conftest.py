"""Common fixtures for tests."""

from __future__ import annotations

from typing import Any, Callable, Optional
from unittest.mock import MagicMock

import pytest

from cs2intel import create_app
from cs2intel.cache import CacheManager
from cs2intel.constants import STEAM64_BASE
from cs2intel.intel.models import PlayerIntel, TeamIntel
from cs2intel.roster.models import LineupMember, Tournament
from cs2intel.stats.models import (
    FaceitPlayer,
    FaceitStatsResponse,
    MapStatRecord,
)
from cs2intel.stats.services import LookupStatus


def map_record(map_name: str, matches: int, win_rate: float) -> MapStatRecord:
    return MapStatRecord(
        map=map_name,
        matches=matches,
        wins=round(matches * win_rate / 100),
        win_rate=win_rate,
    )


@pytest.fixture
def make_member() -> Callable[..., LineupMember]:
    def _make(
        username: str,
        game_account_id: Optional[str] = None,
        steam_account: Optional[str] = None,
        captain: bool = False,
    ) -> LineupMember:
        accounts = []
        if steam_account is not None:
            accounts.append({"provider": "STEAM", "id": steam_account})
        return LineupMember.model_validate(
            {
                "gameAccountId": game_account_id,
                "captain": captain,
                "user": {
                    "userId": f"user-{username}",
                    "username": username,
                    "connectedAccounts": accounts,
                },
            }
        )

    return _make


@pytest.fixture
def make_player() -> Callable[..., PlayerIntel]:
    """Build a PlayerIntel from ``{map: (matches, win_rate)}``."""

    def _make(
        username: str, elo: int = 0, maps: Optional[dict[str, tuple[int, float]]] = None
    ) -> PlayerIntel:
        records = tuple(
            map_record(name, matches, rate)
            for name, (matches, rate) in (maps or {}).items()
        )
        return PlayerIntel(
            username=username,
            game_account_id=None,
            lookup_status=LookupStatus.OK,
            faceit_nickname=username,
            elo=elo,
            total_matches=sum(r.matches for r in records),
            map_stats=records,
        )

    return _make


@pytest.fixture
def make_team() -> Callable[..., TeamIntel]:
    def _make(*players: PlayerIntel, name: str = "Team") -> TeamIntel:
        return TeamIntel(lineup_id=f"lineup-{name}", team_name=name, players=players)

    return _make


def faceit_player(player_id: str, nickname: str, elo: int = 1500, level: int = 6) -> FaceitPlayer:
    return FaceitPlayer.model_validate(
        {
            "player_id": player_id,
            "nickname": nickname,
            "games": {"cs2": {"skill_level": level, "faceit_elo": elo}},
        }
    )


def faceit_stats(player_id: str, segments: Optional[list[dict[str, Any]]] = None) -> FaceitStatsResponse:
    return FaceitStatsResponse.model_validate(
        {
            "player_id": player_id,
            "game_id": "cs2",
            "lifetime": {"Matches": "120", "Win Rate %": "54", "Average K/D Ratio": "1.12"},
            "segments": segments
            if segments is not None
            else [
                {
                    "label": "Mirage",
                    "type": "Map",
                    "mode": "5v5",
                    "stats": {"Matches": "40", "Wins": "22", "Win Rate %": "55"},
                },
                {
                    "label": "Inferno",
                    "type": "Map",
                    "mode": "5v5",
                    "stats": {"Matches": "60", "Wins": "30", "Win Rate %": "50"},
                },
            ],
        }
    )


@pytest.fixture
def faceit_client() -> MagicMock:
    """A StatsClient stand-in where every Steam id belongs to a FACEIT player."""
    client = MagicMock()
    client.find_player_by_steam_id.side_effect = lambda steam_id: faceit_player(
        f"fc-{steam_id}", f"nick-{steam_id}", elo=int(steam_id) - STEAM64_BASE
    )
    client.get_player_stats.side_effect = faceit_stats
    return client


@pytest.fixture
def cache(tmp_path) -> CacheManager:
    return CacheManager(tmp_path / "cache")


def lineup_payload(lineup_id: str, name: str, members: list[dict[str, Any]]) -> dict[str, Any]:
    return {"id": lineup_id, "name": name, "members": members}


def member_payload(username: str, account_id: int, captain: bool = False) -> dict[str, Any]:
    return {
        "gameAccountId": f"[U:1:{account_id}]",
        "captain": captain,
        "user": {"userId": f"user-{username}", "username": username, "connectedAccounts": []},
    }


@pytest.fixture
def tournament() -> Tournament:
    return Tournament.model_validate(
        {
            "id": "0317a85e-e080-4b44-6f9c-08de30f37986",
            "name": "Deildarkeppni RISI",
            "state": "RUNNING",
            "attendance": {
                "confirmedLineupCount": 2,
                "signups": {
                    "lineupCount": 2,
                    "lineups": [
                        lineup_payload(
                            "alpha",
                            "Alpha",
                            [member_payload("a1", 1001, captain=True), member_payload("a2", 1002)],
                        ),
                        lineup_payload(
                            "bravo",
                            "Bravo",
                            [member_payload("b1", 2001), member_payload("b2", 2002, captain=True)],
                        ),
                    ],
                },
                "roster": None,
            },
        }
    )


@pytest.fixture
def app(tmp_path):
    app = create_app(
        {
            "TESTING": True,
            "WTF_CSRF_ENABLED": False,
            "CACHE_DIR": str(tmp_path / "cache"),
            "FACEIT_API_KEY": "test-faceit-key",
            "CHALLENGERMODE_REFRESH_KEY": "test-refresh-key",
        }
    )
    yield app


@pytest.fixture
def client(app):
    return app.test_client()
