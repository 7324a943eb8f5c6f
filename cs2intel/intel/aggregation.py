"""Team-level map aggregates built from per-player FACEIT map records."""

from __future__ import annotations

from typing import Any, Iterable, Optional

from cs2intel.constants import CS2_MAPS, MIN_MAP_MATCHES, TOP_MAPS_PER_PLAYER
from cs2intel.stats.models import MapStatRecord

from .models import MapAggregate, PlayerIntel, TeamIntel


def map_stats_for_team(
    team: TeamIntel, map_name: str
) -> list[tuple[PlayerIntel, Optional[MapStatRecord]]]:
    """Pair every player with their record on ``map_name`` (or None)."""
    return [(player, player.map_record(map_name)) for player in team.players]


def team_map_win_rate(
    team: TeamIntel, map_name: str, top_n: Optional[int] = None
) -> Optional[float]:
    """Matches-weighted team win rate on a map.

    Only players with at least ``MIN_MAP_MATCHES`` matches on the map count.
    With ``top_n`` only the first ``top_n`` players (by elo) are considered.
    Returns None when nobody clears the floor.
    """
    weighted_sum = 0.0
    total_matches = 0

    for _, record in map_stats_for_team(team.top(top_n), map_name):
        if record is None or record.matches < MIN_MAP_MATCHES:
            continue
        weighted_sum += record.win_rate * record.matches
        total_matches += record.matches

    if total_matches == 0:
        return None
    return weighted_sum / total_matches


def team_map_total_games(team: TeamIntel, map_name: str) -> int:
    """Sum of every player's matches on a map, with no minimum."""
    return sum(
        record.matches
        for _, record in map_stats_for_team(team, map_name)
        if record is not None
    )


def map_aggregates(
    team: TeamIntel,
    maps: Iterable[str] = CS2_MAPS,
    top_n: Optional[int] = None,
) -> list[MapAggregate]:
    """Team average and games for each map.

    With ``top_n`` the game counts are taken over the same top players.
    """
    view = team.top(top_n)
    return [
        MapAggregate(
            map_name=map_name,
            team_avg=team_map_win_rate(view, map_name),
            team_games=team_map_total_games(view, map_name),
        )
        for map_name in maps
    ]


def sort_maps(map_names: Iterable[str]) -> list[str]:
    """Order maps: the competitive pool first, then anything else by name."""
    pool_index = {name: index for index, name in enumerate(CS2_MAPS)}

    def sort_key(name: str) -> tuple[int, int, str, str]:
        if name in pool_index:
            return (0, pool_index[name], "", "")
        return (1, 0, name.casefold(), name)

    return sorted(set(map_names), key=sort_key)


def team_maps(team: TeamIntel) -> list[str]:
    """Every map at least one player has data for, in display order."""
    return sort_maps(
        record.map for player in team.players for record in player.map_stats
    )


def player_threats(team: TeamIntel) -> dict[str, Any]:
    """Pick out the players worth flagging before a match."""
    rated = [p for p in team.players if p.elo > 0]
    top_elo = max(rated, key=lambda p: p.elo, default=None)
    grinder = max(team.players, key=lambda p: p.total_matches, default=None)
    with_kd = [p for p in team.players if p.kd_ratio is not None]
    sharpshooter = max(with_kd, key=lambda p: p.kd_ratio or 0.0, default=None)

    def summary(player: Optional[PlayerIntel]) -> Optional[dict[str, Any]]:
        if player is None:
            return None
        return {
            "name": player.display_name,
            "elo": player.elo,
            "skill_level": player.skill_level,
            "total_matches": player.total_matches,
            "kd_ratio": player.kd_ratio,
            "top_maps": [
                {"map": record.map, "matches": record.matches}
                for record in player.top_maps(TOP_MAPS_PER_PLAYER)
            ],
        }

    return {
        "top_elo": summary(top_elo),
        "grinder": summary(grinder if grinder and grinder.total_matches else None),
        "sharpshooter": summary(sharpshooter),
    }
