"""Intel report data types handed to the presentation layer."""

from __future__ import annotations

import datetime
from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional

from cs2intel.constants import (
    CONFIDENCE_HIGH_GAMES,
    CONFIDENCE_LOW_GAMES,
    CONFIDENCE_MED_GAMES,
)
from cs2intel.stats.services import LookupStatus

if TYPE_CHECKING:
    from cs2intel.roster.models import LineupMember
    from cs2intel.stats.models import MapStatRecord, PlayerStats


@dataclass(frozen=True)
class PlayerIntel:
    """A lineup member enriched with FACEIT stats.

    Members that could not be resolved keep zeroed stats and an empty map
    list; ``lookup_status`` records why.
    """

    username: str
    game_account_id: Optional[str]
    captain: bool = False
    identity: Optional[str] = None
    lookup_status: LookupStatus = LookupStatus.UNRESOLVED
    faceit_nickname: Optional[str] = None
    skill_level: int = 0
    elo: int = 0
    total_matches: int = 0
    overall_win_rate: float = 0.0
    kd_ratio: Optional[float] = None
    map_stats: tuple[MapStatRecord, ...] = ()

    @classmethod
    def without_stats(
        cls,
        member: LineupMember,
        identity: Optional[str] = None,
        status: LookupStatus = LookupStatus.UNRESOLVED,
    ) -> PlayerIntel:
        return cls(
            username=member.username,
            game_account_id=member.game_account_id,
            captain=member.captain,
            identity=identity,
            lookup_status=status,
        )

    @classmethod
    def with_stats(
        cls, member: LineupMember, identity: str, stats: PlayerStats
    ) -> PlayerIntel:
        return cls(
            username=member.username,
            game_account_id=member.game_account_id,
            captain=member.captain,
            identity=identity,
            lookup_status=LookupStatus.OK,
            faceit_nickname=stats.nickname,
            skill_level=stats.skill_level,
            elo=stats.elo,
            total_matches=stats.total_matches,
            overall_win_rate=stats.overall_win_rate,
            kd_ratio=stats.kd_ratio,
            map_stats=tuple(stats.map_stats),
        )

    @property
    def display_name(self) -> str:
        return self.faceit_nickname or self.username

    def map_record(self, map_name: str) -> Optional[MapStatRecord]:
        """Return this player's record on a map, matched case-insensitively."""
        wanted = map_name.lower()
        for record in self.map_stats:
            if record.map.lower() == wanted:
                return record
        return None

    def top_maps(self, n: int) -> list[MapStatRecord]:
        return sorted(self.map_stats, key=lambda r: r.matches, reverse=True)[:n]

    def to_dict(self) -> dict[str, Any]:
        return {
            "username": self.username,
            "game_account_id": self.game_account_id,
            "captain": self.captain,
            "identity": self.identity,
            "lookup_status": self.lookup_status.value,
            "faceit_nickname": self.faceit_nickname,
            "skill_level": self.skill_level,
            "elo": self.elo,
            "total_matches": self.total_matches,
            "overall_win_rate": self.overall_win_rate,
            "kd_ratio": self.kd_ratio,
            "map_stats": [record.model_dump() for record in self.map_stats],
        }


@dataclass(frozen=True)
class TeamIntel:
    """A lineup's players, ordered by FACEIT elo descending."""

    lineup_id: str
    team_name: str
    players: tuple[PlayerIntel, ...] = ()

    def top(self, n: Optional[int]) -> TeamIntel:
        """Return the same team restricted to its ``n`` highest-rated players."""
        if n is None:
            return self
        if n < 0:
            raise ValueError(f"top_n must not be negative, got {n}")
        return replace(self, players=self.players[:n])

    def average_elo(self) -> int:
        """Mean elo of the players with a known rating, rounded."""
        rated = [p.elo for p in self.players if p.elo > 0]
        if not rated:
            return 0
        return round(sum(rated) / len(rated))

    def to_dict(self) -> dict[str, Any]:
        return {
            "lineup_id": self.lineup_id,
            "team_name": self.team_name,
            "players": [player.to_dict() for player in self.players],
        }


@dataclass(frozen=True)
class IntelReport:
    """Scouting report for one lineup of a tournament."""

    id: str
    created_at: datetime.datetime
    tournament_id: str
    tournament_name: str
    team: TeamIntel
    maps: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "created_at": self.created_at.isoformat(),
            "tournament_id": self.tournament_id,
            "tournament_name": self.tournament_name,
            "team": self.team.to_dict(),
            "maps": list(self.maps),
        }


def confidence_label(games: int) -> str:
    """Label how much a team's games on a map can be trusted."""
    if games >= CONFIDENCE_HIGH_GAMES:
        return "High"
    if games >= CONFIDENCE_MED_GAMES:
        return "Med"
    if games >= CONFIDENCE_LOW_GAMES:
        return "Low"
    return "None"


@dataclass(frozen=True)
class MapAggregate:
    """Team-level numbers for one map."""

    map_name: str
    team_avg: Optional[float]
    team_games: int

    @property
    def confidence(self) -> str:
        return confidence_label(self.team_games)

    def to_dict(self) -> dict[str, Any]:
        return {
            "map_name": self.map_name,
            "team_avg": self.team_avg,
            "team_games": self.team_games,
            "confidence": self.confidence,
        }


class Favored(str, Enum):
    """Which side a map comparison leans towards."""

    TEAM1 = "team1"
    TEAM2 = "team2"
    EVEN = "even"
    NO_DATA = "no_data"


@dataclass(frozen=True)
class MapComparison:
    map_name: str
    team1_rate: Optional[float]
    team2_rate: Optional[float]
    team1_games: int = 0
    team2_games: int = 0
    delta: Optional[float] = None
    favored: Favored = Favored.NO_DATA

    def to_dict(self) -> dict[str, Any]:
        return {
            "map_name": self.map_name,
            "team1_rate": self.team1_rate,
            "team2_rate": self.team2_rate,
            "team1_games": self.team1_games,
            "team2_games": self.team2_games,
            "delta": self.delta,
            "favored": self.favored.value,
        }


@dataclass(frozen=True)
class Comparison:
    """Head-to-head map comparison of two teams."""

    team1: TeamIntel
    team2: TeamIntel
    maps: tuple[MapComparison, ...] = ()
    team1_advantages: int = 0
    team2_advantages: int = 0
    average_delta: Optional[float] = None
    top_n: Optional[int] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "team1": self.team1.to_dict(),
            "team2": self.team2.to_dict(),
            "maps": [entry.to_dict() for entry in self.maps],
            "team1_advantages": self.team1_advantages,
            "team2_advantages": self.team2_advantages,
            "average_delta": self.average_delta,
            "top_n": self.top_n,
        }
