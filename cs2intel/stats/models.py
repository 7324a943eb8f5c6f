"""FACEIT Data API contracts and the normalized stats built from them."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from cs2intel.constants import FACEIT_GAME

# Segment labels that describe a game mode rather than a map
MODE_SEGMENT_MARKERS = ("5v5", "Premier")


def parse_int(value: Any) -> int:
    """Parse a FACEIT stat value, which is usually a numeric string."""
    if value is None or value == "":
        return 0
    return int(float(value))


def parse_float(value: Any) -> float:
    if value is None or value == "":
        return 0.0
    return float(value)


class FaceitGame(BaseModel):
    """Per-game profile of a FACEIT player."""

    skill_level: int = 0
    faceit_elo: int = 0
    region: Optional[str] = None


class FaceitPlayer(BaseModel):
    """FACEIT player information."""

    player_id: str
    nickname: str
    avatar: Optional[str] = None
    country: Optional[str] = None
    faceit_url: Optional[str] = None
    games: dict[str, FaceitGame] = Field(default_factory=dict)

    @property
    def cs2(self) -> FaceitGame:
        return self.games.get(FACEIT_GAME) or FaceitGame()


class StatsSegment(BaseModel):
    """One breakdown segment of a stats response (a map, or a mode)."""

    label: str = ""
    type: Optional[str] = None
    mode: Optional[str] = None
    stats: dict[str, Any] = Field(default_factory=dict)

    @property
    def is_map(self) -> bool:
        if not self.label:
            return False
        if self.type and self.type.lower() != "map":
            return False
        return not any(marker in self.label for marker in MODE_SEGMENT_MARKERS)


class FaceitStatsResponse(BaseModel):
    """Response of ``GET /players/{player_id}/stats/cs2``."""

    player_id: str
    game_id: Optional[str] = None
    lifetime: dict[str, Any] = Field(default_factory=dict)
    segments: list[StatsSegment] = Field(default_factory=list)


class MapStatRecord(BaseModel):
    """One player's record on one map.

    ``win_rate`` is the value FACEIT reports, not wins / matches.
    """

    model_config = ConfigDict(frozen=True)

    map: str
    matches: int = Field(0, ge=0)
    wins: int = Field(0, ge=0)
    win_rate: float = Field(0.0, ge=0, le=100)

    @model_validator(mode="after")
    def _wins_within_matches(self) -> MapStatRecord:
        if self.wins > self.matches:
            raise ValueError(
                f"{self.map}: wins ({self.wins}) exceed matches ({self.matches})"
            )
        return self

    @classmethod
    def from_segment(cls, segment: StatsSegment) -> MapStatRecord:
        return cls(
            map=segment.label,
            matches=parse_int(segment.stats.get("Matches")),
            wins=parse_int(segment.stats.get("Wins")),
            win_rate=parse_float(segment.stats.get("Win Rate %")),
        )


class PlayerStats(BaseModel):
    """Normalized FACEIT stats for one player."""

    player_id: str
    nickname: str
    skill_level: int = 0
    elo: int = 0
    total_matches: int = 0
    overall_win_rate: float = 0.0
    kd_ratio: Optional[float] = None
    map_stats: list[MapStatRecord] = Field(default_factory=list)

    @classmethod
    def from_faceit(
        cls, player: FaceitPlayer, stats: FaceitStatsResponse
    ) -> PlayerStats:
        """Build normalized stats from a player lookup and its stats response."""
        by_map: dict[str, MapStatRecord] = {}
        for segment in stats.segments:
            if not segment.is_map:
                continue
            record = MapStatRecord.from_segment(segment)
            existing = by_map.get(record.map)
            if existing is None or record.matches > existing.matches:
                by_map[record.map] = record

        # Most played first
        map_stats = sorted(by_map.values(), key=lambda r: r.matches, reverse=True)

        kd_value = stats.lifetime.get("Average K/D Ratio")
        return cls(
            player_id=player.player_id,
            nickname=player.nickname,
            skill_level=player.cs2.skill_level,
            elo=player.cs2.faceit_elo,
            total_matches=parse_int(stats.lifetime.get("Matches")),
            overall_win_rate=parse_float(stats.lifetime.get("Win Rate %")),
            kd_ratio=parse_float(kd_value) if kd_value not in (None, "") else None,
            map_stats=map_stats,
        )
