"""Head-to-head comparison of two teams' map pools."""

from __future__ import annotations

from typing import Iterable, Optional

from cs2intel.constants import CS2_MAPS

from .aggregation import map_aggregates
from .models import Comparison, Favored, MapComparison, TeamIntel


def favored_side(delta: Optional[float]) -> Favored:
    if delta is None:
        return Favored.NO_DATA
    if delta > 0:
        return Favored.TEAM1
    if delta < 0:
        return Favored.TEAM2
    return Favored.EVEN


def compare(
    team1: TeamIntel,
    team2: TeamIntel,
    maps: Iterable[str] = CS2_MAPS,
    top_n: Optional[int] = None,
) -> Comparison:
    """Compare two teams map by map.

    ``delta`` is team1's rate minus team2's, and only exists when both teams
    have a rate. Maps without a delta are left out of the summary numbers.
    """
    maps = list(maps)
    team1_maps = map_aggregates(team1, maps, top_n=top_n)
    team2_maps = map_aggregates(team2, maps, top_n=top_n)

    entries = []
    for first, second in zip(team1_maps, team2_maps):
        delta = None
        if first.team_avg is not None and second.team_avg is not None:
            delta = first.team_avg - second.team_avg
        entries.append(
            MapComparison(
                map_name=first.map_name,
                team1_rate=first.team_avg,
                team2_rate=second.team_avg,
                team1_games=first.team_games,
                team2_games=second.team_games,
                delta=delta,
                favored=favored_side(delta),
            )
        )

    deltas = [entry.delta for entry in entries if entry.delta is not None]
    average_delta = sum(deltas) / len(deltas) if deltas else None

    return Comparison(
        team1=team1.top(top_n),
        team2=team2.top(top_n),
        maps=tuple(entries),
        team1_advantages=sum(1 for entry in entries if entry.favored is Favored.TEAM1),
        team2_advantages=sum(1 for entry in entries if entry.favored is Favored.TEAM2),
        average_delta=average_delta,
        top_n=top_n,
    )
