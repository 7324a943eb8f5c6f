"""Service layer for building intel reports and team comparisons."""

from __future__ import annotations

import asyncio
import datetime
import logging
import secrets
from typing import TYPE_CHECKING, Optional

from cs2intel.errors import NotFoundError
from cs2intel.extensions import cache, faceit, roster
from cs2intel.roster.identity import resolve_identity
from cs2intel.stats.services import StatsResolver

from .aggregation import team_maps
from .comparison import compare
from .models import Comparison, IntelReport, PlayerIntel, TeamIntel

if TYPE_CHECKING:
    from cs2intel.roster.client import RosterClient
    from cs2intel.roster.models import Tournament, TournamentLineup

logger = logging.getLogger(__name__)

REPORT_ID_BYTES = 9  # 12 url-safe characters


class IntelService:
    """Combines roster data and FACEIT stats into team intel."""

    def __init__(self, roster: RosterClient, resolver: StatsResolver) -> None:
        self.roster = roster
        self.resolver = resolver

    async def get_tournament(self, tournament_id: str) -> Tournament:
        """Fetch a tournament, raising NotFoundError if it does not exist."""
        tournament = await asyncio.to_thread(self.roster.get_tournament, tournament_id)
        if tournament is None:
            raise NotFoundError(f"Tournament {tournament_id} not found")
        return tournament

    async def build_team_intel(
        self, lineup: TournamentLineup, force_refresh: bool = False
    ) -> TeamIntel:
        """Resolve every member of a lineup and order them by elo.

        Members are never dropped: anyone who cannot be resolved, has no
        FACEIT account, or whose lookup failed is kept with zeroed stats.
        With ``force_refresh`` every player is fetched upstream and re-cached.
        """
        identities = [resolve_identity(member) for member in lineup.members]
        results = await self.resolver.get_stats_batch(
            (identity for identity in identities if identity),
            force_refresh=force_refresh,
        )

        players = []
        for member, identity in zip(lineup.members, identities):
            if identity is None:
                logger.info(f"No Steam identity for {member.username} in {lineup.name}")
                players.append(PlayerIntel.without_stats(member))
                continue

            result = results[identity]
            if result.ok and result.stats is not None:
                players.append(PlayerIntel.with_stats(member, identity, result.stats))
            else:
                players.append(
                    PlayerIntel.without_stats(member, identity, result.status)
                )

        # sorted() is stable, so equal elos keep roster order
        players = sorted(players, key=lambda p: p.elo, reverse=True)
        return TeamIntel(lineup_id=lineup.id, team_name=lineup.name, players=tuple(players))

    async def build_report(
        self, tournament: Tournament, lineup_id: str, force_refresh: bool = False
    ) -> IntelReport:
        """Build the intel report for one lineup of an already fetched tournament."""
        lineup = tournament.find_lineup(lineup_id)
        if lineup is None:
            raise NotFoundError(f"Lineup {lineup_id} not found in tournament")

        team = await self.build_team_intel(lineup, force_refresh)
        return IntelReport(
            id=secrets.token_urlsafe(REPORT_ID_BYTES),
            created_at=datetime.datetime.now(datetime.timezone.utc),
            tournament_id=tournament.id,
            tournament_name=tournament.name,
            team=team,
            maps=tuple(team_maps(team)),
        )

    async def generate_report(
        self, tournament_id: str, lineup_id: str, force_refresh: bool = False
    ) -> IntelReport:
        """Generate the intel report for a lineup."""
        tournament = await self.get_tournament(tournament_id)
        return await self.build_report(tournament, lineup_id, force_refresh)

    async def generate_comparison(
        self,
        tournament_id: str,
        team1_id: str,
        team2_id: str,
        top_n: Optional[int] = None,
        force_refresh: bool = False,
    ) -> Comparison:
        """Build both teams' intel concurrently and compare them."""
        tournament = await self.get_tournament(tournament_id)
        report1, report2 = await asyncio.gather(
            self.build_report(tournament, team1_id, force_refresh),
            self.build_report(tournament, team2_id, force_refresh),
        )
        return compare(report1.team, report2.team, top_n=top_n)


def get_intel_service() -> IntelService:
    """Build an IntelService from the app's configured clients and cache."""
    return IntelService(roster, StatsResolver(faceit, cache))
