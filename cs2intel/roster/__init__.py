"""Challengermode roster service: tournaments, lineups and members."""

from .client import RosterClient
from .identity import resolve_identity, steam3_to_steam64
from .models import LineupMember, Tournament, TournamentLineup

__all__ = [
    "LineupMember",
    "RosterClient",
    "Tournament",
    "TournamentLineup",
    "resolve_identity",
    "steam3_to_steam64",
]
