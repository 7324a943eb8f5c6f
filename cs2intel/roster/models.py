"""Response contracts for the Challengermode GraphQL API."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class _RosterModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)


class ConnectedAccount(_RosterModel):
    """An external account linked to a Challengermode user."""

    provider: str
    id: Optional[str] = None


class UserProfile(_RosterModel):
    """Challengermode user behind a lineup member."""

    user_id: Optional[str] = Field(None, alias="userId")
    username: str
    connected_accounts: list[ConnectedAccount] = Field(
        default_factory=list, alias="connectedAccounts"
    )


class LineupMember(_RosterModel):
    """One person on a tournament lineup.

    ``game_account_id`` is the Steam3 form, e.g. ``[U:1:12345]``.
    """

    game_account_id: Optional[str] = Field(None, alias="gameAccountId")
    captain: bool = False
    user: UserProfile

    @property
    def username(self) -> str:
        return self.user.username


class TournamentLineup(_RosterModel):
    """A registered team within a tournament."""

    id: str
    name: str
    members: list[LineupMember] = Field(default_factory=list)


class TournamentSignups(_RosterModel):
    lineup_count: int = Field(0, alias="lineupCount")
    lineups: list[TournamentLineup] = Field(default_factory=list)


class TournamentRoster(_RosterModel):
    lineups: list[TournamentLineup] = Field(default_factory=list)


class TournamentAttendance(_RosterModel):
    confirmed_lineup_count: int = Field(0, alias="confirmedLineupCount")
    signups: TournamentSignups = Field(default_factory=TournamentSignups)
    roster: Optional[TournamentRoster] = None


class Tournament(_RosterModel):
    """A Challengermode tournament with its registered lineups."""

    id: str
    name: str
    state: Optional[str] = None
    attendance: TournamentAttendance = Field(default_factory=TournamentAttendance)

    def all_lineups(self) -> list[TournamentLineup]:
        """Return the roster lineups once available, otherwise the signups."""
        roster = self.attendance.roster
        if roster and roster.lineups:
            return list(roster.lineups)
        return list(self.attendance.signups.lineups)

    def find_lineup(self, lineup_id: str) -> Optional[TournamentLineup]:
        """Find a lineup by id in either the signups or the roster."""
        roster_lineups = self.attendance.roster.lineups if self.attendance.roster else []
        for lineup in [*self.attendance.signups.lineups, *roster_lineups]:
            if lineup.id == lineup_id:
                return lineup
        return None
