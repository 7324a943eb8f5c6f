"""Resolve roster members to Steam64 ids, the identity space FACEIT uses."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Optional

from cs2intel.constants import STEAM64_BASE, STEAM_PROVIDER

if TYPE_CHECKING:
    from .models import LineupMember

STEAM3_PATTERN = re.compile(r"\[U:1:(\d+)\]")


def steam3_to_steam64(steam3_id: Optional[str]) -> Optional[str]:
    """Convert a Steam3 id (``[U:1:ACCOUNT_ID]``) to a Steam64 id string."""
    if not steam3_id:
        return None
    match = STEAM3_PATTERN.search(steam3_id)
    if not match:
        return None
    return str(STEAM64_BASE + int(match.group(1)))


def resolve_identity(member: LineupMember) -> Optional[str]:
    """Return the member's Steam64 id, or None if it cannot be derived.

    A connected Steam account always wins; otherwise the member's game
    account id is decoded.
    """
    for account in member.user.connected_accounts:
        if account.provider == STEAM_PROVIDER and account.id:
            return account.id
    return steam3_to_steam64(member.game_account_id)
