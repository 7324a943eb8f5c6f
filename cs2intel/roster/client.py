"""Challengermode GraphQL client."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional

import requests
from pydantic import ValidationError as PydanticValidationError

from cs2intel.constants import (
    CHALLENGERMODE_API_URL,
    CHALLENGERMODE_GRAPHQL_URL,
    DEFAULT_UPSTREAM_TIMEOUT,
)
from cs2intel.errors import UpstreamError

from .auth import AccessTokenCache
from .models import Tournament

if TYPE_CHECKING:
    from flask import Flask

logger = logging.getLogger(__name__)

LINEUP_FIELDS = """
    id
    name
    members {
      gameAccountId
      captain
      user {
        userId
        username
        connectedAccounts {
          provider
          id
        }
      }
    }
"""

TOURNAMENT_QUERY = f"""
query GetTournament($id: UUID!) {{
  tournament(tournamentId: $id) {{
    id
    name
    state
    attendance {{
      confirmedLineupCount
      signups {{
        lineupCount
        lineups {{ {LINEUP_FIELDS} }}
      }}
      roster {{
        lineups {{ {LINEUP_FIELDS} }}
      }}
    }}
  }}
}}
"""


class RosterClient:
    """Reads tournaments and lineups from the Challengermode public API."""

    def __init__(
        self,
        refresh_key: Optional[str] = None,
        api_url: str = CHALLENGERMODE_API_URL,
        graphql_url: str = CHALLENGERMODE_GRAPHQL_URL,
        timeout: float = DEFAULT_UPSTREAM_TIMEOUT,
    ) -> None:
        self.graphql_url = graphql_url
        self.timeout = timeout
        self.session = requests.Session()
        self.tokens = AccessTokenCache(
            refresh_key, api_url=api_url, session=self.session, timeout=timeout
        )

    def init_app(self, app: Flask) -> None:
        """Configure credentials and endpoints from the app config."""
        self.graphql_url = app.config["CHALLENGERMODE_GRAPHQL_URL"]
        self.timeout = app.config["UPSTREAM_TIMEOUT"]
        self.tokens = AccessTokenCache(
            app.config.get("CHALLENGERMODE_REFRESH_KEY"),
            api_url=app.config["CHALLENGERMODE_API_URL"],
            session=self.session,
            timeout=self.timeout,
        )
        app.extensions["cs2intel.roster"] = self

    def _graphql(self, query: str, variables: dict[str, Any]) -> dict[str, Any]:
        headers = self.tokens.auth_headers()
        try:
            response = self.session.post(
                self.graphql_url,
                json={"query": query, "variables": variables},
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise UpstreamError(f"GraphQL request failed: {e}") from e

        if not response.ok:
            raise UpstreamError(
                f"GraphQL request failed: {response.status_code} {response.text}"
            )

        try:
            result = response.json()
        except ValueError as e:
            raise UpstreamError(f"GraphQL response is not JSON: {e}") from e

        if not isinstance(result, dict):
            raise UpstreamError("GraphQL response is not an object")

        errors = result.get("errors") or []
        if errors:
            messages = ", ".join(str(err.get("message")) for err in errors)
            raise UpstreamError(f"GraphQL errors: {messages}")

        data = result.get("data")
        if not data:
            raise UpstreamError("No data returned from GraphQL")
        return data

    def get_tournament(self, tournament_id: str) -> Optional[Tournament]:
        """Get a tournament with all registered lineups and members."""
        data = self._graphql(TOURNAMENT_QUERY, {"id": tournament_id})
        payload = data.get("tournament")
        if payload is None:
            return None
        try:
            return Tournament.model_validate(payload)
        except PydanticValidationError as e:
            raise UpstreamError(f"Malformed tournament {tournament_id}: {e}") from e
