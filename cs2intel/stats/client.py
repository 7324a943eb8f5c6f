"""FACEIT Data API v4 client."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional

import requests
from pydantic import ValidationError as PydanticValidationError

from cs2intel.constants import DEFAULT_UPSTREAM_TIMEOUT, FACEIT_API_URL, FACEIT_GAME
from cs2intel.errors import ConfigurationError, UpstreamError

from .models import FaceitPlayer, FaceitStatsResponse

if TYPE_CHECKING:
    from flask import Flask

logger = logging.getLogger(__name__)


class StatsClient:
    """Thin wrapper around the FACEIT endpoints the intel engine needs."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: str = FACEIT_API_URL,
        timeout: float = DEFAULT_UPSTREAM_TIMEOUT,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = requests.Session()

    def init_app(self, app: Flask) -> None:
        """Configure credentials and endpoints from the app config."""
        self.api_key = app.config.get("FACEIT_API_KEY")
        self.base_url = app.config["FACEIT_API_URL"].rstrip("/")
        self.timeout = app.config["UPSTREAM_TIMEOUT"]
        app.extensions["cs2intel.faceit"] = self

    def _headers(self) -> dict[str, str]:
        if not self.api_key:
            raise ConfigurationError("FACEIT_API_KEY not set")
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Accept": "application/json",
        }

    def _get(
        self, endpoint: str, params: Optional[dict[str, str]] = None
    ) -> Optional[dict[str, Any]]:
        """GET an endpoint; a 404 means "no such resource" and yields None."""
        url = f"{self.base_url}{endpoint}"
        try:
            response = self.session.get(
                url, params=params, headers=self._headers(), timeout=self.timeout
            )
        except requests.RequestException as e:
            raise UpstreamError(f"FACEIT API request failed: {e}") from e

        if response.status_code == 404:
            return None

        if not response.ok:
            raise UpstreamError(
                f"FACEIT API error: {response.status_code} {response.text}"
            )

        try:
            return response.json()
        except ValueError as e:
            raise UpstreamError(f"FACEIT API returned invalid JSON: {e}") from e

    def find_player_by_steam_id(self, steam64_id: str) -> Optional[FaceitPlayer]:
        """Find a FACEIT player by Steam64 id."""
        payload = self._get(
            "/players", {"game": FACEIT_GAME, "game_player_id": steam64_id}
        )
        return self._parse_player(payload)

    def get_player_stats(self, player_id: str) -> Optional[FaceitStatsResponse]:
        """Get lifetime and per-map CS2 stats for a FACEIT player."""
        payload = self._get(f"/players/{player_id}/stats/{FACEIT_GAME}")
        if payload is None:
            return None
        try:
            return FaceitStatsResponse.model_validate(payload)
        except PydanticValidationError as e:
            raise UpstreamError(f"Malformed stats for player {player_id}: {e}") from e

    @staticmethod
    def _parse_player(payload: Optional[dict[str, Any]]) -> Optional[FaceitPlayer]:
        if payload is None:
            return None
        try:
            return FaceitPlayer.model_validate(payload)
        except PydanticValidationError as e:
            raise UpstreamError(f"Malformed FACEIT player: {e}") from e
