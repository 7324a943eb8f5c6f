"""Tests for the application factory and error handlers."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

from cs2intel import create_app
from cs2intel.errors import UpstreamError
from cs2intel.extensions import cache, faceit, roster
from cs2intel.intel.services import IntelService
from cs2intel.stats.client import StatsClient
from cs2intel.stats.services import StatsResolver


def test_config_from_test_mapping(app, tmp_path):
    assert app.config["TESTING"]
    assert app.config["CACHE_DIR"] == str(tmp_path / "cache")
    assert cache.cache_dir == tmp_path / "cache"
    assert faceit.api_key == "test-faceit-key"
    assert roster.tokens.refresh_key == "test-refresh-key"


def test_credentials_are_stripped_of_quotes(monkeypatch, tmp_path):
    monkeypatch.setenv("FACEIT_API_KEY", ' "abc-123" \n')
    monkeypatch.setenv("CHALLENGERMODE_REFRESH_KEY", "'  '")

    app = create_app({"TESTING": True, "CACHE_DIR": str(tmp_path)})

    assert app.config["FACEIT_API_KEY"] == "abc-123"
    assert app.config["CHALLENGERMODE_REFRESH_KEY"] is None


def test_quick_tournaments_are_configured(app):
    names = [t["name"] for t in app.config["QUICK_TOURNAMENTS"]]
    assert "Deildarkeppni RISI" in names


def test_unknown_route_returns_json_404(client):
    response = client.get("/no/such/page")
    assert response.status_code == 404
    assert response.get_json() == {"success": False, "error": "Page Not Found"}


def _failing_service(error):
    service = MagicMock()
    service.get_tournament.side_effect = error
    return service


def test_missing_faceit_key_returns_500(client, tournament):
    roster_client = MagicMock()
    roster_client.get_tournament.return_value = tournament
    service = IntelService(
        roster_client, StatsResolver(StatsClient(api_key=None), cache)
    )

    with patch("cs2intel.intel.routes.get_intel_service", return_value=service):
        response = client.get(f"/intel/{tournament.id}/alpha")

    assert response.status_code == 500
    assert response.get_json() == {
        "success": False,
        "error": "FACEIT_API_KEY not set",
    }


def test_upstream_error_returns_502(client):
    with patch(
        "cs2intel.main.routes.get_intel_service",
        return_value=_failing_service(UpstreamError("GraphQL errors: boom")),
    ):
        response = client.get("/tournaments/t1")

    assert response.status_code == 502
    assert response.get_json()["error"] == "GraphQL errors: boom"
