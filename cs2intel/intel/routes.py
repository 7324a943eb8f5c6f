"""Routes for the intel blueprint."""

from __future__ import annotations

from typing import Any

from flask import current_app, jsonify, request

from cs2intel.constants import CS2_MAPS, TOP_N_PLAYERS

from . import bp
from .aggregation import map_aggregates, map_stats_for_team, player_threats
from .services import get_intel_service

TRUTHY_ARGS = ("1", "true", "yes")


def _force_refresh() -> bool:
    """Whether the request asked to bypass cached player stats (``?refresh=1``)."""
    return request.args.get("refresh", "").lower() in TRUTHY_ARGS


@bp.route("/intel/<string:tournament_id>/<string:lineup_id>", methods=["GET"])
async def view_intel(tournament_id: str, lineup_id: str) -> Any:
    """Scouting report for one lineup; ``?refresh=1`` refetches player stats."""
    service = get_intel_service()
    tournament = await service.get_tournament(tournament_id)
    report = await service.build_report(tournament, lineup_id, _force_refresh())
    team = report.team

    other_teams = sorted(
        (
            {"id": lineup.id, "name": lineup.name}
            for lineup in tournament.all_lineups()
            if lineup.id != lineup_id
        ),
        key=lambda t: t["name"].lower(),
    )

    current_app.logger.info(
        f"Built intel report {report.id} for {team.team_name} "
        f"({len(team.players)} players)"
    )
    return jsonify(
        {
            "report": report.to_dict(),
            "avg_elo": team.average_elo(),
            "map_stats": [entry.to_dict() for entry in map_aggregates(team)],
            "threats": player_threats(team),
            "other_teams": other_teams,
        }
    )


@bp.route("/intel/<string:tournament_id>/<string:lineup_id>/maps/<string:map_name>")
async def view_map_breakdown(tournament_id: str, lineup_id: str, map_name: str) -> Any:
    """Per-player records of one lineup on a single map."""
    report = await get_intel_service().generate_report(
        tournament_id, lineup_id, _force_refresh()
    )
    rows = [
        {
            "player": player.display_name,
            "elo": player.elo,
            "stats": record.model_dump() if record else None,
        }
        for player, record in map_stats_for_team(report.team, map_name)
    ]
    return jsonify({"map_name": map_name, "players": rows})


@bp.route(
    "/compare/<string:tournament_id>/<string:team1_id>/<string:team2_id>",
    methods=["GET"],
)
async def compare_teams(tournament_id: str, team1_id: str, team2_id: str) -> Any:
    """Compare two lineups map by map; ``?mode=top5`` uses the top five players."""
    top_n = TOP_N_PLAYERS if request.args.get("mode") == "top5" else None
    comparison = await get_intel_service().generate_comparison(
        tournament_id,
        team1_id,
        team2_id,
        top_n=top_n,
        force_refresh=_force_refresh(),
    )
    return jsonify({"maps_pool": list(CS2_MAPS), **comparison.to_dict()})
