"""Routes for the main blueprint."""

from __future__ import annotations

from typing import Any

from flask import current_app, jsonify, redirect, url_for

from cs2intel.constants import CS2_MAPS
from cs2intel.intel.services import get_intel_service

from . import bp
from .forms import TournamentLookupForm


@bp.route("/", methods=["GET", "POST"])
def index() -> Any:
    """Landing endpoint; POSTing the lookup form opens a tournament."""
    form = TournamentLookupForm()
    if form.validate_on_submit():
        return redirect(
            url_for(".view_tournament", tournament_id=form.tournament_id)
        )

    if form.errors:
        return jsonify({"success": False, "errors": form.errors}), 400

    return jsonify(
        {
            "quick_tournaments": current_app.config["QUICK_TOURNAMENTS"],
            "map_pool": list(CS2_MAPS),
        }
    )


@bp.route("/tournaments/<string:tournament_id>", methods=["GET"])
async def view_tournament(tournament_id: str) -> Any:
    """List the lineups registered for a tournament."""
    tournament = await get_intel_service().get_tournament(tournament_id)
    lineups = tournament.all_lineups()

    return jsonify(
        {
            "id": tournament.id,
            "name": tournament.name,
            "state": tournament.state,
            "lineups": [
                {
                    "id": lineup.id,
                    "name": lineup.name,
                    "member_count": len(lineup.members),
                    "captain": next(
                        (m.username for m in lineup.members if m.captain), None
                    ),
                }
                for lineup in lineups
            ],
        }
    )
