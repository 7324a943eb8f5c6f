"""Intel blueprint: per-team scouting reports and head-to-head comparisons."""

from flask import Blueprint

bp = Blueprint("intel", __name__)

from . import routes  # noqa: E402, F401
from .models import Comparison, IntelReport, PlayerIntel, TeamIntel  # noqa: E402
from .services import IntelService  # noqa: E402

__all__ = [
    "Comparison",
    "IntelReport",
    "IntelService",
    "PlayerIntel",
    "TeamIntel",
    "routes",
]
