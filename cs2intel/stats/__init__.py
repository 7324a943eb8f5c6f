"""FACEIT stats service: player lookup, map stats and the cached resolver."""

from .client import StatsClient
from .models import MapStatRecord, PlayerStats
from .services import LookupStatus, StatsResolver, StatsResult

__all__ = [
    "LookupStatus",
    "MapStatRecord",
    "PlayerStats",
    "StatsClient",
    "StatsResolver",
    "StatsResult",
]
