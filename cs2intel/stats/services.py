"""Cache-aside resolution of Steam64 ids to normalized FACEIT stats."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Iterable, Optional

from pydantic import ValidationError as PydanticValidationError

from cs2intel.cache import CacheCategory
from cs2intel.constants import PLAYER_CACHE_TTL, STATS_BATCH_SIZE
from cs2intel.errors import ConfigurationError, UpstreamError

from .models import PlayerStats

if TYPE_CHECKING:
    from cs2intel.cache import CacheManager

    from .client import StatsClient

logger = logging.getLogger(__name__)

# Cached for players without a FACEIT account, so they are not looked up again
NOT_FOUND_SENTINEL = {"not_found": True}


class LookupStatus(str, Enum):
    """Outcome of resolving one roster member to FACEIT stats."""

    OK = "ok"
    NOT_FOUND = "not_found"
    TRANSPORT_ERROR = "transport_error"
    UNRESOLVED = "unresolved"


@dataclass(frozen=True)
class StatsResult:
    """Stats for one identity, or why there are none."""

    status: LookupStatus
    stats: Optional[PlayerStats] = None
    detail: Optional[str] = None

    @classmethod
    def from_stats(cls, stats: Optional[PlayerStats]) -> StatsResult:
        if stats is None:
            return cls(LookupStatus.NOT_FOUND)
        return cls(LookupStatus.OK, stats=stats)

    @property
    def ok(self) -> bool:
        return self.status is LookupStatus.OK


def _cache_key(steam64_id: str) -> str:
    return f"steam_{steam64_id}"


class StatsResolver:
    """Resolves Steam64 ids to FACEIT stats, caching results per player."""

    def __init__(
        self,
        client: StatsClient,
        cache: CacheManager,
        ttl: int = PLAYER_CACHE_TTL,
        batch_size: int = STATS_BATCH_SIZE,
    ) -> None:
        self.client = client
        self.cache = cache
        self.ttl = ttl
        self.batch_size = batch_size

    async def get_stats(
        self, steam64_id: str, force_refresh: bool = False
    ) -> Optional[PlayerStats]:
        """Return stats for a player, or None if they have no FACEIT account.

        Upstream failures propagate as ``UpstreamError``.
        """
        key = _cache_key(steam64_id)

        if not force_refresh:
            cached = await asyncio.to_thread(
                self.cache.get, CacheCategory.PLAYERS, key
            )
            if cached == NOT_FOUND_SENTINEL:
                return None
            if cached is not None:
                try:
                    return PlayerStats.model_validate(cached)
                except PydanticValidationError as e:
                    logger.warning(f"Evicting unusable cache entry {key}: {e}")
                    await asyncio.to_thread(
                        self.cache.delete, CacheCategory.PLAYERS, key
                    )

        player = await asyncio.to_thread(self.client.find_player_by_steam_id, steam64_id)
        if player is None:
            await asyncio.to_thread(
                self.cache.set,
                CacheCategory.PLAYERS,
                key,
                NOT_FOUND_SENTINEL,
                self.ttl,
            )
            return None

        response = await asyncio.to_thread(self.client.get_player_stats, player.player_id)
        if response is None:
            logger.info(f"FACEIT player {player.nickname} has no CS2 stats")
            return None

        try:
            stats = PlayerStats.from_faceit(player, response)
        except ValueError as e:
            raise UpstreamError(
                f"Could not normalize stats for {player.nickname}: {e}"
            ) from e

        await asyncio.to_thread(
            self.cache.set,
            CacheCategory.PLAYERS,
            key,
            stats.model_dump(mode="json"),
            self.ttl,
        )
        return stats

    async def lookup(self, steam64_id: str, force_refresh: bool = False) -> StatsResult:
        """Like ``get_stats``, but upstream failures become a result.

        A ``ConfigurationError`` still propagates: it affects every player.
        """
        try:
            stats = await self.get_stats(steam64_id, force_refresh=force_refresh)
        except ConfigurationError:
            raise
        except Exception as e:
            logger.error(f"Failed to get stats for {steam64_id}: {e}")
            return StatsResult(LookupStatus.TRANSPORT_ERROR, detail=str(e))
        return StatsResult.from_stats(stats)

    async def get_stats_batch(
        self, steam64_ids: Iterable[str], force_refresh: bool = False
    ) -> dict[str, StatsResult]:
        """Resolve many players, ``batch_size`` at a time.

        Lookups inside a chunk run concurrently; chunks run one after another.
        One player's failure only affects that player's result.
        """
        ids = list(dict.fromkeys(steam64_ids))
        results: dict[str, StatsResult] = {}

        for start in range(0, len(ids), self.batch_size):
            chunk = ids[start : start + self.batch_size]
            chunk_results = await asyncio.gather(
                *(self.lookup(steam_id, force_refresh) for steam_id in chunk)
            )
            results.update(zip(chunk, chunk_results))

        return results
