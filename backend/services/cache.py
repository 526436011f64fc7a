"""In-memory cache for the upstream aggregate (homeList) document.

One fetch of the aggregate feeds the live, upcoming, series and news
resources. Entries older than the TTL are refreshed on the next read; if the
refresh fails the last good snapshot is served instead (stale-on-error).

Note: there is no lock and no request coalescing. Concurrent cache misses
may each hit the upstream and the last successful writer wins. Entries are
replaced whole and never mutated, so readers always see a complete snapshot.
Each uvicorn worker also keeps its own cache.
"""

import copy
import logging
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from errors import AggregateFetchError, UpstreamError

logger = logging.getLogger(__name__)

LIVE_MATCHES = "live_matches"
UPCOMING_MATCHES = "upcoming_matches"
SERIES_LIST = "series_list"
NEWS = "news"


@dataclass(frozen=True)
class CacheEntry:
    snapshot: dict
    fetched_at: float


class AggregateCache:
    def __init__(
        self,
        fetch: Callable[[], Awaitable[Any]],
        ttl_seconds: float = 60,
        clock: Callable[[], float] = time.monotonic,
        container_field: str = "data",
    ):
        self._fetch = fetch
        self._clock = clock
        self.ttl_seconds = ttl_seconds
        self.container_field = container_field
        self._entry: CacheEntry | None = None

    def _is_fresh(self, entry: CacheEntry) -> bool:
        return self._clock() - entry.fetched_at < self.ttl_seconds

    def _validate(self, snapshot: Any) -> dict:
        if not isinstance(snapshot, dict) or not isinstance(snapshot.get(self.container_field), dict):
            raise AggregateFetchError(f"aggregate response has no '{self.container_field}' object")
        return snapshot

    async def get_aggregate(self) -> dict:
        """Return the aggregate snapshot, refreshing it when older than the TTL.

        Raises AggregateFetchError only when nothing was ever cached and the
        current fetch fails too.
        """
        entry = self._entry
        if entry is not None and self._is_fresh(entry):
            return copy.deepcopy(entry.snapshot)

        try:
            snapshot = self._validate(await self._fetch())
        except (UpstreamError, AggregateFetchError) as e:
            if entry is None:
                raise AggregateFetchError(str(e), details=e.details) from e
            logger.warning(
                "Aggregate refresh failed, serving stale snapshot (age %.0fs): %s",
                self._clock() - entry.fetched_at,
                e,
            )
            return copy.deepcopy(entry.snapshot)

        self._entry = CacheEntry(snapshot=snapshot, fetched_at=self._clock())
        return copy.deepcopy(snapshot)

    async def project(self, field: str) -> list:
        """Return one named collection from the aggregate, or [] when absent."""
        snapshot = await self.get_aggregate()
        value = snapshot[self.container_field].get(field)
        return [] if value is None else value

    async def live_matches(self) -> list:
        return await self.project(LIVE_MATCHES)

    async def upcoming_matches(self) -> list:
        return await self.project(UPCOMING_MATCHES)

    async def series_list(self) -> list:
        return await self.project(SERIES_LIST)

    async def news(self) -> list:
        return await self.project(NEWS)

    def status(self) -> dict:
        """Cache metadata only: safe to expose in /health."""
        entry = self._entry
        if entry is None:
            return {"populated": False, "age_seconds": None, "fresh": False, "ttl_seconds": self.ttl_seconds}
        return {
            "populated": True,
            "age_seconds": round(self._clock() - entry.fetched_at, 1),
            "fresh": self._is_fresh(entry),
            "ttl_seconds": self.ttl_seconds,
        }
