"""Learned-signal cache for the junk scorer.

Holds an immutable snapshot of:
- every distinct learned token across junk reports
- seller -> report count, only for sellers at or above the penalty threshold

The snapshot is rebuilt wholesale from the report store and swapped by
reference, so readers see either the old or the new snapshot, never a mix.
Reload attempts are serialized: callers that find the cache stale while a
reload is running wait for it and reuse its outcome.

Failure policy: a failed or timed-out reload keeps the previous snapshot and
leaves the cache stale, so the next access retries.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
import logging
import time
from types import MappingProxyType

from dealscan.stores.junk_reports import JunkReportStore

logger = logging.getLogger("uvicorn.error")

DEFAULT_REFRESH_INTERVAL_SECONDS = 30 * 60
DEFAULT_SELLER_PENALTY_THRESHOLD = 3
DEFAULT_QUERY_TIMEOUT_SECONDS = 10.0


@dataclass(frozen=True)
class LearnedSignals:
    """Immutable snapshot read by the scorer."""

    keywords: frozenset[str] = frozenset()
    seller_counts: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}))
    loaded_at: datetime | None = None


EMPTY_SIGNALS = LearnedSignals()


class LearnedSignalCache:
    def __init__(
        self,
        store: JunkReportStore,
        *,
        refresh_interval: float = DEFAULT_REFRESH_INTERVAL_SECONDS,
        seller_threshold: int = DEFAULT_SELLER_PENALTY_THRESHOLD,
        query_timeout: float = DEFAULT_QUERY_TIMEOUT_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._store = store
        self._refresh_interval = refresh_interval
        self._seller_threshold = seller_threshold
        self._query_timeout = query_timeout
        self._clock = clock

        self._signals = EMPTY_SIGNALS
        # None means "never loaded or invalidated": the next access reloads.
        self._last_refreshed_at: float | None = None
        self._invalidations = 0
        self._reload_completions = 0
        self._last_reload_ok = False
        self._reload_lock = asyncio.Lock()

    @property
    def signals(self) -> LearnedSignals:
        return self._signals

    @property
    def refresh_interval(self) -> float:
        return self._refresh_interval

    def is_stale(self) -> bool:
        if self._last_refreshed_at is None:
            return True
        return self._clock() - self._last_refreshed_at > self._refresh_interval

    def invalidate(self) -> None:
        """Force the next `ensure_fresh()` to reload."""
        self._invalidations += 1
        self._last_refreshed_at = None

    async def ensure_fresh(self) -> bool:
        """Reload if the snapshot is older than the refresh interval.

        Returns:
            False if a due reload could not refresh the cache.
        """
        if not self.is_stale():
            return True

        completions = self._reload_completions
        async with self._reload_lock:
            if self._reload_completions != completions:
                # Another caller reloaded while we were waiting. Reuse its outcome
                # unless a report invalidated the cache after that reload began.
                if not self.is_stale():
                    return True
                if not self._last_reload_ok:
                    return False
            return await self._reload_locked()

    async def reload(self) -> bool:
        """Rebuild the snapshot from the store unconditionally.

        Returns:
            True on success; False if the store failed (previous snapshot kept).
        """
        async with self._reload_lock:
            return await self._reload_locked()

    async def _reload_locked(self) -> bool:
        ok = False
        try:
            ok = await self._load_snapshot()
            return ok
        finally:
            self._last_reload_ok = ok
            self._reload_completions += 1

    async def _load_snapshot(self) -> bool:
        invalidations = self._invalidations

        try:
            tokens = await asyncio.wait_for(
                self._store.list_learned_tokens(),
                timeout=self._query_timeout,
            )
            seller_rows = await asyncio.wait_for(
                self._store.list_seller_report_counts(self._seller_threshold),
                timeout=self._query_timeout,
            )
            keywords = frozenset(str(t).lower() for t in tokens if t)
            seller_counts = {
                str(name): int(count)
                for name, count in seller_rows.items()
                if name and int(count) >= self._seller_threshold
            }
        except Exception:
            # junk_reports may not exist yet during the first migration run.
            logger.warning("[junk] could not refresh learned-signal cache, keeping previous snapshot", exc_info=True)
            return False

        self._signals = LearnedSignals(
            keywords=keywords,
            seller_counts=MappingProxyType(seller_counts),
            loaded_at=datetime.now(timezone.utc),
        )

        # A report recorded mid-reload may not be in this snapshot; stay stale.
        if invalidations == self._invalidations:
            self._last_refreshed_at = self._clock()

        logger.info(
            "[junk] learned-signal cache refreshed keywords=%s flagged_sellers=%s",
            len(keywords),
            len(seller_counts),
        )
        return True


async def run_periodic_refresh(cache: LearnedSignalCache, interval: float | None = None) -> None:
    """Reload the cache every `interval` seconds until cancelled."""
    period = interval if interval is not None else cache.refresh_interval
    while True:
        await asyncio.sleep(period)
        await cache.reload()
