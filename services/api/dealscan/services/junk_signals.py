"""Process-wide wiring of the learned junk scorer.

One `JunkSignalService` is built at startup and owns the learned-signal cache.
The scanning pipeline and the HTTP routes go through it; tests build one on
in-memory stores.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from datetime import datetime
import logging

from fastapi import Request

from dealscan.services.junk_cache import LearnedSignalCache, run_periodic_refresh
from dealscan.services.junk_reports import JunkReportInput, RecordedJunkReport, record_junk_report
from dealscan.services.junk_scorer import JunkPenaltyConfig, JunkScore, score_junk_signals
from dealscan.settings import Settings, get_settings
from dealscan.stores.catalog import CatalogStore, PostgresCatalogStore
from dealscan.stores.junk_reports import JunkReportStore, PostgresJunkReportStore

logger = logging.getLogger("uvicorn.error")


@dataclass(frozen=True)
class JunkSignalStatus:
    keyword_count: int
    flagged_seller_count: int
    last_loaded_at: datetime | None
    stale: bool


class JunkSignalService:
    def __init__(
        self,
        *,
        store: JunkReportStore,
        catalog: CatalogStore,
        cache: LearnedSignalCache,
        config: JunkPenaltyConfig,
        lookup_limit: int,
    ) -> None:
        self.store = store
        self.catalog = catalog
        self.cache = cache
        self.config = config
        self.lookup_limit = lookup_limit
        self._refresh_task: asyncio.Task[None] | None = None

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        store: JunkReportStore | None = None,
        catalog: CatalogStore | None = None,
    ) -> JunkSignalService:
        store = store or PostgresJunkReportStore()
        config = JunkPenaltyConfig.from_settings(settings)
        cache = LearnedSignalCache(
            store,
            refresh_interval=settings.junk_refresh_interval_seconds,
            seller_threshold=config.seller_penalty_threshold,
            query_timeout=settings.junk_store_query_timeout_seconds,
        )
        return cls(
            store=store,
            catalog=catalog or PostgresCatalogStore(),
            cache=cache,
            config=config,
            lookup_limit=settings.junk_catalog_lookup_limit,
        )

    async def score(self, cleaned_title: str, seller_name: str | None) -> JunkScore:
        return await score_junk_signals(cleaned_title, seller_name, cache=self.cache, config=self.config)

    async def record(self, report: JunkReportInput, *, refresh: bool = False) -> RecordedJunkReport:
        return await record_junk_report(
            report,
            store=self.store,
            catalog=self.catalog,
            cache=self.cache,
            lookup_limit=self.lookup_limit,
            refresh=refresh,
        )

    async def refresh(self) -> bool:
        return await self.cache.reload()

    def status(self) -> JunkSignalStatus:
        signals = self.cache.signals
        return JunkSignalStatus(
            keyword_count=len(signals.keywords),
            flagged_seller_count=len(signals.seller_counts),
            last_loaded_at=signals.loaded_at,
            stale=self.cache.is_stale(),
        )

    async def start(self, *, background_refresh: bool = True) -> None:
        """Warm the cache and optionally start the periodic reload loop."""
        await self.cache.ensure_fresh()
        if background_refresh and self._refresh_task is None:
            self._refresh_task = asyncio.create_task(run_periodic_refresh(self.cache))

    async def stop(self) -> None:
        if self._refresh_task is None:
            return
        self._refresh_task.cancel()
        try:
            await self._refresh_task
        except asyncio.CancelledError:
            pass
        self._refresh_task = None


def get_junk_signals(request: Request) -> JunkSignalService:
    """FastAPI dependency: the service built at startup (lazily if lifespan did not run)."""
    service = getattr(request.app.state, "junk_signals", None)
    if service is None:
        service = JunkSignalService.from_settings(get_settings())
        request.app.state.junk_signals = service
    return service
