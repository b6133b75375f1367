"""Recording reviewer junk reports.

Flow:
1. Extract novel tokens from the reported title (catalog words removed).
2. Insert one junk_reports row per deal (duplicate deal -> no-op).
3. Invalidate the learned-signal cache so the next score reloads.

Store write failures propagate: losing a human-provided report is a bug, not
something to degrade around.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging

from dealscan.services.junk_cache import LearnedSignalCache
from dealscan.services.junk_scorer import normalize_seller_name
from dealscan.services.junk_tokens import DEFAULT_CATALOG_LOOKUP_LIMIT, extract_novel_tokens
from dealscan.stores.catalog import CatalogStore
from dealscan.stores.junk_reports import JunkReportStore, NewJunkReport

logger = logging.getLogger("uvicorn.error")


@dataclass(frozen=True)
class JunkReportInput:
    deal_id: str
    ebay_item_id: str
    ebay_title: str
    seller_name: str | None = None
    card_id: str | None = None


@dataclass(frozen=True)
class RecordedJunkReport:
    learned_tokens: list[str]
    # False when the deal had already been reported
    created: bool


async def record_junk_report(
    report: JunkReportInput,
    *,
    store: JunkReportStore,
    catalog: CatalogStore,
    cache: LearnedSignalCache,
    lookup_limit: int = DEFAULT_CATALOG_LOOKUP_LIMIT,
    refresh: bool = False,
) -> RecordedJunkReport:
    """Record a junk report and make its evidence visible to the scorer.

    Args:
        report: Reported deal.
        store: Junk report persistence.
        catalog: Catalog queries for token extraction.
        cache: Learned-signal cache to invalidate.
        lookup_limit: Max catalog names scanned during extraction.
        refresh: Await the cache reload before returning (read-after-write).

    Returns:
        The learned tokens and whether a new row was written.
    """
    learned_tokens = await extract_novel_tokens(
        report.ebay_title.lower(),
        report.card_id or None,
        catalog=catalog,
        lookup_limit=lookup_limit,
    )
    seller = normalize_seller_name(report.seller_name)

    created = await store.insert_report(
        NewJunkReport(
            deal_id=report.deal_id,
            ebay_item_id=report.ebay_item_id,
            ebay_title=report.ebay_title,
            seller_name=seller,
            learned_tokens=tuple(learned_tokens),
        )
    )

    logger.info(
        "[junk] report recorded deal_id=%s seller=%s created=%s learned_tokens=%s",
        report.deal_id,
        seller,
        created,
        learned_tokens,
    )

    cache.invalidate()
    if refresh:
        await cache.ensure_fresh()

    return RecordedJunkReport(learned_tokens=learned_tokens, created=created)
