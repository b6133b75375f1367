"""Shared fixtures: in-memory stores standing in for Postgres."""

import asyncio
from collections import Counter
from collections.abc import Iterable

import pytest

from dealscan.services.junk_cache import LearnedSignalCache
from dealscan.stores.catalog import CardVocabulary
from dealscan.stores.junk_reports import NewJunkReport


class StoreUnavailable(ConnectionError):
    pass


class InMemoryJunkReportStore:
    """JunkReportStore with the same aggregate semantics as the SQL queries."""

    def __init__(self) -> None:
        self.rows: dict[str, NewJunkReport] = {}
        self.fail_reads = False
        self.fail_writes = False
        self.read_delay = 0.0
        self.read_calls = 0
        # Read rows before read_delay, like a query that snapshots at start.
        self.snapshot_at_query_start = False

    def seed(self, deal_id: str, tokens: Iterable[str] = (), seller: str | None = None) -> None:
        self.rows[deal_id] = NewJunkReport(
            deal_id=deal_id,
            ebay_item_id=f"item-{deal_id}",
            ebay_title=" ".join(tokens),
            seller_name=seller,
            learned_tokens=tuple(tokens),
        )

    async def list_learned_tokens(self) -> list[str]:
        self.read_calls += 1
        if self.snapshot_at_query_start:
            tokens = self._tokens()
            await asyncio.sleep(self.read_delay)
            return tokens
        if self.read_delay:
            await asyncio.sleep(self.read_delay)
        return self._tokens()

    def _tokens(self) -> list[str]:
        if self.fail_reads:
            raise StoreUnavailable("junk_reports unavailable")
        return sorted({t for r in self.rows.values() for t in r.learned_tokens})

    async def list_seller_report_counts(self, threshold: int) -> dict[str, int]:
        if self.fail_reads:
            raise StoreUnavailable("junk_reports unavailable")
        counts = Counter(r.seller_name for r in self.rows.values() if r.seller_name)
        return {name: n for name, n in counts.items() if n >= threshold}

    async def insert_report(self, report: NewJunkReport) -> bool:
        if self.fail_writes:
            raise StoreUnavailable("junk_reports unavailable")
        if report.deal_id in self.rows:
            return False
        self.rows[report.deal_id] = report
        return True


class InMemoryCatalogStore:
    """CatalogStore over a dict of cards; name lookup is a lowercase substring match."""

    def __init__(self, cards: dict[str, CardVocabulary] | None = None, extra_names: Iterable[str] = ()) -> None:
        self.cards = dict(cards or {})
        self.names = [v.name for v in self.cards.values()] + list(extra_names)
        self.fail_card_lookup = False
        self.fail_name_lookup = False
        self.name_lookups: list[tuple[list[str], int]] = []

    async def get_card_vocabulary(self, card_id: str) -> CardVocabulary | None:
        if self.fail_card_lookup:
            raise StoreUnavailable("catalog unavailable")
        return self.cards.get(card_id)

    async def find_name_words(self, candidates: Iterable[str], limit: int) -> set[str]:
        candidates = list(candidates)
        self.name_lookups.append((candidates, limit))
        if self.fail_name_lookup:
            raise StoreUnavailable("catalog unavailable")
        hits = [n for n in self.names if any(c in n.lower() for c in candidates)][:limit]
        return {w for n in hits for w in n.lower().split()}


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


CHARIZARD_EX = CardVocabulary(name="Charizard ex", expansion_name="Obsidian Flames", expansion_code="OBF")


@pytest.fixture
def report_store() -> InMemoryJunkReportStore:
    return InMemoryJunkReportStore()


@pytest.fixture
def catalog() -> InMemoryCatalogStore:
    return InMemoryCatalogStore(
        cards={
            "sv3-125": CHARIZARD_EX,
            "base1-4": CardVocabulary(name="Charizard", expansion_name="Base Set", expansion_code="BS"),
        },
        extra_names=["Pikachu V", "Mewtwo GX", "Professor's Research"],
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(report_store: InMemoryJunkReportStore, clock: FakeClock) -> LearnedSignalCache:
    return LearnedSignalCache(report_store, refresh_interval=1800, seller_threshold=3, clock=clock)
