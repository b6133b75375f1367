"""Persistence for junk reports.

The scoring side only needs two aggregates (distinct learned tokens, seller
report counts); the recording side only appends. Both go through the narrow
`JunkReportStore` interface so services can run against an in-memory fake.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Protocol

from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert as pg_insert

from dealscan.models import JunkReport
from dealscan.stores.postgres import SessionFactory, get_session


@dataclass(frozen=True)
class NewJunkReport:
    """A junk report ready to be persisted."""

    deal_id: str
    ebay_item_id: str
    ebay_title: str
    seller_name: str | None
    learned_tokens: Sequence[str] = field(default_factory=tuple)


class JunkReportStore(Protocol):
    async def list_learned_tokens(self) -> list[str]: ...

    async def list_seller_report_counts(self, threshold: int) -> dict[str, int]: ...

    async def insert_report(self, report: NewJunkReport) -> bool: ...


class PostgresJunkReportStore:
    """JunkReportStore backed by the `junk_reports` table."""

    def __init__(self, session_factory: SessionFactory = get_session) -> None:
        self._session_factory = session_factory

    async def list_learned_tokens(self) -> list[str]:
        """Distinct union of learned tokens across all reports."""
        token = func.unnest(JunkReport.learned_tokens).label("token")
        async with self._session_factory() as session:
            res = await session.execute(select(token).distinct())
            return [str(t) for t in res.scalars().all() if t]

    async def list_seller_report_counts(self, threshold: int) -> dict[str, int]:
        """Report counts per seller, only for sellers with at least `threshold` reports."""
        cnt = func.count().label("cnt")
        async with self._session_factory() as session:
            res = await session.execute(
                select(JunkReport.seller_name, cnt)
                .where(JunkReport.seller_name.is_not(None))
                .where(JunkReport.seller_name != "")
                .group_by(JunkReport.seller_name)
                .having(func.count() >= threshold)
            )
            return {str(name): int(count) for name, count in res.all()}

    async def insert_report(self, report: NewJunkReport) -> bool:
        """Insert a report; returns False when the deal was already reported (no-op)."""
        stmt = (
            pg_insert(JunkReport)
            .values(
                deal_id=report.deal_id,
                ebay_item_id=report.ebay_item_id,
                ebay_title=report.ebay_title,
                seller_name=report.seller_name,
                learned_tokens=list(report.learned_tokens),
            )
            .on_conflict_do_nothing(index_elements=[JunkReport.deal_id])
        )
        async with self._session_factory() as session:
            res = await session.execute(stmt)
            return (res.rowcount or 0) > 0
