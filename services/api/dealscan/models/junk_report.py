"""Junk reports filed by reviewers.

One row per deal. Rows are append-only: the learned tokens are computed once,
at report time, and the scorer only ever reads their aggregate (distinct
tokens + per-seller counts).
"""

from datetime import datetime

from sqlalchemy import DateTime, String, Text, func
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.orm import Mapped, mapped_column

from dealscan.stores.postgres import Base


class JunkReport(Base):
    __tablename__ = "junk_reports"

    id: Mapped[int] = mapped_column(primary_key=True)

    # Deal the reviewer flagged; a deal can be reported only once
    deal_id: Mapped[str] = mapped_column(String(100), unique=True, index=True)

    # Marketplace listing
    ebay_item_id: Mapped[str] = mapped_column(String(100), index=True)
    ebay_title: Mapped[str] = mapped_column(Text)
    seller_name: Mapped[str | None] = mapped_column(String(200), index=True)

    # Novel tokens extracted from the title (lowercase, may be empty)
    learned_tokens: Mapped[list[str]] = mapped_column(
        ARRAY(Text),
        default=list,
        server_default="{}",
    )

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self) -> str:
        return f"<JunkReport deal={self.deal_id} seller={self.seller_name}>"
