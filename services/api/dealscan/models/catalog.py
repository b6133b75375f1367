"""Card catalog models.

The catalog (expansions + cards) is synced from the upstream card database by
a separate job. The scanner only reads it.

Example: card "Charizard ex" (scrydex_card_id "sv3-125") in expansion
"Obsidian Flames" (code "OBF").
"""

from datetime import date, datetime

from sqlalchemy import Date, DateTime, ForeignKey, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from dealscan.stores.postgres import Base


class Expansion(Base):
    """Expansion (set) a card belongs to."""

    __tablename__ = "expansions"

    id: Mapped[int] = mapped_column(primary_key=True)

    # Upstream identifier (e.g., "sv3")
    scrydex_id: Mapped[str] = mapped_column(String(100), unique=True, index=True)

    name: Mapped[str] = mapped_column(Text)  # e.g., "Obsidian Flames"
    code: Mapped[str | None] = mapped_column(String(20))  # e.g., "OBF"
    series: Mapped[str | None] = mapped_column(String(100))
    release_date: Mapped[date | None] = mapped_column(Date)

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )

    def __repr__(self) -> str:
        return f"<Expansion {self.scrydex_id} {self.name}>"


class Card(Base):
    """Single catalog card."""

    __tablename__ = "cards"

    id: Mapped[int] = mapped_column(primary_key=True)

    # Upstream identifier used by the matcher (e.g., "sv3-125")
    scrydex_card_id: Mapped[str] = mapped_column(String(100), unique=True, index=True)

    name: Mapped[str] = mapped_column(Text, index=True)  # e.g., "Charizard ex"
    number: Mapped[str | None] = mapped_column(String(20))  # e.g., "125"
    rarity: Mapped[str | None] = mapped_column(String(100))

    expansion_id: Mapped[str | None] = mapped_column(
        ForeignKey("expansions.scrydex_id", ondelete="CASCADE"),
        index=True,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )

    def __repr__(self) -> str:
        return f"<Card {self.scrydex_card_id} {self.name}>"
