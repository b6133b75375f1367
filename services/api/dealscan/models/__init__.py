"""SQLAlchemy ORM models.

Models represent database tables:
- expansions: Card sets from the synced catalog (read-only here)
- cards: Catalog cards (read-only here)
- junk_reports: Reviewer junk reports with learned tokens
"""

from dealscan.models.catalog import Card, Expansion
from dealscan.models.junk_report import JunkReport

__all__ = ["Card", "Expansion", "JunkReport"]
