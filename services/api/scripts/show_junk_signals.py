#!/usr/bin/env python3
"""Print the learned junk signals the scanner is currently applying.

Loads the learned-signal cache once from junk_reports (same path the API
uses) and prints keyword / flagged-seller totals plus samples.

Run (local / Railway):
  cd services/api
  python -m scripts.show_junk_signals

Optional env vars:
  SHOW_LIMIT=50                      max keywords / sellers listed
  PREVIEW_TITLE="charizard proxy"    also score this title
  PREVIEW_SELLER="badseller99"       seller used with PREVIEW_TITLE
"""

import asyncio
import os
import sys


# Ensure imports work when executed as a script/module
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dealscan.services.junk_signals import JunkSignalService  # noqa: E402
from dealscan.settings import get_settings  # noqa: E402
from dealscan.stores.postgres import close_db, init_db, ping_db  # noqa: E402


async def main() -> None:
    await init_db()
    await ping_db()

    try:
        limit = int(os.getenv("SHOW_LIMIT", "50"))
        junk = JunkSignalService.from_settings(get_settings())
        if not await junk.refresh():
            print({"ok": False, "error": "could not load junk_reports (see logs)"})
            return

        signals = junk.cache.signals
        top_sellers = sorted(signals.seller_counts.items(), key=lambda kv: (-kv[1], kv[0]))[:limit]
        out: dict = {
            "ok": True,
            "keywords": len(signals.keywords),
            "flagged_sellers": len(signals.seller_counts),
            "keyword_sample": sorted(signals.keywords)[:limit],
            "top_sellers": [{"seller": s, "reports": c} for s, c in top_sellers],
        }

        title = os.getenv("PREVIEW_TITLE", "").strip()
        if title:
            score = await junk.score(title, os.getenv("PREVIEW_SELLER") or None)
            out["preview"] = {
                "title": title,
                "penalty": round(score.penalty, 4),
                "matched_keywords": score.matched_keywords,
                "seller_report_count": score.seller_report_count,
            }

        print(out)
    finally:
        await close_db()


if __name__ == "__main__":
    asyncio.run(main())
