"""Novel token extraction for junk reports.

When a reviewer flags a listing as junk, the words of its title that are NOT
generic marketplace vocabulary, numbers, or catalog vocabulary are "learned"
and later matched against new listings.

Important:
- Tokens are exact lowercase whitespace-split words (no stemming, no regex).
- Catalog words are excluded so that a mismatch about the *wrong* card never
  teaches the scorer to penalize a legitimate card name.
- Catalog lookups are best-effort: a failed lookup yields a noisier token set,
  never a failed report.
"""

from __future__ import annotations

import logging
import re

from dealscan.stores.catalog import CatalogStore

logger = logging.getLogger("uvicorn.error")

MIN_TOKEN_LENGTH = 3
DEFAULT_CATALOG_LOOKUP_LIMIT = 500

# Card numbers, prices, quantities: "006/197", "123", "45.67", "10-20"
_NUMERIC_RE = re.compile(r"^\d+([/.-]\d+)?$")


STOP_WORDS: frozenset[str] = frozenset(
    {
        # Generic listing words
        "pokemon",
        "pokémon",
        "card",
        "cards",
        "tcg",
        "trading",
        "game",
        # Condition grades
        "mint",
        "near",
        "lightly",
        "moderately",
        "heavily",
        "played",
        "damaged",
        "nm",
        "lp",
        "mp",
        "hp",
        "dm",
        # Grading companies
        "psa",
        "cgc",
        "bgs",
        "ace",
        "graded",
        # Rarity / variant adjectives
        "holo",
        "holofoil",
        "holographic",
        "reverse",
        "full",
        "art",
        "rare",
        "ultra",
        "secret",
        "amazing",
        "radiant",
        "illustration",
        "special",
        "ex",
        "gx",
        "vmax",
        "vstar",
        "v",
        "tag",
        "team",
        "mega",
        "break",
        "trainer",
        "gallery",
        "promo",
        # Shipping / generic product words
        "free",
        "postage",
        "shipping",
        "uk",
        "p&p",
        "post",
        "delivery",
        "new",
        "sealed",
        "pack",
        "fresh",
    }
)


def tokenize_title(title: str) -> list[str]:
    """Lowercase and whitespace-split a title."""
    return title.lower().split()


def is_numeric_token(token: str) -> bool:
    return bool(_NUMERIC_RE.match(token))


async def extract_novel_tokens(
    cleaned_title: str,
    card_id: str | None,
    *,
    catalog: CatalogStore,
    stop_words: frozenset[str] = STOP_WORDS,
    lookup_limit: int = DEFAULT_CATALOG_LOOKUP_LIMIT,
) -> list[str]:
    """Extract the junk-specific words of a reported title.

    Args:
        cleaned_title: Listing title (cleaned upstream).
        card_id: Catalog id the listing was matched to, if any.
        catalog: Read-only catalog queries.
        stop_words: Static vocabulary never learned.
        lookup_limit: Max catalog names scanned by the broad name lookup.

    Returns:
        Surviving tokens in first-seen order (duplicates kept).
    """
    candidates = [
        w
        for w in tokenize_title(cleaned_title)
        if len(w) >= MIN_TOKEN_LENGTH and w not in stop_words and not is_numeric_token(w)
    ]
    if not candidates:
        return []

    catalog_words = await _catalog_exclusions(candidates, card_id, catalog=catalog, lookup_limit=lookup_limit)
    return [w for w in candidates if w not in catalog_words]


async def _catalog_exclusions(
    candidates: list[str],
    card_id: str | None,
    *,
    catalog: CatalogStore,
    lookup_limit: int,
) -> set[str]:
    words: set[str] = set()

    if card_id:
        try:
            vocab = await catalog.get_card_vocabulary(card_id)
        except Exception:
            logger.warning(f"[junk] catalog card lookup failed card_id={card_id}", exc_info=True)
        else:
            if vocab is not None:
                words |= vocab.words()

    remaining = [w for w in dict.fromkeys(candidates) if w not in words]
    if remaining:
        try:
            words |= await catalog.find_name_words(remaining, lookup_limit)
        except Exception:
            logger.warning("[junk] catalog name lookup failed, learning without it", exc_info=True)

    return words
