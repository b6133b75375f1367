"""Read-only catalog queries used by junk token extraction.

Only two questions are asked of the catalog:
- which words name a specific card and its expansion (by card id)
- which words appear in card names containing a given candidate token

Card vocabulary by id is cached in Redis; Redis being down only costs a query.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Protocol

from redis.exceptions import RedisError
from sqlalchemy import func, or_, select

from dealscan.models import Card, Expansion
from dealscan.stores.postgres import SessionFactory, get_session
from dealscan.stores.redis import get_catalog_vocabulary_cache, set_catalog_vocabulary_cache


@dataclass(frozen=True)
class CardVocabulary:
    name: str
    expansion_name: str | None = None
    expansion_code: str | None = None

    def words(self) -> set[str]:
        """Lowercase words of the card name, expansion name and expansion code."""
        out = set(self.name.lower().split())
        if self.expansion_name:
            out.update(self.expansion_name.lower().split())
        if self.expansion_code:
            out.add(self.expansion_code.lower())
        return out


class CatalogStore(Protocol):
    async def get_card_vocabulary(self, card_id: str) -> CardVocabulary | None: ...

    async def find_name_words(self, candidates: Iterable[str], limit: int) -> set[str]: ...


class PostgresCatalogStore:
    """CatalogStore backed by the synced `cards` / `expansions` tables."""

    def __init__(self, session_factory: SessionFactory = get_session, *, use_cache: bool = True) -> None:
        self._session_factory = session_factory
        self._use_cache = use_cache

    async def get_card_vocabulary(self, card_id: str) -> CardVocabulary | None:
        if self._use_cache:
            cached = await _try_get_cached_vocabulary(card_id)
            if cached is not None:
                return cached

        async with self._session_factory() as session:
            res = await session.execute(
                select(Card.name, Expansion.name, Expansion.code)
                .outerjoin(Expansion, Expansion.scrydex_id == Card.expansion_id)
                .where(Card.scrydex_card_id == card_id)
            )
            row = res.first()

        if row is None:
            return None

        vocab = CardVocabulary(name=row[0], expansion_name=row[1], expansion_code=row[2])
        if self._use_cache:
            await _try_set_cached_vocabulary(card_id, vocab)
        return vocab

    async def find_name_words(self, candidates: Iterable[str], limit: int) -> set[str]:
        """Return every word of card names containing any candidate (bounded by `limit` names)."""
        patterns = [c for c in dict.fromkeys(candidates) if c]
        if not patterns:
            return set()

        lowered = func.lower(Card.name)
        async with self._session_factory() as session:
            res = await session.execute(
                select(Card.name)
                .where(or_(*[lowered.contains(p, autoescape=True) for p in patterns]))
                .distinct()
                .limit(limit)
            )
            names = res.scalars().all()

        words: set[str] = set()
        for name in names:
            words.update(str(name).lower().split())
        return words


async def _try_get_cached_vocabulary(card_id: str) -> CardVocabulary | None:
    try:
        payload = await get_catalog_vocabulary_cache(card_id)
    except (RuntimeError, RedisError):
        return None
    if not payload:
        return None

    name = payload.get("name")
    if not isinstance(name, str) or not name:
        return None
    return CardVocabulary(
        name=name,
        expansion_name=payload.get("expansion_name") or None,
        expansion_code=payload.get("expansion_code") or None,
    )


async def _try_set_cached_vocabulary(card_id: str, vocab: CardVocabulary) -> None:
    payload: dict[str, Any] = {
        "name": vocab.name,
        "expansion_name": vocab.expansion_name,
        "expansion_code": vocab.expansion_code,
    }
    try:
        await set_catalog_vocabulary_cache(card_id, payload)
    except (RuntimeError, RedisError):
        # Redis may be unavailable in tests/local minimal env.
        return
