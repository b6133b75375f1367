"""Learned junk scorer.

Soft confidence penalty for a candidate listing, built from two prongs:
1. Learned keywords: any title word found in the learned keyword set adds a
   flat penalty (once, regardless of how many keywords matched).
2. Seller reputation: sellers with enough junk reports get a penalty that
   grows with their report count, up to a cap.

The penalty is subtracted from the match confidence by the caller. It is
never a verdict: a strong independent match can always outweigh it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging

from dealscan.services.junk_cache import LearnedSignalCache, LearnedSignals
from dealscan.services.junk_tokens import tokenize_title
from dealscan.settings import Settings

logger = logging.getLogger("uvicorn.error")


@dataclass(frozen=True)
class JunkPenaltyConfig:
    learned_keyword_penalty: float = 0.15
    seller_penalty_threshold: int = 3
    seller_penalty_per_report: float = 0.05
    seller_penalty_cap: float = 0.20

    @classmethod
    def from_settings(cls, settings: Settings) -> JunkPenaltyConfig:
        return cls(
            learned_keyword_penalty=settings.junk_learned_keyword_penalty,
            seller_penalty_threshold=settings.junk_seller_penalty_threshold,
            seller_penalty_per_report=settings.junk_seller_penalty_per_report,
            seller_penalty_cap=settings.junk_seller_penalty_cap,
        )


@dataclass
class JunkScore:
    """Penalty plus the evidence behind it."""

    penalty: float = 0.0
    matched_keywords: list[str] = field(default_factory=list)
    # 0 if the seller is unknown or below the threshold
    seller_report_count: int = 0


def normalize_seller_name(seller_name: str | None) -> str | None:
    """Empty / whitespace-only seller names mean "no seller"."""
    if seller_name is None:
        return None
    s = seller_name.strip()
    return s or None


def seller_penalty(report_count: int, config: JunkPenaltyConfig) -> float:
    """Penalty for a seller with `report_count` junk reports (0 below the threshold)."""
    if report_count < config.seller_penalty_threshold:
        return 0.0
    over = report_count - config.seller_penalty_threshold + 1
    return min(config.seller_penalty_cap, over * config.seller_penalty_per_report)


def compute_junk_score(
    cleaned_title: str,
    seller_name: str | None,
    signals: LearnedSignals,
    config: JunkPenaltyConfig,
) -> JunkScore:
    """Score a title against a learned-signal snapshot (pure)."""
    result = JunkScore()

    if signals.keywords:
        result.matched_keywords = [w for w in tokenize_title(cleaned_title) if w in signals.keywords]
        if result.matched_keywords:
            result.penalty += config.learned_keyword_penalty

    seller = normalize_seller_name(seller_name)
    if seller is not None:
        count = signals.seller_counts.get(seller, 0)
        if count >= config.seller_penalty_threshold:
            result.seller_report_count = count
            result.penalty += seller_penalty(count, config)

    return result


async def score_junk_signals(
    cleaned_title: str,
    seller_name: str | None,
    *,
    cache: LearnedSignalCache,
    config: JunkPenaltyConfig | None = None,
) -> JunkScore:
    """Score a listing for learned junk signals.

    Never raises: on any internal failure the listing gets a zero penalty.

    Args:
        cleaned_title: Listing title (cleaned upstream).
        seller_name: Marketplace seller, if known.
        cache: Learned-signal cache (refreshed here when stale).
        config: Penalty weights.

    Returns:
        JunkScore with the penalty to subtract from the confidence composite.
    """
    config = config or JunkPenaltyConfig()
    try:
        await cache.ensure_fresh()
        result = compute_junk_score(cleaned_title, seller_name, cache.signals, config)
    except Exception:
        logger.exception("[junk] scoring failed, applying no penalty")
        return JunkScore()

    if result.penalty > 0:
        logger.debug(
            "[junk] penalty=%.2f keywords=%s seller=%s seller_reports=%s",
            result.penalty,
            result.matched_keywords,
            seller_name,
            result.seller_report_count,
        )
    return result
