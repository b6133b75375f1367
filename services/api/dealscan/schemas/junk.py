"""Schemas for the junk scorer endpoints (/v1/junk-reports, /v1/junk/*)."""

from datetime import datetime

from pydantic import BaseModel, Field


class JunkReportRequest(BaseModel):
    """A reviewer flagging a deal as junk."""

    deal_id: str = Field(alias="dealId", min_length=1, max_length=100)
    ebay_item_id: str = Field(alias="ebayItemId", min_length=1, max_length=100)
    ebay_title: str = Field(alias="ebayTitle", min_length=1)
    seller_name: str | None = Field(alias="sellerName", default=None, max_length=200)
    card_id: str | None = Field(alias="cardId", default=None, max_length=100)
    # Wait for the learned-signal cache to reload before responding
    refresh: bool = False

    model_config = {"populate_by_name": True}


class JunkReportResponse(BaseModel):
    learned_tokens: list[str] = Field(alias="learnedTokens")
    created: bool

    model_config = {"populate_by_name": True}


class JunkScoreResponse(BaseModel):
    """Penalty to subtract from a listing's match confidence."""

    penalty: float = Field(ge=0)
    matched_keywords: list[str] = Field(alias="matchedKeywords")
    seller_report_count: int = Field(alias="sellerReportCount", ge=0)

    model_config = {"populate_by_name": True}


class JunkStatusResponse(BaseModel):
    keyword_count: int = Field(alias="keywordCount", ge=0)
    flagged_seller_count: int = Field(alias="flaggedSellerCount", ge=0)
    last_loaded_at: datetime | None = Field(alias="lastLoadedAt", default=None)
    stale: bool

    model_config = {"populate_by_name": True}
