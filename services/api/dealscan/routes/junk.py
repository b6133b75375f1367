"""Junk scorer endpoints.

POST /v1/junk-reports   - Record a reviewer junk report
GET  /v1/junk/score     - Preview the junk penalty for a title/seller
GET  /v1/junk/status    - Learned-signal cache status
POST /v1/junk/refresh   - Reload the learned-signal cache now

Routers are thin: call services for business logic.
"""

import logging

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from dealscan.schemas import (
    ErrorResponse,
    JunkReportRequest,
    JunkReportResponse,
    JunkScoreResponse,
    JunkStatusResponse,
)
from dealscan.services.junk_reports import JunkReportInput
from dealscan.services.junk_signals import JunkSignalService, get_junk_signals

router = APIRouter()
logger = logging.getLogger("uvicorn.error")


@router.post("/junk-reports", response_model=JunkReportResponse)
async def create_junk_report(
    request: JunkReportRequest,
    junk: JunkSignalService = Depends(get_junk_signals),
) -> JunkReportResponse:
    """Record a junk report for a deal.

    Reporting the same deal twice is a no-op (`created` is false).
    """
    recorded = await junk.record(
        JunkReportInput(
            deal_id=request.deal_id,
            ebay_item_id=request.ebay_item_id,
            ebay_title=request.ebay_title,
            seller_name=request.seller_name,
            card_id=request.card_id,
        ),
        refresh=request.refresh,
    )
    return JunkReportResponse(learned_tokens=recorded.learned_tokens, created=recorded.created)


@router.get("/junk/score", response_model=JunkScoreResponse)
async def get_junk_score(
    title: str = Query(
        description="Cleaned listing title",
        min_length=1,
        examples=["charizard ex 006/197 obsidian flames"],
    ),
    seller: str | None = Query(default=None, description="Marketplace seller name"),
    junk: JunkSignalService = Depends(get_junk_signals),
) -> JunkScoreResponse:
    result = await junk.score(title, seller)
    return JunkScoreResponse(
        penalty=result.penalty,
        matched_keywords=result.matched_keywords,
        seller_report_count=result.seller_report_count,
    )


@router.get("/junk/status", response_model=JunkStatusResponse)
async def get_junk_status(junk: JunkSignalService = Depends(get_junk_signals)) -> JunkStatusResponse:
    status = junk.status()
    return JunkStatusResponse(
        keyword_count=status.keyword_count,
        flagged_seller_count=status.flagged_seller_count,
        last_loaded_at=status.last_loaded_at,
        stale=status.stale,
    )


@router.post(
    "/junk/refresh",
    response_model=JunkStatusResponse,
    responses={503: {"model": ErrorResponse}},
)
async def refresh_junk_signals(junk: JunkSignalService = Depends(get_junk_signals)) -> JunkStatusResponse | JSONResponse:
    """Reload the learned-signal cache; 503 if the store is unavailable."""
    if not await junk.refresh():
        logger.warning("[junk] manual refresh failed")
        return JSONResponse(
            status_code=503,
            content=ErrorResponse.body("JUNK_STORE_UNAVAILABLE", "Junk report store unavailable"),
        )
    return await get_junk_status(junk)
