"""Pydantic schemas for API request/response validation."""

from dealscan.schemas.common import ErrorDetail, ErrorResponse
from dealscan.schemas.junk import (
    JunkReportRequest,
    JunkReportResponse,
    JunkScoreResponse,
    JunkStatusResponse,
)

__all__ = [
    "ErrorDetail",
    "ErrorResponse",
    "JunkReportRequest",
    "JunkReportResponse",
    "JunkScoreResponse",
    "JunkStatusResponse",
]
