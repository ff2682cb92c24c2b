"""Pydantic models for API responses."""

from revenue_insights.app.api.models.customers import (
    CustomerReportResponse,
    CustomerRow,
    CustomerTableResponse,
    EvidenceRecord,
    SegmentSliceItem,
)

__all__ = [
    "CustomerRow",
    "CustomerTableResponse",
    "CustomerReportResponse",
    "EvidenceRecord",
    "SegmentSliceItem",
]
