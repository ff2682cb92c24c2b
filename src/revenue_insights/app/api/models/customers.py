"""Pydantic models for customer-related API responses."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class CustomerRow(BaseModel):
    """One row of the customer table."""

    customer_id: str
    cluster_label: str = Field(..., description="High/Mixed/Low/Unclassified")
    total_revenue: float
    rank_in_cluster: int
    purchasing_frequency: float
    detail_path: str = Field(..., description="Route of the customer detail view")


class SegmentSliceItem(BaseModel):
    name: str
    index: int = Field(..., description="Position among visible segments")
    customer_count: int


class DashboardSummaryModel(BaseModel):
    customer_count: int
    total_revenue: float
    active_segment: str | None = None


class CustomerTableResponse(BaseModel):
    """Response for the customer list endpoint."""

    rows: list[CustomerRow]
    total: int = Field(..., description="Rows matching the active filter, before pagination")
    page: int
    page_size: int
    is_empty: bool
    segments: list[SegmentSliceItem]
    summary: DashboardSummaryModel


class RevenuePointModel(BaseModel):
    period_key: str
    value: float


class RevenueTotalsModel(BaseModel):
    total: float
    latest: float
    previous: float
    delta_abs: float
    delta_pct: float


class TrendModel(BaseModel):
    classification: str = Field(..., description="IMPROVING/DECLINING/STABLE")
    delta: float
    rule_id: str
    window_size: int


class InsightModel(BaseModel):
    churn_decision: str
    retention_strategy: str
    offer: str
    observation: str
    recommendations: list[str] = Field(default_factory=list)
    source: str = Field(..., description="OVERRIDE/HEURISTIC")
    rule_id: str


class EvidenceRecord(BaseModel):
    evidence_id: str
    rule_ids: list[str]
    thresholds: dict[str, Any] = Field(default_factory=dict)
    references: dict[str, Any] = Field(default_factory=dict)
    observed_at: datetime = Field(..., description="ISO timestamp")


class PriceSuggestionModel(BaseModel):
    material: str
    current_price: float
    suggested_price: float
    discount: str


class NoteModel(BaseModel):
    key: str
    value: str


class CustomerReportResponse(BaseModel):
    """Detail report for one customer."""

    customer_id: str
    cluster_label: str
    total_revenue: float
    churn_label: str | None = None
    product_combination: str | None = None
    purchase_details: str | None = None
    revenue_by_quarter: list[RevenuePointModel]
    revenue_by_year: list[RevenuePointModel]
    totals: RevenueTotalsModel
    trend: TrendModel
    insight: InsightModel
    evidence: EvidenceRecord
    price_suggestions: list[PriceSuggestionModel] = Field(default_factory=list)
    observations: list[NoteModel] = Field(default_factory=list)
    recommendations: list[NoteModel] = Field(default_factory=list)
