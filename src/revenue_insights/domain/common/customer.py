from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from revenue_insights.domain.common.ids import CustomerId
from revenue_insights.domain.common.revenue import RevenuePoint

# Cluster labels
CLUSTER_HIGH = "High"
CLUSTER_MIXED = "Mixed"
CLUSTER_LOW = "Low"
CLUSTER_UNCLASSIFIED = "Unclassified"

CLUSTER_LABELS = (CLUSTER_HIGH, CLUSTER_MIXED, CLUSTER_LOW)


@dataclass(frozen=True)
class InsightPayload:
    churn_decision: str
    retention_strategy: str
    offer: str
    observation: str
    recommendations: tuple[str, ...] = ()


@dataclass(frozen=True)
class PriceSuggestion:
    material: str
    current_price: float
    suggested_price: float
    discount: str


@dataclass(frozen=True)
class KeyValueNote:
    key: str
    value: str


@dataclass(frozen=True)
class Customer:
    customer_id: CustomerId
    cluster_label: str
    total_revenue: float
    rank_in_cluster: int = 0
    purchasing_frequency: float = 0.0
    revenue_by_quarter: tuple[RevenuePoint, ...] = ()
    revenue_by_year: tuple[RevenuePoint, ...] = ()
    insight_override: Optional[InsightPayload] = None
    # Detail-only fields
    churn_label: Optional[str] = None
    product_combination: Optional[str] = None
    purchase_details: Optional[str] = None
    price_suggestions: tuple[PriceSuggestion, ...] = ()
    observations: tuple[KeyValueNote, ...] = ()
    recommendations: tuple[KeyValueNote, ...] = ()
