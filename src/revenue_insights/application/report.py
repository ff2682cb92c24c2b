from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from revenue_insights.domain.common.customer import Customer, InsightPayload
from revenue_insights.domain.common.evidence import Evidence
from revenue_insights.domain.common.revenue import RevenuePoint, sort_series
from revenue_insights.domain.primitives.customer_insight.config import CustomerInsightConfig
from revenue_insights.domain.primitives.customer_insight.evaluator import evaluate_customer_insight
from revenue_insights.domain.primitives.revenue_trend.config import RevenueTrendConfig
from revenue_insights.domain.primitives.revenue_trend.evaluator import (
    classify_trend,
    compute_totals,
    trend_series,
    yearly_series,
)
from revenue_insights.domain.primitives.revenue_trend.model import RevenueTotals, TrendClassification


@dataclass(frozen=True)
class CustomerReport:
    """Everything the customer detail view shows, derived from one customer record."""

    customer: Customer
    quarterly: list[RevenuePoint]
    yearly: list[RevenuePoint]
    totals: RevenueTotals
    trend: TrendClassification
    insight: InsightPayload
    insight_source: str
    insight_rule_id: str
    evidence: Evidence

    @property
    def materials_priced(self) -> int:
        return len(self.customer.price_suggestions)


def build_customer_report(
    customer: Customer,
    trend_config: Optional[RevenueTrendConfig] = None,
    insight_config: Optional[CustomerInsightConfig] = None,
) -> CustomerReport:
    yearly = yearly_series(customer)
    trend = classify_trend(trend_series(customer), trend_config)
    insight = evaluate_customer_insight(customer, trend, insight_config)
    return CustomerReport(
        customer=customer,
        quarterly=sort_series(customer.revenue_by_quarter),
        yearly=yearly,
        totals=compute_totals(yearly),
        trend=trend,
        insight=insight.payload,
        insight_source=insight.source,
        insight_rule_id=insight.rule_id,
        evidence=insight.evidence,
    )
