from __future__ import annotations

from revenue_insights.domain.primitives.revenue_trend.config import RevenueTrendConfig
from revenue_insights.domain.primitives.revenue_trend.evaluator import (
    classify_trend,
    compute_totals,
    parse_period_year,
    rollup_to_years,
    trend_series,
    yearly_series,
)
from revenue_insights.domain.primitives.revenue_trend.model import RevenueTotals, TrendClassification
from revenue_insights.domain.primitives.revenue_trend import rules

__all__ = [
    "RevenueTrendConfig",
    "RevenueTotals",
    "TrendClassification",
    "classify_trend",
    "compute_totals",
    "parse_period_year",
    "rollup_to_years",
    "trend_series",
    "yearly_series",
    "rules",
]
