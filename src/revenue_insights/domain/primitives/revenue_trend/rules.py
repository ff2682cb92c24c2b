from __future__ import annotations

DECLINING = "DECLINING"
STABLE = "STABLE"
IMPROVING = "IMPROVING"

RULE_ID_INSUFFICIENT_POINTS = "revenue_trend.insufficient_points"
RULE_ID_NON_NUMERIC_POINTS = "revenue_trend.non_numeric_points"
RULE_ID_REVENUE_FALLING = "revenue_trend.revenue_falling"
RULE_ID_REVENUE_RISING = "revenue_trend.revenue_rising"
RULE_ID_REVENUE_FLAT = "revenue_trend.revenue_flat"
