from __future__ import annotations

from revenue_insights.domain.primitives.customer_insight.config import CustomerInsightConfig
from revenue_insights.domain.primitives.customer_insight.evaluator import (
    INSIGHT_RULES,
    derive_insight,
    evaluate_customer_insight,
    match_rule,
)
from revenue_insights.domain.primitives.customer_insight.models import CustomerInsightResult, InsightRule
from revenue_insights.domain.primitives.customer_insight import rules

__all__ = [
    "CustomerInsightConfig",
    "CustomerInsightResult",
    "INSIGHT_RULES",
    "InsightRule",
    "derive_insight",
    "evaluate_customer_insight",
    "match_rule",
    "rules",
]
