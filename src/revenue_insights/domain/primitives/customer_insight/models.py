from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from revenue_insights.domain.common.customer import Customer, InsightPayload
from revenue_insights.domain.common.evidence import Evidence
from revenue_insights.domain.primitives.revenue_trend.model import TrendClassification

InsightPredicate = Callable[[Customer, TrendClassification], bool]


@dataclass(frozen=True)
class InsightRule:
    """One heuristic: when ``applies`` holds, the narrative fields below are used."""

    rule_id: str
    applies: InsightPredicate
    churn_decision: str
    retention_strategy: str
    offer: str
    recommendations: tuple[str, ...]


@dataclass(frozen=True)
class CustomerInsightResult:
    payload: InsightPayload
    source: str  # OVERRIDE | HEURISTIC
    rule_id: str
    evidence: Evidence
