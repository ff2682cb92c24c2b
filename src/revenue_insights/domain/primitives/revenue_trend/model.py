from __future__ import annotations

from dataclasses import dataclass

from revenue_insights.domain.primitives.revenue_trend import rules


@dataclass(frozen=True)
class RevenueTotals:
    total: float
    latest: float
    previous: float
    delta_abs: float
    delta_pct: float


@dataclass(frozen=True)
class TrendClassification:
    classification: str  # IMPROVING | DECLINING | STABLE
    delta: float
    rule_id: str = rules.RULE_ID_REVENUE_FLAT
    window_size: int = 0

    @property
    def declining(self) -> bool:
        return self.classification == rules.DECLINING

    @property
    def improving(self) -> bool:
        return self.classification == rules.IMPROVING
