from __future__ import annotations

import logging
import math
import re
from typing import Optional

from revenue_insights.application.errors import MalformedPeriodKey
from revenue_insights.domain.common.customer import Customer
from revenue_insights.domain.common.revenue import RevenuePoint, RevenueSeries, sort_series
from revenue_insights.domain.primitives.revenue_trend.config import RevenueTrendConfig
from revenue_insights.domain.primitives.revenue_trend.model import RevenueTotals, TrendClassification
from revenue_insights.domain.primitives.revenue_trend import rules

logger = logging.getLogger(__name__)

_YEAR_PREFIX = re.compile(r"^(\d{4})(?:-|$)")


def parse_period_year(period_key: str) -> str:
    """Return the leading four-digit year of a period key ("2024-Q1" -> "2024")."""
    match = _YEAR_PREFIX.match(str(period_key).strip())
    if match is None:
        raise MalformedPeriodKey(period_key)
    return match.group(1)


def rollup_to_years(series: RevenueSeries) -> list[RevenuePoint]:
    """
    Sum quarterly points into one point per year, in ascending year order.

    Points whose key has no parsable year are logged and skipped so a single
    bad record never blanks the whole rollup.
    """
    yearly: dict[str, float] = {}
    for point in series:
        try:
            year = parse_period_year(point.period_key)
        except MalformedPeriodKey as e:
            logger.warning(f"Skipping revenue point during rollup: {e}")
            continue
        yearly[year] = yearly.get(year, 0.0) + point.value
    return [RevenuePoint(period_key=year, value=yearly[year]) for year in sorted(yearly)]


def compute_totals(yearly_series: RevenueSeries) -> RevenueTotals:
    """
    Compute total, latest, previous and the latest-vs-previous delta.

    delta_pct is 0 when there is no previous revenue rather than NaN or inf.
    """
    values = [point.value for point in sort_series(yearly_series)]
    total = float(sum(values))
    latest = float(values[-1]) if values else 0.0
    previous = float(values[-2]) if len(values) >= 2 else 0.0
    delta_abs = latest - previous
    delta_pct = (delta_abs / previous) * 100 if previous != 0 else 0.0
    return RevenueTotals(
        total=total,
        latest=latest,
        previous=previous,
        delta_abs=delta_abs,
        delta_pct=delta_pct,
    )


def _is_numeric(value: object) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def classify_trend(series: RevenueSeries, config: Optional[RevenueTrendConfig] = None) -> TrendClassification:
    """
    Classify the recent revenue trend as IMPROVING, DECLINING or STABLE.

    Only the first and last points of the most recent window are compared.
    """
    config = config or RevenueTrendConfig()
    window = sort_series(series)[-config.window_size:]

    if len(window) < config.min_points:
        return TrendClassification(
            classification=rules.STABLE,
            delta=0.0,
            rule_id=rules.RULE_ID_INSUFFICIENT_POINTS,
            window_size=len(window),
        )
    if not all(_is_numeric(point.value) for point in window):
        return TrendClassification(
            classification=rules.STABLE,
            delta=0.0,
            rule_id=rules.RULE_ID_NON_NUMERIC_POINTS,
            window_size=len(window),
        )

    first = window[0].value
    last = window[-1].value
    delta = float(last - first)
    if last < first:
        classification, rule_id = rules.DECLINING, rules.RULE_ID_REVENUE_FALLING
    elif last > first:
        classification, rule_id = rules.IMPROVING, rules.RULE_ID_REVENUE_RISING
    else:
        classification, rule_id = rules.STABLE, rules.RULE_ID_REVENUE_FLAT

    return TrendClassification(
        classification=classification,
        delta=delta,
        rule_id=rule_id,
        window_size=len(window),
    )


def yearly_series(customer: Customer) -> list[RevenuePoint]:
    """Upstream yearly figures when supplied, otherwise the rollup of the quarters."""
    if customer.revenue_by_year:
        return sort_series(customer.revenue_by_year)
    return rollup_to_years(customer.revenue_by_quarter)


def trend_series(customer: Customer) -> list[RevenuePoint]:
    return sort_series(customer.revenue_by_quarter or customer.revenue_by_year)
