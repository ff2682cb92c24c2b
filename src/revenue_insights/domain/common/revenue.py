from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence


@dataclass(frozen=True)
class RevenuePoint:
    period_key: str  # "2024-Q1" or "2024", zero-padded so keys sort chronologically
    value: float


RevenueSeries = Sequence[RevenuePoint]


def sort_series(series: RevenueSeries) -> list[RevenuePoint]:
    """Return the points in ascending period order."""
    return sorted(series, key=lambda point: point.period_key)


def series_from_mapping(mapping: dict[str, float]) -> list[RevenuePoint]:
    return sort_series([RevenuePoint(period_key=key, value=value) for key, value in mapping.items()])
