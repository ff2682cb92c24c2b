from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RevenueTrendConfig:
    primitive_name: str = "revenue_trend"
    primitive_version: str = "1.0.0"
    window_size: int = 4  # most recent periods compared first-vs-last
    min_points: int = 2
