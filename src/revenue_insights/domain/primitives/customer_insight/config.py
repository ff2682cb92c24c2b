from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CustomerInsightConfig:
    primitive_name: str = "customer_insight"
    primitive_version: str = "1.0.0"
    currency_symbol: str = "$"
