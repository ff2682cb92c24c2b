from __future__ import annotations

from revenue_insights.adapters.ingestion.normalize import (
    normalize_cluster_label,
    normalize_customer_detail,
    normalize_customer_list,
    normalize_customer_record,
)

__all__ = [
    "normalize_cluster_label",
    "normalize_customer_detail",
    "normalize_customer_list",
    "normalize_customer_record",
]
