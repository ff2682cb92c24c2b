from __future__ import annotations

from typing import Any, Optional

from revenue_insights.adapters.ingestion.normalize import normalize_customer_detail, normalize_customer_list
from revenue_insights.application.errors import NotFound
from revenue_insights.domain.common.customer import Customer

DEMO_QUARTERLY_REVENUE = {
    "2024-Q1": 1050000,
    "2024-Q2": 1320000,
    "2024-Q3": 1210000,
    "2024-Q4": 1480000,
    "2025-Q1": 1060000,
    "2025-Q2": 980000,
    "2025-Q3": 760000,
    "2025-Q4": 720000,
}

DEMO_RECORDS = [
    {"customer": "C-1001", "cluster_name": "high_revenue", "total_revenue": 9580000.0,
     "revenue_rank_in_cluster": 1, "purchasing_frequency": 42},
    {"customer": "C-1002", "cluster_name": "mixed_revenue", "total_revenue": 410000.0,
     "revenue_rank_in_cluster": 3, "purchasing_frequency": 12},
    {"customerNo": "C-1003", "cluster": "Low_Revenue", "totalRevenue": 18000.0,
     "rankInCluster": 7, "purchasingFreq": 2},
]


class InMemoryCustomerSource:
    """Serves raw records from memory through the same ingestion step as the HTTP source."""

    def __init__(
        self,
        records: Optional[list[dict[str, Any]]] = None,
        details: Optional[dict[str, dict[str, Any]]] = None,
    ) -> None:
        self.records = records if records is not None else DEMO_RECORDS
        self.details = details if details is not None else {}

    async def fetch_customers(self) -> list[Customer]:
        return normalize_customer_list(list(self.records))

    async def fetch_customer(self, customer_id: str) -> Customer:
        if customer_id in self.details:
            return normalize_customer_detail(self.details[customer_id], customer_id=customer_id)
        for record in self.records:
            record_id = record.get("customer", record.get("customerNo"))
            if str(record_id) == str(customer_id):
                # Provide demo quarterly revenue when no detail payload was supplied
                return normalize_customer_detail(
                    {**record, "revenue_by_quarter": DEMO_QUARTERLY_REVENUE},
                    customer_id=customer_id,
                )
        raise NotFound(customer_id)
