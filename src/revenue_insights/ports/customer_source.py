from __future__ import annotations

from typing import Protocol

from revenue_insights.domain.common.customer import Customer


class CustomerSource(Protocol):
    """
    Fetches customers already normalized at the ingestion boundary.

    fetch_customer raises NotFound for an unknown id; both methods raise
    TransportError when the upstream fetch fails.
    """

    async def fetch_customers(self) -> list[Customer]: ...

    async def fetch_customer(self, customer_id: str) -> Customer: ...
