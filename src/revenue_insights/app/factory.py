from __future__ import annotations

import os
from typing import Optional

from revenue_insights.adapters.config.inline_config_provider import InlineConfigProvider
from revenue_insights.adapters.http.client import HttpCustomerSource
from revenue_insights.adapters.inputs.in_memory_customer_source import InMemoryCustomerSource
from revenue_insights.domain.common.ids import CorrelationId
from revenue_insights.ports.customer_source import CustomerSource
from revenue_insights.settings import Settings, get_settings


def create_customer_source(
    correlation_id: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> CustomerSource:
    """
    Factory function to create the customer source based on CUSTOMER_SOURCE environment variable.

    If CUSTOMER_SOURCE=memory, serves the bundled demo customers.
    Otherwise, fetches over HTTP (default).
    """
    settings = settings or get_settings()
    if os.getenv("CUSTOMER_SOURCE", "").lower() == "memory":
        return InMemoryCustomerSource()
    correlation_id_obj = CorrelationId(correlation_id) if correlation_id else None
    return HttpCustomerSource(settings, correlation_id_obj)


def create_config_provider(settings: Optional[Settings] = None) -> InlineConfigProvider:
    return InlineConfigProvider(settings or get_settings())
