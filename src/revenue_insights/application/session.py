from __future__ import annotations

import logging
from typing import Optional

from revenue_insights.adapters.config.inline_config_provider import InlineConfigProvider
from revenue_insights.application.errors import DataNotReadyError, NotFound, TransportError
from revenue_insights.application.load_state import (
    FAILURE_NOT_FOUND,
    FAILURE_TRANSPORT,
    Failed,
    Loading,
    LoadState,
    Ready,
    RequestGeneration,
)
from revenue_insights.application.report import CustomerReport, build_customer_report
from revenue_insights.domain.common.customer import Customer
from revenue_insights.domain.filtering.coordinator import FilterCoordinator
from revenue_insights.domain.filtering.models import DashboardSummary, SegmentSlice, TablePage
from revenue_insights.ports.customer_source import CustomerSource

logger = logging.getLogger(__name__)


class DashboardSession:
    """
    Single owner of the dashboard's loaded data and filter state.

    Fetches are the only suspension points. Each one takes a generation
    token, and a response that completes after a newer request was issued is
    dropped instead of overwriting the newer state.
    """

    def __init__(self, source: CustomerSource, config_provider: Optional[InlineConfigProvider] = None) -> None:
        self.source = source
        provider = config_provider or InlineConfigProvider()
        self.trend_config = provider.get_trend_config()
        self.insight_config = provider.get_insight_config()
        self.coordinator = FilterCoordinator(provider.get_filter_config())
        self.customers_state: LoadState = Loading()
        self.detail_state: LoadState = Loading()
        self.detail_customer_id: Optional[str] = None
        self._customers_generation = RequestGeneration()
        self._detail_generation = RequestGeneration()

    async def load_customers(self) -> LoadState:
        token = self._customers_generation.issue()
        self.customers_state = Loading()
        try:
            customers = await self.source.fetch_customers()
        except TransportError as e:
            logger.error(f"Failed to load customers: {e}")
            state: LoadState = Failed(reason=str(e), kind=FAILURE_TRANSPORT)
        else:
            state = Ready(customers)

        if not self._customers_generation.is_current(token):
            logger.debug(f"Discarding stale customer list response (generation {token})")
            return self.customers_state
        self.customers_state = state
        return state

    async def open_customer(self, customer_id: str) -> LoadState:
        """Load the detail report for a customer; supersedes any detail fetch still in flight."""
        token = self._detail_generation.issue()
        self.detail_customer_id = customer_id
        self.detail_state = Loading()
        try:
            customer = await self.source.fetch_customer(customer_id)
        except NotFound as e:
            logger.info(str(e))
            state: LoadState = Failed(reason=str(e), kind=FAILURE_NOT_FOUND)
        except TransportError as e:
            logger.error(f"Failed to load customer {customer_id}: {e}")
            state = Failed(reason=str(e), kind=FAILURE_TRANSPORT)
        else:
            state = Ready(build_customer_report(customer, self.trend_config, self.insight_config))

        if not self._detail_generation.is_current(token):
            logger.debug(f"Discarding stale detail response for {customer_id} (generation {token})")
            return self.detail_state
        self.detail_state = state
        return state

    @property
    def customers(self) -> list[Customer]:
        if not isinstance(self.customers_state, Ready):
            raise DataNotReadyError(f"Customer list is {self.customers_state.status}")
        return self.customers_state.data

    @property
    def report(self) -> CustomerReport:
        if not isinstance(self.detail_state, Ready):
            raise DataNotReadyError(f"Customer detail is {self.detail_state.status}")
        return self.detail_state.data

    def table(self, sort_by: Optional[str] = None, descending: bool = False) -> TablePage:
        return self.coordinator.table(self.customers, sort_by=sort_by, descending=descending)

    def segment_slices(self) -> list[SegmentSlice]:
        return self.coordinator.segment_slices(self.customers)

    def summary(self) -> DashboardSummary:
        return self.coordinator.summarize(self.customers)
