"""Repository turning dashboard session state into API response models."""

from __future__ import annotations

import logging
from typing import Optional

from revenue_insights.adapters.config.inline_config_provider import InlineConfigProvider
from revenue_insights.app.api.models.customers import (
    CustomerReportResponse,
    CustomerRow,
    CustomerTableResponse,
    DashboardSummaryModel,
    EvidenceRecord,
    InsightModel,
    NoteModel,
    PriceSuggestionModel,
    RevenuePointModel,
    RevenueTotalsModel,
    SegmentSliceItem,
    TrendModel,
)
from revenue_insights.application.errors import NotFound, TransportError
from revenue_insights.application.load_state import FAILURE_NOT_FOUND, Failed
from revenue_insights.application.report import CustomerReport
from revenue_insights.application.session import DashboardSession
from revenue_insights.domain.common.revenue import RevenuePoint
from revenue_insights.domain.filtering.models import NO_INDEX, TableRow
from revenue_insights.ports.customer_source import CustomerSource

logger = logging.getLogger(__name__)


def _row_to_model(row: TableRow) -> CustomerRow:
    customer = row.customer
    return CustomerRow(
        customer_id=customer.customer_id,
        cluster_label=customer.cluster_label,
        total_revenue=customer.total_revenue,
        rank_in_cluster=customer.rank_in_cluster,
        purchasing_frequency=customer.purchasing_frequency,
        detail_path=row.detail_target.path,
    )


def _points(series: list[RevenuePoint]) -> list[RevenuePointModel]:
    return [RevenuePointModel(period_key=point.period_key, value=point.value) for point in series]


def _report_to_model(report: CustomerReport) -> CustomerReportResponse:
    customer = report.customer
    return CustomerReportResponse(
        customer_id=customer.customer_id,
        cluster_label=customer.cluster_label,
        total_revenue=customer.total_revenue,
        churn_label=customer.churn_label,
        product_combination=customer.product_combination,
        purchase_details=customer.purchase_details,
        revenue_by_quarter=_points(report.quarterly),
        revenue_by_year=_points(report.yearly),
        totals=RevenueTotalsModel(**vars(report.totals)),
        trend=TrendModel(**vars(report.trend)),
        insight=InsightModel(
            churn_decision=report.insight.churn_decision,
            retention_strategy=report.insight.retention_strategy,
            offer=report.insight.offer,
            observation=report.insight.observation,
            recommendations=list(report.insight.recommendations),
            source=report.insight_source,
            rule_id=report.insight_rule_id,
        ),
        evidence=EvidenceRecord(
            evidence_id=report.evidence.evidence_id,
            rule_ids=list(report.evidence.rule_ids),
            thresholds=dict(report.evidence.thresholds),
            references=dict(report.evidence.references),
            observed_at=report.evidence.observed_at,
        ),
        price_suggestions=[PriceSuggestionModel(**vars(item)) for item in customer.price_suggestions],
        observations=[NoteModel(key=note.key, value=note.value) for note in customer.observations],
        recommendations=[NoteModel(key=note.key, value=note.value) for note in customer.recommendations],
    )


class CustomersRepository:
    """Runs one dashboard session per request against a customer source."""

    def __init__(self, source: CustomerSource, config_provider: Optional[InlineConfigProvider] = None) -> None:
        self.session = DashboardSession(source, config_provider)

    async def get_customer_table(
        self,
        segment: Optional[str] = None,
        page: int = 1,
        page_size: Optional[int] = None,
        sort_by: Optional[str] = None,
        descending: bool = False,
    ) -> CustomerTableResponse:
        """
        Load customers and return one table page with the chart slices.

        Raises:
            TransportError: the customer list could not be fetched
            UnknownSegmentError: segment is not part of the taxonomy
            ValueError: invalid page, page size or sort field
        """
        state = await self.session.load_customers()
        if isinstance(state, Failed):
            raise TransportError(state.reason)

        coordinator = self.session.coordinator
        if segment:
            coordinator.select_segment(segment, NO_INDEX)
        coordinator.set_page(page, page_size)

        table = self.session.table(sort_by=sort_by, descending=descending)
        summary = self.session.summary()
        return CustomerTableResponse(
            rows=[_row_to_model(row) for row in table.rows],
            total=table.total,
            page=table.page,
            page_size=table.page_size,
            is_empty=table.is_empty,
            segments=[SegmentSliceItem(**vars(item)) for item in self.session.segment_slices()],
            summary=DashboardSummaryModel(**vars(summary)),
        )

    async def get_customer_report(self, customer_id: str) -> CustomerReportResponse:
        """
        Load one customer and return its detail report.

        Raises:
            NotFound: no customer has this id
            TransportError: the detail could not be fetched
        """
        state = await self.session.open_customer(customer_id)
        if isinstance(state, Failed):
            if state.kind == FAILURE_NOT_FOUND:
                raise NotFound(customer_id)
            raise TransportError(state.reason)
        return _report_to_model(self.session.report)
