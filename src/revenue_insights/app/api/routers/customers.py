"""Router for customer table and detail report endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from revenue_insights.adapters.config.inline_config_provider import InlineConfigProvider
from revenue_insights.app.api.models.customers import CustomerReportResponse, CustomerTableResponse
from revenue_insights.app.api.repositories.customers_repo import CustomersRepository
from revenue_insights.app.factory import create_config_provider, create_customer_source
from revenue_insights.application.errors import NotFound, TransportError, UnknownSegmentError
from revenue_insights.ports.customer_source import CustomerSource
from revenue_insights.settings import Settings, get_settings

router = APIRouter()


def get_customer_source(settings: Settings = Depends(get_settings)) -> CustomerSource:
    """Dependency to provide the configured CustomerSource."""
    return create_customer_source(settings=settings)


def get_config_provider(settings: Settings = Depends(get_settings)) -> InlineConfigProvider:
    """Dependency to provide InlineConfigProvider."""
    return create_config_provider(settings)


def get_customers_repository(
    source: CustomerSource = Depends(get_customer_source),
    config_provider: InlineConfigProvider = Depends(get_config_provider),
) -> CustomersRepository:
    """Dependency to provide CustomersRepository."""
    return CustomersRepository(source, config_provider)


@router.get("/customers", response_model=CustomerTableResponse)
async def list_customers(
    segment: str | None = Query(None, description="Segment name to filter the table by"),
    page: int = Query(1, ge=1, description="1-based page number"),
    page_size: int | None = Query(None, ge=1, le=500, description="Rows per page (defaults to configured size)"),
    sort_by: str | None = Query(None, description="total_revenue, rank_in_cluster or purchasing_frequency"),
    descending: bool = Query(False, description="Sort descending"),
    repository: CustomersRepository = Depends(get_customers_repository),
) -> CustomerTableResponse:
    """
    Get one page of the customer table, the segment chart slices and a summary.

    An empty page (filter matches nothing, or page past the end) is a normal
    response with is_empty=true.
    """
    try:
        return await repository.get_customer_table(
            segment=segment,
            page=page,
            page_size=page_size,
            sort_by=sort_by,
            descending=descending,
        )
    except UnknownSegmentError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except TransportError as e:
        raise HTTPException(status_code=502, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.get("/customers/{customer_id}/report", response_model=CustomerReportResponse)
async def get_customer_report(
    customer_id: str,
    repository: CustomersRepository = Depends(get_customers_repository),
) -> CustomerReportResponse:
    """Get the detail report: revenue series, totals, trend, insight and evidence."""
    try:
        return await repository.get_customer_report(customer_id)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except TransportError as e:
        raise HTTPException(status_code=502, detail=str(e))
