from __future__ import annotations

from typing import Iterable, Optional

from revenue_insights.domain.common.customer import Customer
from revenue_insights.domain.filtering.models import Pagination, SegmentSelection

SORTABLE_FIELDS = ("total_revenue", "rank_in_cluster", "purchasing_frequency")


def matches_selection(customer: Customer, selection: SegmentSelection) -> bool:
    low, high = selection.value_range
    return customer.cluster_label == selection.name and low <= customer.total_revenue < high


def filter_customers(customers: Iterable[Customer], selection: Optional[SegmentSelection]) -> list[Customer]:
    """
    Apply the active selection as a predicate, preserving input order.

    No selection means no filter.
    """
    if selection is None:
        return list(customers)
    return [customer for customer in customers if matches_selection(customer, selection)]


def sort_customers(customers: list[Customer], sort_by: Optional[str], descending: bool = False) -> list[Customer]:
    """Stable sort on one of the table's sortable columns; ties keep customer_id order."""
    if sort_by is None:
        return list(customers)
    if sort_by not in SORTABLE_FIELDS:
        raise ValueError(f"Cannot sort by {sort_by!r}; expected one of {', '.join(SORTABLE_FIELDS)}")
    by_id = sorted(customers, key=lambda customer: customer.customer_id)
    return sorted(by_id, key=lambda customer: getattr(customer, sort_by), reverse=descending)


def paginate(customers: list[Customer], pagination: Pagination) -> list[Customer]:
    start = (pagination.page - 1) * pagination.page_size
    return customers[start : start + pagination.page_size]
