from __future__ import annotations

"""
Cross-filter coordination between the segment chart and the customer table.

Usage Example:
    ```python
    from revenue_insights.domain.filtering import FilterCoordinator

    coordinator = FilterCoordinator()
    coordinator.select_segment("High", 0)      # filter the table to High
    coordinator.toggle_legend("Mixed")         # hide Mixed from the chart only
    coordinator.navigate("next")               # keyboard: commit the next visible segment
    page = coordinator.table(customers, sort_by="total_revenue", descending=True)
    ```
"""

from revenue_insights.domain.filtering.coordinator import FilterCoordinator
from revenue_insights.domain.filtering.models import (
    DEFAULT_SEGMENTS,
    NEXT,
    NO_INDEX,
    PREV,
    DashboardSummary,
    DetailTarget,
    FilterConfig,
    FilterState,
    Pagination,
    Segment,
    SegmentSelection,
    SegmentSlice,
    TablePage,
    TableRow,
)
from revenue_insights.domain.filtering.selection import (
    SORTABLE_FIELDS,
    filter_customers,
    matches_selection,
    paginate,
    sort_customers,
)

__all__ = [
    "FilterCoordinator",
    # Models
    "DEFAULT_SEGMENTS",
    "NEXT",
    "NO_INDEX",
    "PREV",
    "DashboardSummary",
    "DetailTarget",
    "FilterConfig",
    "FilterState",
    "Pagination",
    "Segment",
    "SegmentSelection",
    "SegmentSlice",
    "TablePage",
    "TableRow",
    # Selection
    "SORTABLE_FIELDS",
    "filter_customers",
    "matches_selection",
    "paginate",
    "sort_customers",
]
