from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Optional

from revenue_insights.domain.common.customer import CLUSTER_LABELS, Customer
from revenue_insights.domain.common.ids import CustomerId

NO_INDEX = -1

# Keyboard directions
NEXT = "next"
PREV = "prev"


@dataclass(frozen=True)
class Segment:
    """A named slice of the aggregate chart and the revenue range it filters on."""

    name: str
    value_range: tuple[float, float] = (0.0, math.inf)  # [min, max)


DEFAULT_SEGMENTS: tuple[Segment, ...] = tuple(Segment(name=label) for label in CLUSTER_LABELS)


@dataclass(frozen=True)
class FilterConfig:
    segments: tuple[Segment, ...] = DEFAULT_SEGMENTS
    default_page_size: int = 20
    detail_path_template: str = "/customers/{customer_id}"


@dataclass(frozen=True)
class SegmentSelection:
    name: str
    value_range: tuple[float, float]


@dataclass(frozen=True)
class Pagination:
    page: int = 1
    page_size: int = 20


@dataclass(frozen=True)
class FilterState:
    active_selection: Optional[SegmentSelection] = None
    hovered_index: int = NO_INDEX
    selected_index: int = NO_INDEX
    hidden_segment_names: frozenset[str] = field(default_factory=frozenset)
    pagination: Pagination = field(default_factory=Pagination)


@dataclass(frozen=True)
class DetailTarget:
    customer_id: CustomerId
    path: str


@dataclass(frozen=True)
class TableRow:
    customer: Customer
    detail_target: DetailTarget


@dataclass(frozen=True)
class TablePage:
    rows: list[TableRow]
    total: int
    page: int
    page_size: int

    @property
    def is_empty(self) -> bool:
        return not self.rows


@dataclass(frozen=True)
class SegmentSlice:
    name: str
    index: int  # position among visible segments
    customer_count: int


@dataclass(frozen=True)
class DashboardSummary:
    customer_count: int
    total_revenue: float
    active_segment: Optional[str]
