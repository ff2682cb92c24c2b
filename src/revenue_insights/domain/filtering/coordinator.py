from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable, Optional

from revenue_insights.application.errors import UnknownSegmentError
from revenue_insights.domain.common.customer import Customer
from revenue_insights.domain.filtering.models import (
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
from revenue_insights.domain.filtering.selection import filter_customers, paginate, sort_customers

logger = logging.getLogger(__name__)


class FilterCoordinator:
    """
    Owns the cross-filter state linking the segment chart to the customer table.

    Every transition replaces ``state`` with a new frozen FilterState, so any
    earlier snapshot can be kept for replay or comparison.
    """

    def __init__(self, config: Optional[FilterConfig] = None) -> None:
        self.config = config or FilterConfig()
        self._segments: dict[str, Segment] = {segment.name: segment for segment in self.config.segments}
        self.state = FilterState(pagination=Pagination(page=1, page_size=self.config.default_page_size))

    # Queries

    def visible_segments(self) -> list[Segment]:
        return [
            segment
            for segment in self.config.segments
            if segment.name not in self.state.hidden_segment_names
        ]

    @property
    def emphasized_index(self) -> int:
        """Hover wins over the committed selection for visual emphasis."""
        if self.state.hovered_index != NO_INDEX:
            return self.state.hovered_index
        return self.state.selected_index

    def visible_rows(self, customers: Iterable[Customer]) -> list[Customer]:
        return filter_customers(customers, self.state.active_selection)

    def table(
        self,
        customers: Iterable[Customer],
        sort_by: Optional[str] = None,
        descending: bool = False,
    ) -> TablePage:
        filtered = sort_customers(self.visible_rows(customers), sort_by, descending)
        pagination = self.state.pagination
        rows = [
            TableRow(customer=customer, detail_target=self.detail_target(customer))
            for customer in paginate(filtered, pagination)
        ]
        return TablePage(rows=rows, total=len(filtered), page=pagination.page, page_size=pagination.page_size)

    def detail_target(self, customer: Customer) -> DetailTarget:
        path = self.config.detail_path_template.format(customer_id=customer.customer_id)
        return DetailTarget(customer_id=customer.customer_id, path=path)

    def segment_slices(self, customers: Iterable[Customer]) -> list[SegmentSlice]:
        counts: dict[str, int] = {}
        for customer in customers:
            counts[customer.cluster_label] = counts.get(customer.cluster_label, 0) + 1
        return [
            SegmentSlice(name=segment.name, index=index, customer_count=counts.get(segment.name, 0))
            for index, segment in enumerate(self.visible_segments())
        ]

    def summarize(self, customers: Iterable[Customer]) -> DashboardSummary:
        customers = list(customers)
        selection = self.state.active_selection
        return DashboardSummary(
            customer_count=len(customers),
            total_revenue=float(sum(customer.total_revenue for customer in customers)),
            active_segment=selection.name if selection else None,
        )

    # Transitions

    def select_segment(self, name: str, index: int) -> FilterState:
        """Click on a segment: toggles off when it is already the active filter."""
        segment = self._require_segment(name)
        active = self.state.active_selection
        if active is not None and active.name == name:
            self.state = replace(
                self.state,
                active_selection=None,
                selected_index=NO_INDEX,
                pagination=replace(self.state.pagination, page=1),
            )
            logger.debug(f"Cleared segment filter {name}")
            return self.state
        return self._commit(segment, index)

    def hover_segment(self, index: Optional[int]) -> FilterState:
        hovered = index if index is not None and self._is_visible_index(index) else NO_INDEX
        self.state = replace(self.state, hovered_index=hovered)
        return self.state

    def toggle_legend(self, name: str) -> FilterState:
        """Show or hide a segment in the chart; the active table filter is left alone."""
        self._require_segment(name)
        hovered_name = self._name_at(self.state.hovered_index)
        active = self.state.active_selection
        selected_name = active.name if active is not None else None

        hidden = set(self.state.hidden_segment_names)
        if name in hidden:
            hidden.remove(name)
        else:
            hidden.add(name)
        self.state = replace(self.state, hidden_segment_names=frozenset(hidden))

        # Visible positions shift, so re-resolve the indices by segment name.
        self.state = replace(
            self.state,
            hovered_index=self._visible_index_of(hovered_name),
            selected_index=self._visible_index_of(selected_name),
        )
        return self.state

    def navigate(self, direction: str) -> FilterState:
        """Keyboard navigation: move through visible segments and commit the one reached."""
        if direction not in (NEXT, PREV):
            raise ValueError(f"Unknown navigation direction {direction!r}")
        visible = self.visible_segments()
        if not visible:
            return self.state

        current = self.state.selected_index
        if current == NO_INDEX:
            target = 0 if direction == NEXT else len(visible) - 1
        else:
            step = 1 if direction == NEXT else -1
            target = (current + step) % len(visible)
        return self._commit(visible[target], target)

    def activate_at_selected_index(self) -> FilterState:
        name = self._name_at(self.state.selected_index)
        if name is None:
            return self.state
        return self.select_segment(name, self.state.selected_index)

    def clear_selection(self) -> FilterState:
        self.state = replace(
            self.state,
            active_selection=None,
            selected_index=NO_INDEX,
            pagination=replace(self.state.pagination, page=1),
        )
        return self.state

    def set_page(self, page: int, page_size: Optional[int] = None) -> FilterState:
        page_size = self.state.pagination.page_size if page_size is None else page_size
        if page < 1:
            raise ValueError(f"page must be >= 1, got {page}")
        if page_size < 1:
            raise ValueError(f"page_size must be > 0, got {page_size}")
        self.state = replace(self.state, pagination=Pagination(page=page, page_size=page_size))
        return self.state

    # Helpers

    def _commit(self, segment: Segment, index: int) -> FilterState:
        visible_index = index if self._name_at(index) == segment.name else self._visible_index_of(segment.name)
        self.state = replace(
            self.state,
            active_selection=SegmentSelection(name=segment.name, value_range=segment.value_range),
            selected_index=visible_index,
            pagination=replace(self.state.pagination, page=1),
        )
        logger.debug(f"Applied segment filter {segment.name} at index {visible_index}")
        return self.state

    def _require_segment(self, name: str) -> Segment:
        if name not in self._segments:
            raise UnknownSegmentError(f"Segment {name} is not defined; expected one of {', '.join(self._segments)}")
        return self._segments[name]

    def _is_visible_index(self, index: int) -> bool:
        return 0 <= index < len(self.visible_segments())

    def _name_at(self, index: int) -> Optional[str]:
        if not self._is_visible_index(index):
            return None
        return self.visible_segments()[index].name

    def _visible_index_of(self, name: Optional[str]) -> int:
        if name is None:
            return NO_INDEX
        for index, segment in enumerate(self.visible_segments()):
            if segment.name == name:
                return index
        return NO_INDEX
