from __future__ import annotations

import json
import math
from pathlib import Path
from typing import Optional

from revenue_insights.adapters.ingestion.validation import validate_payload
from revenue_insights.application.errors import InvalidPayloadError
from revenue_insights.domain.filtering.models import DEFAULT_SEGMENTS, FilterConfig, Segment
from revenue_insights.domain.primitives.customer_insight.config import CustomerInsightConfig
from revenue_insights.domain.primitives.revenue_trend.config import RevenueTrendConfig
from revenue_insights.settings import Settings, get_settings

SEGMENTS_SCHEMA = "segments.schema.json"


class InlineConfigProvider:
    """Returns engine configs from settings, with the segment taxonomy optionally read from JSON."""

    def __init__(self, settings: Optional[Settings] = None, segments_path: Optional[str] = None) -> None:
        self.settings = settings or get_settings()
        path = segments_path or self.settings.segments_config_path
        self.segments_path = Path(path) if path else None

    def get_trend_config(self) -> RevenueTrendConfig:
        return RevenueTrendConfig(window_size=self.settings.trend_window_periods)

    def get_insight_config(self) -> CustomerInsightConfig:
        return CustomerInsightConfig(currency_symbol=self.settings.currency_symbol)

    def get_filter_config(self) -> FilterConfig:
        if self.segments_path is None:
            return FilterConfig(segments=DEFAULT_SEGMENTS, default_page_size=self.settings.default_page_size)
        if not self.segments_path.exists():
            raise FileNotFoundError(f"Segments config not found: {self.segments_path}")

        with self.segments_path.open(encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid JSON in segments config {self.segments_path}: {e}") from e
        try:
            validate_payload(data, SEGMENTS_SCHEMA)
        except InvalidPayloadError as e:
            raise ValueError(f"Invalid segments config {self.segments_path}: {e}") from e

        segments = tuple(
            Segment(
                name=item["name"],
                value_range=(
                    float(item.get("min", 0.0)),
                    math.inf if item.get("max") is None else float(item["max"]),
                ),
            )
            for item in data["segments"]
        )
        self._check_segments(segments)
        return FilterConfig(
            segments=segments,
            default_page_size=int(data.get("page_size", self.settings.default_page_size)),
        )

    def _check_segments(self, segments: tuple[Segment, ...]) -> None:
        names = [segment.name for segment in segments]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"Duplicate segment names in {self.segments_path}: {', '.join(duplicates)}")
        for segment in segments:
            low, high = segment.value_range
            if low > high:
                raise ValueError(f"Segment {segment.name} in {self.segments_path} has min {low} above max {high}")

