from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Settings:
    """Runtime settings sourced from environment variables."""

    log_level: str = "INFO"
    # Customer sources
    customers_url: str = "http://localhost:8080/clustered-data"
    customer_detail_url: str = "http://localhost:8080/customer-insights"
    http_timeout_seconds: float = 10.0
    http_max_retries: int = 3
    http_retry_delay_seconds: float = 0.5
    # Dashboard defaults
    default_page_size: int = 20
    trend_window_periods: int = 4
    currency_symbol: str = "$"
    segments_config_path: Optional[str] = None

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            log_level=os.getenv("LOG_LEVEL", cls.log_level),
            customers_url=os.getenv("CUSTOMERS_URL", cls.customers_url),
            customer_detail_url=os.getenv("CUSTOMER_DETAIL_URL", cls.customer_detail_url),
            http_timeout_seconds=float(os.getenv("HTTP_TIMEOUT_SECONDS", cls.http_timeout_seconds)),
            http_max_retries=int(os.getenv("HTTP_MAX_RETRIES", cls.http_max_retries)),
            http_retry_delay_seconds=float(os.getenv("HTTP_RETRY_DELAY_SECONDS", cls.http_retry_delay_seconds)),
            default_page_size=int(os.getenv("DEFAULT_PAGE_SIZE", cls.default_page_size)),
            trend_window_periods=int(os.getenv("TREND_WINDOW_PERIODS", cls.trend_window_periods)),
            currency_symbol=os.getenv("CURRENCY_SYMBOL", cls.currency_symbol),
            segments_config_path=os.getenv("SEGMENTS_CONFIG_PATH"),
        )


def get_settings(_cache: dict[str, Settings] = {}) -> Settings:
    """Provide a simple cached settings object."""

    if "settings" not in _cache:
        _cache["settings"] = Settings.from_env()
    return _cache["settings"]
